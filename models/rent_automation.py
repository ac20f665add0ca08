# models/rent_automation.py
import enum
from sqlalchemy import Column, Integer, Text, Numeric, Boolean, DateTime, ForeignKey, JSON, func
from .base import Base, enum_type


class LateFeeType(str, enum.Enum):
     FLAT = "flat"
     PERCENTAGE = "percentage"


class RecurringInterval(str, enum.Enum):
     DAILY = "daily"
     WEEKLY = "weekly"


class RentReminderSettings(Base):
     """Reminder schedule: emails N days before each due date."""
     __tablename__ = "rent_reminder_settings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, unique=True)
     enabled = Column(Boolean, default=False, nullable=False)
     reminder_days_before = Column(JSON, nullable=False)  # e.g. [7, 3, 1]
     reminder_channels = Column(JSON, nullable=False)  # e.g. ["email"]
     custom_message = Column(Text, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<RentReminderSettings(landlord_id={self.landlord_id}, enabled={self.enabled})>"


class LateFeeSettings(Base):
     """Late-fee policy applied by the daily rent automation job."""
     __tablename__ = "late_fee_settings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, unique=True)
     enabled = Column(Boolean, default=False, nullable=False)
     grace_period_days = Column(Integer, default=5, nullable=False)
     fee_type = Column(enum_type(LateFeeType, "late_fee_type"), default=LateFeeType.FLAT, nullable=False)
     fee_amount = Column(Numeric(12, 2), default=50, nullable=False)
     max_fee = Column(Numeric(12, 2), nullable=True)
     recurring_fee = Column(Boolean, default=False, nullable=False)
     recurring_interval = Column(enum_type(RecurringInterval, "late_fee_interval"), nullable=True)
     notify_tenant = Column(Boolean, default=True, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<LateFeeSettings(landlord_id={self.landlord_id}, enabled={self.enabled}, fee_type='{self.fee_type}')>"
