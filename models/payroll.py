# models/payroll.py
import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class PayPeriodType(str, enum.Enum):
     WEEKLY = "weekly"
     BIWEEKLY = "biweekly"
     SEMIMONTHLY = "semimonthly"
     MONTHLY = "monthly"


class TimesheetStatus(str, enum.Enum):
     """draft -> submitted -> approved | rejected; approved -> paid."""
     DRAFT = "draft"
     SUBMITTED = "submitted"
     APPROVED = "approved"
     REJECTED = "rejected"
     PAID = "paid"


class TeamPaymentType(str, enum.Enum):
     PAYROLL = "payroll"
     BONUS = "bonus"


class PayrollSettings(Base):
     """Landlord-wide payroll rules. Thresholds are in hours."""
     __tablename__ = "payroll_settings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, unique=True)
     pay_period_type = Column(
          enum_type(PayPeriodType, "pay_period_type"),
          default=PayPeriodType.BIWEEKLY,
          nullable=False
     )
     pay_period_start_day = Column(Integer, default=1, nullable=False)
     overtime_threshold = Column(Numeric(5, 2), default=40, nullable=False)  # hours per week
     daily_overtime_threshold = Column(Numeric(5, 2), nullable=True)  # hours per day
     overtime_multiplier = Column(Numeric(4, 2), default=1.5, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<PayrollSettings(landlord_id={self.landlord_id}, period='{self.pay_period_type}')>"


class Timesheet(Base):
     """
     Timesheet model - hours worked by one member over a pay period,
     summed from completed time entries.
     """
     __tablename__ = "timesheets"
     __table_args__ = (
          UniqueConstraint("team_member_id", "period_start", "period_end", name="uq_timesheets_member_period"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id"), nullable=False, index=True)

     period_start = Column(Date, nullable=False)
     period_end = Column(Date, nullable=False)
     total_hours = Column(Numeric(7, 2), default=0, nullable=False)
     regular_hours = Column(Numeric(7, 2), default=0, nullable=False)
     overtime_hours = Column(Numeric(7, 2), default=0, nullable=False)

     status = Column(
          enum_type(TimesheetStatus, "timesheet_status"),
          default=TimesheetStatus.DRAFT,
          nullable=False,
          index=True
     )
     submitted_at = Column(DateTime, nullable=True)
     reviewed_at = Column(DateTime, nullable=True)
     review_notes = Column(Text, nullable=True)
     paid_at = Column(DateTime, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     team_member = relationship("TeamMember")
     time_entries = relationship("TimeEntry", back_populates="timesheet")

     def __repr__(self):
          return f"<Timesheet(id={self.id}, member={self.team_member_id}, {self.period_start}..{self.period_end}, status='{self.status}')>"


class TeamPayment(Base):
     """Money paid out of the landlord wallet to a team member."""
     __tablename__ = "team_payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id"), nullable=False, index=True)
     timesheet_id = Column(Integer, ForeignKey("timesheets.id"), nullable=True)

     payment_type = Column(
          enum_type(TeamPaymentType, "team_payment_type"),
          default=TeamPaymentType.PAYROLL,
          nullable=False
     )
     amount = Column(Numeric(12, 2), nullable=False)
     platform_fee = Column(Numeric(12, 2), default=0, nullable=False)
     description = Column(String(200), nullable=True)
     status = Column(String(20), default="completed", nullable=False)
     period_start = Column(Date, nullable=True)
     period_end = Column(Date, nullable=True)
     paid_at = Column(DateTime, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     team_member = relationship("TeamMember")

     def __repr__(self):
          return f"<TeamPayment(id={self.id}, member={self.team_member_id}, amount={self.amount}, type='{self.payment_type}')>"
