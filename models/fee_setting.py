# models/fee_setting.py
import enum
from sqlalchemy import Column, Integer, Numeric, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class FeeType(str, enum.Enum):
     """Configurable move-in and recurring fees."""
     PET_DEPOSIT = "pet_deposit"
     PET_RENT = "pet_rent"
     CLEANING_FEE = "cleaning_fee"
     APPLICATION_FEE = "application_fee"
     SECURITY_DEPOSIT = "security_deposit"  # amount is a number of months of rent
     LAST_MONTH_RENT = "last_month_rent"  # enabled means "required"; amount unused


class FeeSetting(Base):
     """
     FeeSetting model - a landlord's default for one fee type.

     When apply_to_all is false the fee only applies to the properties
     listed in selected_property_ids.
     """
     __tablename__ = "fee_settings"
     __table_args__ = (
          UniqueConstraint("landlord_id", "fee_type", name="uq_fee_settings_landlord_fee_type"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     fee_type = Column(enum_type(FeeType, "fee_setting_type"), nullable=False)
     enabled = Column(Boolean, default=False, nullable=False)
     amount = Column(Numeric(12, 2), default=0, nullable=False)
     apply_to_all = Column(Boolean, default=True, nullable=False)
     selected_property_ids = Column(JSON, default=list, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<FeeSetting(landlord_id={self.landlord_id}, fee_type='{self.fee_type}', enabled={self.enabled})>"


class PropertyFeeOverride(Base):
     """
     PropertyFeeOverride model - per-property exception to a landlord default.

     no_fee forces the fee to zero; otherwise a non-null amount replaces
     the default amount.
     """
     __tablename__ = "property_fee_overrides"
     __table_args__ = (
          UniqueConstraint("property_id", "fee_type", name="uq_property_fee_overrides_property_fee_type"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     fee_type = Column(enum_type(FeeType, "fee_override_type"), nullable=False)
     no_fee = Column(Boolean, default=False, nullable=False)
     amount = Column(Numeric(12, 2), nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     property = relationship("Property", back_populates="fee_overrides")

     def __repr__(self):
          return f"<PropertyFeeOverride(property_id={self.property_id}, fee_type='{self.fee_type}', no_fee={self.no_fee})>"
