# models/lease.py
import enum
from sqlalchemy import Column, Integer, Numeric, Date, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class LeaseStatus(str, enum.Enum):
     ACTIVE = "active"
     ENDED = "ended"
     TERMINATED = "terminated"


class Lease(Base):
     """
     Lease model - rental agreement between a tenant and a unit.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     unit_id = Column(Integer, ForeignKey("property_units.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)

     # Pricing
     rent_amount = Column(Numeric(12, 2), nullable=False)
     rent_due_day = Column(Integer, default=1, nullable=False)
     has_pets = Column(Boolean, default=False, nullable=False)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)
     status = Column(
          enum_type(LeaseStatus, "lease_status"),
          default=LeaseStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     unit = relationship("PropertyUnit", back_populates="leases")
     tenant = relationship("Tenant", back_populates="leases")
     rent_payments = relationship("RentPayment", back_populates="lease", cascade="all, delete-orphan")

     @property
     def property(self):
          return self.unit.property if self.unit else None

     def __repr__(self):
          return f"<Lease(id={self.id}, tenant_id={self.tenant_id}, unit_id={self.unit_id})>"
