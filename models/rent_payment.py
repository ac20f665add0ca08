# models/rent_payment.py
import enum
from datetime import date
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class PaymentStatus(str, enum.Enum):
     """Enumeration for rent payment status."""
     PENDING = "pending"
     PAID = "paid"
     OVERDUE = "overdue"
     CANCELLED = "cancelled"


class PaymentType(str, enum.Enum):
     """What a charge is for. Move-in charges are created once per lease."""
     RENT = "rent"
     FIRST_MONTH_RENT = "first_month_rent"
     LAST_MONTH_RENT = "last_month_rent"
     SECURITY_DEPOSIT = "security_deposit"
     PET_DEPOSIT = "pet_deposit_annual"
     CLEANING_FEE = "cleaning_fee"
     PET_RENT = "pet_rent"
     APPLICATION_FEE = "application_fee"
     LATE_FEE = "late_fee"


# Charges grouped under "pending move-in" in the rent ledger
MOVE_IN_TYPES = (
     PaymentType.FIRST_MONTH_RENT,
     PaymentType.LAST_MONTH_RENT,
     PaymentType.SECURITY_DEPOSIT,
)

# Everything generate_move_in_charges may create
MOVE_IN_CHARGE_TYPES = MOVE_IN_TYPES + (
     PaymentType.PET_DEPOSIT,
     PaymentType.CLEANING_FEE,
)


class RentPayment(Base):
     """
     RentPayment model - one charge owed by a tenant under a lease.

     Covers monthly rent, move-in charges, recurring pet rent and late fees.
     A paid payment becomes part of the landlord's cash-out balance until
     it is attached to a payout.
     """
     __tablename__ = "rent_payments"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     lease_id = Column(
          Integer,
          ForeignKey("leases.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
     payout_id = Column(Integer, ForeignKey("payouts.id"), nullable=True, index=True)
     parent_payment_id = Column(Integer, ForeignKey("rent_payments.id"), nullable=True)

     # Payment details
     amount = Column(Numeric(12, 2), nullable=False)
     due_date = Column(Date, nullable=False, index=True)
     paid_at = Column(DateTime, nullable=True)
     status = Column(
          enum_type(PaymentStatus, "rent_payment_status"),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True
     )
     payment_type = Column(
          enum_type(PaymentType, "rent_payment_type"),
          default=PaymentType.RENT,
          nullable=False,
          index=True
     )
     # "metadata" is reserved on declarative classes
     payment_metadata = Column("metadata", JSON, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     lease = relationship("Lease", back_populates="rent_payments")
     tenant = relationship("Tenant", back_populates="rent_payments")
     payout = relationship("Payout", back_populates="rent_payments")
     parent_payment = relationship("RentPayment", remote_side=[id])

     def __repr__(self):
          return f"<RentPayment(id={self.id}, amount={self.amount}, status='{self.status}', due_date={self.due_date})>"

     @property
     def is_move_in(self) -> bool:
          return self.payment_type in MOVE_IN_TYPES

     def is_late(self, today: date) -> bool:
          """Overdue, or unpaid and past its due date."""
          if self.status == PaymentStatus.OVERDUE:
               return True
          return self.status == PaymentStatus.PENDING and self.due_date < today

     @property
     def description(self):
          return (self.payment_metadata or {}).get("description")

     def mark_as_paid(self, paid_at) -> None:
          """Mark the payment as paid."""
          self.status = PaymentStatus.PAID
          self.paid_at = paid_at

     def mark_as_overdue(self) -> None:
          """Mark the payment as overdue."""
          self.status = PaymentStatus.OVERDUE
