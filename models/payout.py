# models/payout.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class PayoutType(str, enum.Enum):
     STANDARD = "standard"
     INSTANT = "instant"


class PayoutStatus(str, enum.Enum):
     PROCESSING = "processing"
     PAID = "paid"
     FAILED = "failed"


class SavedPayoutMethod(Base):
     """
     SavedPayoutMethod model - a bank account registered with the payment
     processor for receiving cash-outs.

     type is "bank_account" for manually entered accounts (verified by
     micro-deposits) and "us_bank_account" for instantly linked ones.
     stripe_payment_method_id is the customer-side record used for
     verification; stripe_external_account_id is where payouts land.
     """
     __tablename__ = "saved_payout_methods"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     stripe_payment_method_id = Column(String(100), nullable=False, unique=True)
     stripe_external_account_id = Column(String(100), nullable=True)  # payout destination on the Connect account
     type = Column(String(50), nullable=False)
     account_holder_name = Column(String(200), nullable=False)
     last4 = Column(String(4), nullable=False)
     bank_name = Column(String(200), nullable=True)
     account_type = Column(String(20), nullable=True)  # checking, savings
     routing_number = Column(String(9), nullable=True)
     is_default = Column(Boolean, default=False, nullable=False)
     is_verified = Column(Boolean, default=False, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<SavedPayoutMethod(id={self.id}, last4='{self.last4}', verified={self.is_verified})>"


class Payout(Base):
     """
     Payout model - a cash-out of collected rent to the landlord's bank.
     """
     __tablename__ = "payouts"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     payout_method_id = Column(Integer, ForeignKey("saved_payout_methods.id"), nullable=True)

     payout_type = Column(enum_type(PayoutType, "payout_type"), default=PayoutType.STANDARD, nullable=False)
     status = Column(enum_type(PayoutStatus, "payout_status"), default=PayoutStatus.PROCESSING, nullable=False)

     gross_amount = Column(Numeric(12, 2), nullable=False)
     platform_fee = Column(Numeric(12, 2), default=0, nullable=False)
     instant_fee = Column(Numeric(12, 2), default=0, nullable=False)
     net_amount = Column(Numeric(12, 2), nullable=False)

     stripe_payout_id = Column(String(100), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     rent_payments = relationship("RentPayment", back_populates="payout")
     payout_method = relationship("SavedPayoutMethod")

     def __repr__(self):
          return f"<Payout(id={self.id}, net={self.net_amount}, status='{self.status}')>"


class LandlordWallet(Base):
     """
     LandlordWallet model - running balance of collected funds.

     Credited when rent is marked paid, debited by cash-outs and payroll.
     """
     __tablename__ = "landlord_wallets"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, unique=True)
     available_balance = Column(Numeric(12, 2), default=0, nullable=False)
     pending_balance = Column(Numeric(12, 2), default=0, nullable=False)
     last_payout_at = Column(DateTime, nullable=True)

     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     landlord = relationship("Landlord", back_populates="wallet")

     def __repr__(self):
          return f"<LandlordWallet(landlord_id={self.landlord_id}, available={self.available_balance})>"
