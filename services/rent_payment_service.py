# services/rent_payment_service.py
"""
Rent Payment Service - Business logic layer for rent charges.

This service handles charge creation (including move-in charges), payment
status changes, and tenant balances, separate from the API layer.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     RentPayment,
     Lease,
     PropertyUnit,
     Property,
     FeeType,
     PaymentStatus,
     PaymentType,
)
from models.rent_payment import MOVE_IN_CHARGE_TYPES
from services.exceptions import NotFoundError
from services.fee_service import FeeService
from services.portfolio_service import PortfolioService
from services.wallet_service import WalletService

logger = logging.getLogger(__name__)


def landlord_payments_query(db: Session, landlord_id: int):
     """RentPayment query joined through lease -> unit -> property, scoped to a landlord."""
     return (
          db.query(RentPayment)
          .join(Lease, RentPayment.lease_id == Lease.id)
          .join(PropertyUnit, Lease.unit_id == PropertyUnit.id)
          .join(Property, PropertyUnit.property_id == Property.id)
          .filter(Property.landlord_id == landlord_id)
     )


class RentPaymentService:
     """Service class for rent payment business logic."""

     @staticmethod
     def get_payment(db: Session, landlord_id: int, payment_id: int) -> RentPayment:
          payment = landlord_payments_query(db, landlord_id).filter(RentPayment.id == payment_id).first()
          if not payment:
               raise NotFoundError(f"Rent payment with ID {payment_id} not found")
          return payment

     @staticmethod
     def list_payments(
          db: Session,
          landlord_id: int,
          lease_id: Optional[int] = None,
          tenant_id: Optional[int] = None,
          status: Optional[PaymentStatus] = None,
          payment_type: Optional[PaymentType] = None,
          page: int = 1,
          page_size: int = 50
     ) -> tuple[list[RentPayment], int]:
          query = landlord_payments_query(db, landlord_id)
          if lease_id:
               query = query.filter(RentPayment.lease_id == lease_id)
          if tenant_id:
               query = query.filter(RentPayment.tenant_id == tenant_id)
          if status:
               query = query.filter(RentPayment.status == status)
          if payment_type:
               query = query.filter(RentPayment.payment_type == payment_type)

          total = query.count()
          payments = (
               query.order_by(RentPayment.due_date.desc(), RentPayment.id.desc())
               .offset((page - 1) * page_size)
               .limit(page_size)
               .all()
          )
          return payments, total

     @staticmethod
     def create_payment(
          db: Session,
          landlord_id: int,
          lease_id: int,
          amount: Decimal,
          due_date: date,
          payment_type: PaymentType = PaymentType.RENT,
          status: PaymentStatus = PaymentStatus.PENDING,
          description: Optional[str] = None
     ) -> RentPayment:
          """
          Create a charge against a lease. A charge created as already paid
          is credited to the landlord wallet.

          Raises:
               NotFoundError: If the lease is not the landlord's
          """
          lease = PortfolioService.get_lease(db, landlord_id, lease_id)

          payment = RentPayment(
               lease_id=lease.id,
               tenant_id=lease.tenant_id,
               amount=amount,
               due_date=due_date,
               status=status,
               payment_type=payment_type,
               payment_metadata={"description": description} if description else {},
          )
          if status == PaymentStatus.PAID:
               payment.paid_at = datetime.now()
               WalletService.credit(db, landlord_id, amount)

          db.add(payment)
          db.flush()
          return payment

     @staticmethod
     def mark_paid(
          db: Session,
          landlord_id: int,
          payment_id: int,
          amount: Optional[Decimal] = None,
          paid_at: Optional[datetime] = None
     ) -> RentPayment:
          """
          Record a payment as received.

          Only rent accepts a partial amount. The payment is closed at the
          amount received and the rest is charged again as a new pending
          rent payment (parent_payment_id points back to this one), so it
          stays in the tenant's balance and in late fee processing.

          Raises:
               ValueError: Already paid or cancelled, partial amount on a
                    charge that is not rent, or more than the amount charged
          """
          payment = RentPaymentService.get_payment(db, landlord_id, payment_id)
          if payment.status == PaymentStatus.PAID:
               raise ValueError("Payment is already marked as paid")
          if payment.status == PaymentStatus.CANCELLED:
               raise ValueError("Cancelled payments cannot be marked as paid")

          charged = Decimal(payment.amount)
          received = charged if amount is None else Decimal(amount)
          if received > charged:
               raise ValueError(f"Amount cannot exceed the charge of ${charged:,.2f}")
          if received < charged and payment.payment_type != PaymentType.RENT:
               raise ValueError("Partial payments are only accepted for rent")

          if received < charged:
               remainder = RentPayment(
                    lease_id=payment.lease_id,
                    tenant_id=payment.tenant_id,
                    parent_payment_id=payment.id,
                    amount=charged - received,
                    due_date=payment.due_date,
                    status=PaymentStatus.PENDING,
                    payment_type=PaymentType.RENT,
                    payment_metadata={"description": "Remaining rent balance"},
               )
               db.add(remainder)
               db.flush()
               payment.amount = received
               payment.payment_metadata = {
                    **(payment.payment_metadata or {}),
                    "chargedAmount": str(charged),
                    "remainderPaymentId": remainder.id,
               }
               logger.info(
                    "Rent payment %s received short (%s of %s), remainder %s",
                    payment.id, received, charged, remainder.id
               )

          payment.mark_as_paid(paid_at or datetime.now())
          WalletService.credit(db, landlord_id, received)
          db.flush()

          logger.info("Rent payment %s marked paid (%s)", payment.id, payment.amount)
          return payment

     @staticmethod
     def mark_overdue(db: Session, landlord_id: int, payment_id: int) -> RentPayment:
          payment = RentPaymentService.get_payment(db, landlord_id, payment_id)
          if payment.status != PaymentStatus.PENDING:
               raise ValueError(f"Only pending payments can be marked overdue (status is {payment.status.value})")
          payment.mark_as_overdue()
          db.flush()
          return payment

     @staticmethod
     def delete_payment(db: Session, landlord_id: int, payment_id: int) -> None:
          payment = RentPaymentService.get_payment(db, landlord_id, payment_id)
          if payment.status == PaymentStatus.PAID:
               raise ValueError("Paid payments cannot be deleted")
          db.delete(payment)
          db.flush()

     @staticmethod
     def mark_overdue_payments(db: Session, landlord_id: int, today: Optional[date] = None) -> int:
          """
          Mark the landlord's pending payments past their due date as overdue.

          Returns:
               Number of payments marked as overdue
          """
          today = today or date.today()

          overdue_payments = landlord_payments_query(db, landlord_id).filter(
               RentPayment.status == PaymentStatus.PENDING,
               RentPayment.due_date < today
          ).all()

          for payment in overdue_payments:
               payment.mark_as_overdue()

          return len(overdue_payments)

     @staticmethod
     def calculate_tenant_balance(db: Session, landlord_id: int, tenant_id: int) -> dict:
          """
          Calculate the total balance owed by a tenant.

          Returns:
               Dictionary with balance information
          """
          PortfolioService.get_tenant(db, landlord_id, tenant_id)
          payments = landlord_payments_query(db, landlord_id).filter(RentPayment.tenant_id == tenant_id).all()

          pending = [p for p in payments if p.status == PaymentStatus.PENDING]
          overdue = [p for p in payments if p.status == PaymentStatus.OVERDUE]
          paid = [p for p in payments if p.status == PaymentStatus.PAID]

          return {
               "tenant_id": tenant_id,
               "total_owed": float(sum(p.amount for p in pending + overdue)),
               "pending_amount": float(sum(p.amount for p in pending)),
               "overdue_amount": float(sum(p.amount for p in overdue)),
               "paid_amount": float(sum(p.amount for p in paid)),
               "total_payments": len(payments),
               "pending_count": len(pending),
               "overdue_count": len(overdue),
               "paid_count": len(paid)
          }

     # -----------------------------------------------------------------------
     # Move-in charges
     # -----------------------------------------------------------------------

     @staticmethod
     def generate_move_in_charges(db: Session, landlord_id: int, lease_id: int) -> tuple[list[RentPayment], str]:
          """
          Create the one-time charges due at lease start, using the effective
          fees for the lease's property.

          Runs once per lease: if any move-in charge exists nothing is created.

          Returns:
               (created payments, message)
          """
          lease = PortfolioService.get_lease(db, landlord_id, lease_id)

          existing = db.query(RentPayment).filter(
               RentPayment.lease_id == lease.id,
               RentPayment.payment_type.in_(MOVE_IN_CHARGE_TYPES)
          ).first()
          if existing:
               return [], "Move-in charges already exist for this lease"

          fees = FeeService.effective_fees(db, landlord_id, lease.unit.property_id)
          rent = Decimal(lease.rent_amount)
          created = []

          def add_charge(payment_type: PaymentType, amount: Decimal, description: str):
               payment = RentPayment(
                    lease_id=lease.id,
                    tenant_id=lease.tenant_id,
                    amount=amount,
                    due_date=lease.start_date,
                    status=PaymentStatus.PENDING,
                    payment_type=payment_type,
                    payment_metadata={"description": description},
               )
               db.add(payment)
               created.append(payment)

          add_charge(PaymentType.FIRST_MONTH_RENT, rent, "First month's rent")

          deposit = fees[FeeType.SECURITY_DEPOSIT]
          months = deposit.amount if deposit.applies else Decimal("0")
          if months > 0:
               label = int(months) if months == int(months) else months
               add_charge(
                    PaymentType.SECURITY_DEPOSIT,
                    (rent * months).quantize(Decimal("0.01")),
                    f"Security deposit ({label} month{'s' if months != 1 else ''} rent)",
               )

          last_month = fees[FeeType.LAST_MONTH_RENT]
          if last_month.applies and last_month.source != "property_no_fee":
               add_charge(PaymentType.LAST_MONTH_RENT, rent, "Last month's rent")

          if lease.has_pets:
               pet_deposit = fees[FeeType.PET_DEPOSIT]
               if pet_deposit.applies and pet_deposit.amount > 0:
                    add_charge(PaymentType.PET_DEPOSIT, pet_deposit.amount, "Pet deposit")

          cleaning = fees[FeeType.CLEANING_FEE]
          if cleaning.applies and cleaning.amount > 0:
               add_charge(PaymentType.CLEANING_FEE, cleaning.amount, "Cleaning fee")

          if lease.has_pets:
               pet_rent = fees[FeeType.PET_RENT]
               if pet_rent.applies and pet_rent.amount > 0:
                    add_charge(PaymentType.PET_RENT, pet_rent.amount, "Monthly pet rent (first month)")

          db.flush()
          logger.info("Created %d move-in charges for lease %s", len(created), lease.id)
          return created, f"Created {len(created)} move-in charges"
