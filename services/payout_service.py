# services/payout_service.py
"""
Payout Service - landlord bank accounts, wallet summary and cash-outs.

All real verification and money movement is done by the payment
processor through clients.stripe_client; this module keeps the local
records in step with it.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from clients import stripe_client
from clients.stripe_client import ProcessorError
from config import config
from models import (
     Landlord,
     SavedPayoutMethod,
     Payout,
     PayoutType,
     PayoutStatus,
     RentPayment,
     PaymentStatus,
     Property,
)
from services.exceptions import NotFoundError
from services.rent_payment_service import landlord_payments_query
from services.wallet_service import WalletService

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def calculate_cash_out_fees(gross: Decimal, payout_type: PayoutType) -> dict:
     """
     Platform fee is flat; instant payouts add a percentage fee with a cap.
     """
     platform_fee = config.PLATFORM_CASHOUT_FEE
     instant_fee = ZERO
     if payout_type == PayoutType.INSTANT:
          instant_fee = min(
               (gross * config.INSTANT_PAYOUT_RATE).quantize(CENT, rounding=ROUND_HALF_UP),
               config.INSTANT_PAYOUT_FEE_CAP,
          )
     return {
          "gross_amount": gross,
          "platform_fee": platform_fee,
          "instant_fee": instant_fee,
          "net_amount": gross - platform_fee - instant_fee,
     }


class PayoutService:
     """Service class for payout methods and cash-outs."""

     # -----------------------------------------------------------------------
     # Payout methods
     # -----------------------------------------------------------------------

     @staticmethod
     def list_methods(db: Session, landlord_id: int) -> list[SavedPayoutMethod]:
          return (
               db.query(SavedPayoutMethod)
               .filter(SavedPayoutMethod.landlord_id == landlord_id)
               .order_by(SavedPayoutMethod.is_default.desc(), SavedPayoutMethod.created_at.desc())
               .all()
          )

     @staticmethod
     def get_method(db: Session, landlord_id: int, method_id: int) -> SavedPayoutMethod:
          method = db.query(SavedPayoutMethod).filter(
               SavedPayoutMethod.id == method_id,
               SavedPayoutMethod.landlord_id == landlord_id
          ).first()
          if not method:
               raise NotFoundError("Payout method not found")
          return method

     @staticmethod
     def ensure_customer(db: Session, landlord: Landlord) -> str:
          """Processor customer id for the landlord, created on first use."""
          if not landlord.stripe_customer_id:
               landlord.stripe_customer_id = stripe_client.create_customer(
                    landlord.user.email,
                    landlord.name,
                    landlord.id,
               )
               db.flush()
          return landlord.stripe_customer_id

     @staticmethod
     def ensure_connect_account(db: Session, landlord: Landlord) -> str:
          """Connect account that cash-outs are paid from, created with the first bank account."""
          if not landlord.stripe_connect_account_id:
               landlord.stripe_connect_account_id = stripe_client.create_connect_account(
                    landlord.user.email,
                    landlord.id,
               )
               db.flush()
          return landlord.stripe_connect_account_id

     @staticmethod
     def create_onboarding_link(db: Session, landlord: Landlord) -> str:
          """Hosted page where the landlord completes the checks that enable payouts."""
          connect_account_id = PayoutService.ensure_connect_account(db, landlord)
          return stripe_client.create_onboarding_link(
               connect_account_id,
               refresh_url=f"{config.APP_URL}/admin/payouts?onboarding=refresh",
               return_url=f"{config.APP_URL}/admin/payouts?onboarding=complete",
          )

     @staticmethod
     def _save_method(db: Session, landlord_id: int, **fields) -> SavedPayoutMethod:
          has_methods = db.query(SavedPayoutMethod.id).filter(
               SavedPayoutMethod.landlord_id == landlord_id
          ).first() is not None
          method = SavedPayoutMethod(landlord_id=landlord_id, is_default=not has_methods, **fields)
          db.add(method)
          db.flush()
          return method

     @staticmethod
     def add_manual_bank_account(
          db: Session,
          landlord: Landlord,
          account_holder_name: str,
          routing_number: str,
          account_number: str,
          account_type: str,
          bank_name: Optional[str] = None
     ) -> SavedPayoutMethod:
          """
          Register a bank account by routing/account number. Unless the
          processor reports it verified, micro-deposits must be confirmed
          before it can receive payouts. The same account is registered on the
          landlord's Connect account as the payout destination.
          """
          customer_id = PayoutService.ensure_customer(db, landlord)
          connect_account_id = PayoutService.ensure_connect_account(db, landlord)
          external_account_id = stripe_client.add_external_account(
               connect_account_id,
               account_holder_name,
               routing_number,
               account_number,
               account_type,
          )
          source = stripe_client.add_bank_account(
               customer_id,
               account_holder_name,
               routing_number,
               account_number,
               account_type,
          )
          method = PayoutService._save_method(
               db,
               landlord.id,
               stripe_payment_method_id=source["id"],
               stripe_external_account_id=external_account_id,
               type="bank_account",
               account_holder_name=account_holder_name,
               last4=source.get("last4") or account_number[-4:],
               bank_name=source.get("bank_name") or bank_name,
               account_type=account_type,
               routing_number=routing_number,
               is_verified=source.get("status") == "verified",
          )
          logger.info("Landlord %s added bank account ending %s", landlord.id, method.last4)
          return method

     @staticmethod
     def verify_micro_deposits(
          db: Session,
          landlord: Landlord,
          method_id: int,
          amount1: Decimal,
          amount2: Decimal
     ) -> SavedPayoutMethod:
          """Confirm the two micro-deposit amounts (in dollars)."""
          method = PayoutService.get_method(db, landlord.id, method_id)
          if method.is_verified:
               raise ValueError("This bank account is already verified")
          if method.type != "bank_account":
               raise ValueError("Only manually added accounts are verified with micro-deposits")

          status = stripe_client.verify_micro_deposits(
               landlord.stripe_customer_id,
               method.stripe_payment_method_id,
               [stripe_client.to_cents(amount1), stripe_client.to_cents(amount2)],
          )
          if status != "verified":
               raise ValueError("Verification failed. Please check the amounts and try again.")

          method.is_verified = True
          db.flush()
          logger.info("Landlord %s verified bank account %s", landlord.id, method.id)
          return method

     @staticmethod
     def create_financial_connections_session(db: Session, landlord: Landlord) -> dict:
          customer_id = PayoutService.ensure_customer(db, landlord)
          return stripe_client.create_financial_connections_session(customer_id)

     @staticmethod
     def attach_financial_connections_account(db: Session, landlord: Landlord, account_id: str) -> SavedPayoutMethod:
          """
          Save an instantly verified account.

          Raises:
               ProcessorError: requires_manual_entry when the bank cannot be
                    verified instantly
          """
          customer_id = PayoutService.ensure_customer(db, landlord)
          linked = stripe_client.attach_financial_connections_account(customer_id, account_id)

          duplicate = db.query(SavedPayoutMethod).filter(
               SavedPayoutMethod.stripe_payment_method_id == linked["id"]
          ).first()
          if duplicate:
               return duplicate

          connect_account_id = PayoutService.ensure_connect_account(db, landlord)
          external_account_id = stripe_client.link_external_account(connect_account_id, account_id)

          return PayoutService._save_method(
               db,
               landlord.id,
               stripe_payment_method_id=linked["id"],
               stripe_external_account_id=external_account_id,
               type="us_bank_account",
               account_holder_name=linked.get("account_holder_name") or landlord.name,
               last4=linked["last4"],
               bank_name=linked.get("bank_name"),
               account_type=linked.get("account_type"),
               routing_number=linked.get("routing_number"),
               is_verified=True,
          )

     @staticmethod
     def delete_method(db: Session, landlord: Landlord, method_id: int) -> None:
          """
          Remove a payout method. The newest remaining method becomes the
          default if the deleted one was the default.
          """
          method = PayoutService.get_method(db, landlord.id, method_id)
          if landlord.stripe_customer_id:
               try:
                    stripe_client.remove_payout_method(
                         landlord.stripe_customer_id,
                         method.stripe_payment_method_id,
                         method.type,
                    )
               except ProcessorError:
                    logger.warning(
                         "Could not detach %s at the processor, removing local record anyway",
                         method.stripe_payment_method_id,
                    )
          if landlord.stripe_connect_account_id and method.stripe_external_account_id:
               try:
                    stripe_client.remove_external_account(
                         landlord.stripe_connect_account_id,
                         method.stripe_external_account_id,
                    )
               except ProcessorError:
                    logger.warning(
                         "Could not remove payout destination %s, removing local record anyway",
                         method.stripe_external_account_id,
                    )

          was_default = method.is_default
          db.delete(method)
          db.flush()

          if was_default:
               replacement = (
                    db.query(SavedPayoutMethod)
                    .filter(SavedPayoutMethod.landlord_id == landlord.id)
                    .order_by(SavedPayoutMethod.created_at.desc(), SavedPayoutMethod.id.desc())
                    .first()
               )
               if replacement:
                    replacement.is_default = True
                    db.flush()

     @staticmethod
     def set_default(db: Session, landlord_id: int, method_id: int) -> SavedPayoutMethod:
          method = PayoutService.get_method(db, landlord_id, method_id)
          db.query(SavedPayoutMethod).filter(
               SavedPayoutMethod.landlord_id == landlord_id,
               SavedPayoutMethod.id != method.id
          ).update({SavedPayoutMethod.is_default: False}, synchronize_session="fetch")
          method.is_default = True
          db.flush()
          return method

     # -----------------------------------------------------------------------
     # Wallet and cash-out
     # -----------------------------------------------------------------------

     @staticmethod
     def get_wallet_summary(db: Session, landlord_id: int) -> dict:
          wallet = WalletService.get_or_create(db, landlord_id)
          recent = (
               db.query(Payout)
               .filter(Payout.landlord_id == landlord_id)
               .order_by(Payout.created_at.desc(), Payout.id.desc())
               .limit(10)
               .all()
          )
          return {
               "available_balance": wallet.available_balance,
               "pending_balance": wallet.pending_balance,
               "last_payout_at": wallet.last_payout_at,
               "recent_payouts": recent,
          }

     @staticmethod
     def cash_out(
          db: Session,
          landlord: Landlord,
          payout_type: PayoutType = PayoutType.STANDARD,
          amount: Optional[Decimal] = None,
          property_id: Optional[int] = None
     ) -> Payout:
          """
          Pay collected rent out to the landlord's default bank account, which
          is the destination of the payout on the Connect account.

          Paid rent payments not yet in a payout are consumed oldest first
          until the requested gross amount is covered.

          Raises:
               ValueError: No verified account, nothing to cash out, amount too
                    large or too small to cover fees
               ProcessorError: The processor refused the payout
          """
          method = db.query(SavedPayoutMethod).filter(
               SavedPayoutMethod.landlord_id == landlord.id,
               SavedPayoutMethod.is_default.is_(True)
          ).first()
          if not method or not method.is_verified:
               raise ValueError("Add and verify a bank account before cashing out")
          if not landlord.stripe_connect_account_id or not method.stripe_external_account_id:
               raise ValueError("This bank account cannot receive payouts yet. Please add it again.")
          if not stripe_client.payouts_enabled(landlord.stripe_connect_account_id):
               raise ValueError("Payouts are not enabled yet. Complete payout onboarding to continue.")

          query = landlord_payments_query(db, landlord.id).filter(
               RentPayment.status == PaymentStatus.PAID,
               RentPayment.payout_id.is_(None)
          )
          if property_id:
               query = query.filter(Property.id == property_id)
          candidates = query.order_by(RentPayment.paid_at, RentPayment.id).all()

          available = sum((Decimal(p.amount) for p in candidates), ZERO)
          if available <= 0:
               raise ValueError("No funds available to cash out")

          gross = Decimal(amount) if amount is not None else available
          if gross > available:
               raise ValueError(f"Requested amount exceeds available balance of ${available:,.2f}")

          fees = calculate_cash_out_fees(gross, payout_type)
          if fees["net_amount"] <= 0:
               raise ValueError("Amount is too small to cover payout fees")

          # Raises ValueError when the wallet cannot cover it
          WalletService.debit(db, landlord.id, gross, is_payout=True)

          payout = Payout(
               landlord_id=landlord.id,
               payout_method_id=method.id,
               payout_type=payout_type,
               status=PayoutStatus.PROCESSING,
               **fees,
          )
          db.add(payout)
          db.flush()

          covered = ZERO
          for payment in candidates:
               if covered >= gross:
                    break
               payment.payout_id = payout.id
               covered += Decimal(payment.amount)

          payout.stripe_payout_id = stripe_client.create_payout(
               landlord.stripe_connect_account_id,
               stripe_client.to_cents(fees["net_amount"]),
               payout_type.value,
               destination=method.stripe_external_account_id,
               metadata={"payout_id": str(payout.id), "landlord_id": str(landlord.id)},
          )
          db.flush()

          logger.info(
               "Landlord %s cashed out %s (%s net, %s)",
               landlord.id, gross, fees["net_amount"], payout_type.value
          )
          return payout
