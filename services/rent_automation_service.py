# services/rent_automation_service.py
"""
Rent Automation Service - reminder and late-fee settings, and the daily
job that applies them.

The daily job (scripts/run_rent_automation.py) runs once per day and is
safe to re-run: reminders remember which offsets were already sent, and
late fees are created at most once per charge (or once per interval when
recurring).
"""
import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import requests
from sqlalchemy.orm import Session

from models import (
     Landlord,
     SubscriptionTier,
     RentPayment,
     RentReminderSettings,
     LateFeeSettings,
     LateFeeType,
     RecurringInterval,
     PaymentStatus,
     PaymentType,
)
from services.exceptions import TierRequiredError
from services.rent_payment_service import RentPaymentService, landlord_payments_query
from utils import email as email_utils

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DAYS = [7, 3, 1]
DEFAULT_REMINDER_CHANNELS = ["email"]
INTERVAL_DAYS = {RecurringInterval.DAILY: 1, RecurringInterval.WEEKLY: 7}
AUTOMATION_TIERS = (SubscriptionTier.PRO, SubscriptionTier.ENTERPRISE)


def calculate_late_fee(settings: LateFeeSettings, rent_amount: Decimal) -> Decimal:
     """Flat amount, or a percentage of rent capped at max_fee. Rounded to cents."""
     if settings.fee_type == LateFeeType.PERCENTAGE:
          fee = Decimal(rent_amount) * Decimal(settings.fee_amount) / Decimal("100")
          if settings.max_fee is not None:
               fee = min(fee, Decimal(settings.max_fee))
     else:
          fee = Decimal(settings.fee_amount)
     return fee.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class RentAutomationService:
     """Service class for rent reminders and late fees."""

     # -----------------------------------------------------------------------
     # Settings
     # -----------------------------------------------------------------------

     @staticmethod
     def ensure_automation_tier(landlord: Landlord) -> None:
          if not landlord.has_tier(*AUTOMATION_TIERS):
               raise TierRequiredError("Rent automation requires a Pro or Enterprise subscription")

     @staticmethod
     def get_reminder_settings(db: Session, landlord_id: int) -> RentReminderSettings:
          settings = db.query(RentReminderSettings).filter(
               RentReminderSettings.landlord_id == landlord_id
          ).first()
          if settings:
               return settings
          return RentReminderSettings(
               landlord_id=landlord_id,
               enabled=False,
               reminder_days_before=list(DEFAULT_REMINDER_DAYS),
               reminder_channels=list(DEFAULT_REMINDER_CHANNELS),
               custom_message=None,
          )

     @staticmethod
     def update_reminder_settings(db: Session, landlord: Landlord, **fields) -> RentReminderSettings:
          RentAutomationService.ensure_automation_tier(landlord)
          settings = RentAutomationService.get_reminder_settings(db, landlord.id)
          if settings.id is None:
               db.add(settings)

          if fields.get("reminder_days_before") is not None:
               fields["reminder_days_before"] = sorted(set(fields["reminder_days_before"]), reverse=True)
          if fields.get("reminder_channels") is not None:
               fields["reminder_channels"] = list(dict.fromkeys(fields["reminder_channels"]))
          for key, value in fields.items():
               if value is not None or key == "custom_message":
                    setattr(settings, key, value)

          db.flush()
          logger.info("Landlord %s updated rent reminder settings", landlord.id)
          return settings

     @staticmethod
     def get_late_fee_settings(db: Session, landlord_id: int) -> LateFeeSettings:
          settings = db.query(LateFeeSettings).filter(LateFeeSettings.landlord_id == landlord_id).first()
          if settings:
               return settings
          return LateFeeSettings(
               landlord_id=landlord_id,
               enabled=False,
               grace_period_days=5,
               fee_type=LateFeeType.FLAT,
               fee_amount=Decimal("50.00"),
               max_fee=None,
               recurring_fee=False,
               recurring_interval=None,
               notify_tenant=True,
          )

     @staticmethod
     def update_late_fee_settings(db: Session, landlord: Landlord, **fields) -> LateFeeSettings:
          """
          Raises:
               TierRequiredError: Free plan
               ValueError: Inconsistent fee descriptor
          """
          RentAutomationService.ensure_automation_tier(landlord)
          settings = RentAutomationService.get_late_fee_settings(db, landlord.id)
          if settings.id is None:
               db.add(settings)

          nullable = {"max_fee", "recurring_interval"}
          for key, value in fields.items():
               if value is not None or key in nullable:
                    setattr(settings, key, value)

          if settings.fee_type == LateFeeType.PERCENTAGE and Decimal(settings.fee_amount) > 100:
               raise ValueError("Percentage late fee cannot exceed 100%")
          if settings.recurring_fee and settings.recurring_interval is None:
               raise ValueError("Choose how often a recurring late fee is charged")
          if not settings.recurring_fee:
               settings.recurring_interval = None

          db.flush()
          logger.info("Landlord %s updated late fee settings", landlord.id)
          return settings

     # -----------------------------------------------------------------------
     # Daily job
     # -----------------------------------------------------------------------

     @staticmethod
     def send_reminders(db: Session, landlord_id: int, today: date) -> int:
          """Email tenants whose pending charges fall due in one of the configured offsets."""
          settings = RentAutomationService.get_reminder_settings(db, landlord_id)
          if not settings.enabled or not settings.reminder_days_before:
               return 0

          offsets = set(settings.reminder_days_before)
          horizon = today + timedelta(days=max(offsets))
          upcoming = landlord_payments_query(db, landlord_id).filter(
               RentPayment.status == PaymentStatus.PENDING,
               RentPayment.due_date > today,
               RentPayment.due_date <= horizon
          ).all()

          sent = 0
          for payment in upcoming:
               days_before = (payment.due_date - today).days
               if days_before not in offsets:
                    continue
               metadata = dict(payment.payment_metadata or {})
               already_sent = list(metadata.get("remindersSent", []))
               if days_before in already_sent:
                    continue

               tenant = payment.tenant
               delivered = False
               for channel in settings.reminder_channels:
                    if channel != "email":
                         logger.info("Reminder channel %s is not available, skipping payment %s", channel, payment.id)
                         continue
                    if not tenant.email:
                         logger.info("Tenant %s has no email, skipping reminder for payment %s", tenant.id, payment.id)
                         continue
                    try:
                         delivered = email_utils.send_rent_reminder(
                              tenant.email,
                              tenant.full_name,
                              Decimal(payment.amount),
                              payment.due_date,
                              days_before,
                              settings.custom_message,
                         ) or delivered
                    except (email_utils.EmailError, requests.RequestException):
                         logger.exception("Failed to send rent reminder for payment %s", payment.id)

               if delivered:
                    metadata["remindersSent"] = already_sent + [days_before]
                    payment.payment_metadata = metadata
                    sent += 1

          return sent

     @staticmethod
     def apply_late_fees(db: Session, landlord_id: int, today: date) -> int:
          """
          Charge a late fee on every unpaid charge past due_date + grace period.
          """
          settings = RentAutomationService.get_late_fee_settings(db, landlord_id)
          if not settings.enabled:
               return 0

          cutoff = today - timedelta(days=settings.grace_period_days)
          unpaid = landlord_payments_query(db, landlord_id).filter(
               RentPayment.status.in_([PaymentStatus.PENDING, PaymentStatus.OVERDUE]),
               RentPayment.payment_type != PaymentType.LATE_FEE,
               RentPayment.due_date < cutoff
          ).all()

          applied = 0
          for payment in unpaid:
               last_fee = (
                    db.query(RentPayment)
                    .filter(
                         RentPayment.parent_payment_id == payment.id,
                         RentPayment.payment_type == PaymentType.LATE_FEE
                    )
                    .order_by(RentPayment.due_date.desc())
                    .first()
               )
               if last_fee is not None:
                    if not settings.recurring_fee or settings.recurring_interval is None:
                         continue
                    if (today - last_fee.due_date).days < INTERVAL_DAYS[settings.recurring_interval]:
                         continue

               fee = calculate_late_fee(settings, payment.lease.rent_amount)
               if fee <= 0:
                    continue

               db.add(RentPayment(
                    lease_id=payment.lease_id,
                    tenant_id=payment.tenant_id,
                    parent_payment_id=payment.id,
                    amount=fee,
                    due_date=today,
                    status=PaymentStatus.PENDING,
                    payment_type=PaymentType.LATE_FEE,
                    payment_metadata={"description": f"Late fee for charge due {payment.due_date.isoformat()}"},
               ))
               db.flush()
               applied += 1
               logger.info("Applied late fee %s to payment %s", fee, payment.id)

               tenant = payment.tenant
               if settings.notify_tenant and tenant.email:
                    try:
                         email_utils.send_late_fee_notice(
                              tenant.email,
                              tenant.full_name,
                              fee,
                              Decimal(payment.amount),
                              payment.due_date,
                         )
                    except (email_utils.EmailError, requests.RequestException):
                         logger.exception("Failed to send late fee notice for payment %s", payment.id)

          return applied

     @staticmethod
     def run_daily(db: Session, today: Optional[date] = None) -> dict:
          """
          Run the daily automation for every landlord.

          This should be called by a scheduled job daily.

          Returns:
               Summary counts for the run
          """
          today = today or date.today()
          summary = {"landlords": 0, "marked_overdue": 0, "reminders_sent": 0, "late_fees_applied": 0}

          for landlord in db.query(Landlord).order_by(Landlord.id).all():
               summary["landlords"] += 1
               summary["marked_overdue"] += RentPaymentService.mark_overdue_payments(db, landlord.id, today)
               if not landlord.has_tier(*AUTOMATION_TIERS):
                    continue
               summary["reminders_sent"] += RentAutomationService.send_reminders(db, landlord.id, today)
               summary["late_fees_applied"] += RentAutomationService.apply_late_fees(db, landlord.id, today)

          db.flush()
          logger.info(
               "Rent automation for %s: %d landlords, %d overdue, %d reminders, %d late fees",
               today.isoformat(),
               summary["landlords"],
               summary["marked_overdue"],
               summary["reminders_sent"],
               summary["late_fees_applied"],
          )
          return summary
