# services/payroll_service.py
"""
Payroll Service - payroll settings, pay calculation and paying approved
timesheets out of the landlord wallet.
"""
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     PayrollSettings,
     PayPeriodType,
     Timesheet,
     TimesheetStatus,
     TeamMemberCompensation,
     TeamPayment,
     TeamPaymentType,
     PayType,
)
from services.exceptions import NotFoundError
from services.team_service import TeamService
from services.wallet_service import WalletService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
WORK_HOURS_PER_YEAR = Decimal(2080)


def calculate_pay(
     timesheet: Timesheet,
     compensation: TeamMemberCompensation,
     settings: PayrollSettings
) -> dict:
     """
     Gross pay for a timesheet.

     Hourly: regular hours at the hourly rate plus overtime hours at the
     overtime rate (or hourly rate times the overtime multiplier).
     Salary: total hours at the annual salary / 2080.
     """
     regular_hours = Decimal(timesheet.regular_hours or 0)
     overtime_hours = Decimal(timesheet.overtime_hours or 0)
     total_hours = Decimal(timesheet.total_hours or 0)

     if compensation.pay_type == PayType.SALARY:
          hourly_equivalent = Decimal(compensation.salary_amount or 0) / WORK_HOURS_PER_YEAR
          regular_pay = total_hours * hourly_equivalent
          overtime_pay = Decimal("0")
     else:
          rate = Decimal(compensation.hourly_rate or 0)
          overtime_rate = (
               Decimal(compensation.overtime_rate)
               if compensation.overtime_rate
               else rate * Decimal(settings.overtime_multiplier)
          )
          regular_pay = regular_hours * rate
          overtime_pay = overtime_hours * overtime_rate

     regular_pay = regular_pay.quantize(CENT, rounding=ROUND_HALF_UP)
     overtime_pay = overtime_pay.quantize(CENT, rounding=ROUND_HALF_UP)
     gross_pay = regular_pay + overtime_pay
     platform_fee = Decimal("0.00")
     return {
          "regular_pay": regular_pay,
          "overtime_pay": overtime_pay,
          "gross_pay": gross_pay,
          "platform_fee": platform_fee,
          "net_pay": gross_pay - platform_fee,
     }


class PayrollService:
     """Service class for payroll."""

     @staticmethod
     def get_settings(db: Session, landlord_id: int) -> PayrollSettings:
          settings = db.query(PayrollSettings).filter(PayrollSettings.landlord_id == landlord_id).first()
          if settings:
               return settings
          return PayrollSettings(
               landlord_id=landlord_id,
               pay_period_type=PayPeriodType.BIWEEKLY,
               pay_period_start_day=1,
               overtime_threshold=Decimal("40"),
               daily_overtime_threshold=None,
               overtime_multiplier=Decimal("1.5"),
          )

     @staticmethod
     def update_settings(db: Session, landlord_id: int, **fields) -> PayrollSettings:
          settings = PayrollService.get_settings(db, landlord_id)
          if settings.id is None:
               db.add(settings)
          for key, value in fields.items():
               if value is not None or key == "daily_overtime_threshold":
                    setattr(settings, key, value)
          db.flush()
          return settings

     @staticmethod
     def pending_payroll(db: Session, landlord_id: int) -> list[dict]:
          """
          Approved timesheets with their pay. Members without compensation
          are skipped since there is nothing to pay them from.
          """
          settings = PayrollService.get_settings(db, landlord_id)
          timesheets = (
               db.query(Timesheet)
               .filter(Timesheet.landlord_id == landlord_id, Timesheet.status == TimesheetStatus.APPROVED)
               .order_by(Timesheet.period_start, Timesheet.id)
               .all()
          )

          pending = []
          for timesheet in timesheets:
               compensation = timesheet.team_member.compensation
               if compensation is None:
                    logger.info("Skipping timesheet %s: member %s has no compensation", timesheet.id, timesheet.team_member_id)
                    continue
               pending.append({
                    "timesheet": timesheet,
                    "team_member": timesheet.team_member,
                    "pay_type": compensation.pay_type,
                    **calculate_pay(timesheet, compensation, settings),
               })
          return pending

     @staticmethod
     def process_payroll(db: Session, landlord_id: int, timesheet_ids: list[int]) -> list[TeamPayment]:
          """
          Pay the given approved timesheets.

          Raises:
               NotFoundError: If any timesheet is not the landlord's
               ValueError: If any timesheet is not approved, a member has no
                    compensation, or the wallet balance is insufficient
          """
          ids = set(timesheet_ids)
          if not ids:
               raise ValueError("Select at least one timesheet")
          timesheets = db.query(Timesheet).filter(
               Timesheet.landlord_id == landlord_id,
               Timesheet.id.in_(ids)
          ).all()
          if len(timesheets) != len(ids):
               raise NotFoundError("One or more timesheets not found")

          not_approved = [t.id for t in timesheets if t.status != TimesheetStatus.APPROVED]
          if not_approved:
               raise ValueError("All timesheets must be approved before processing payroll")

          settings = PayrollService.get_settings(db, landlord_id)
          lines = []
          for timesheet in timesheets:
               compensation = timesheet.team_member.compensation
               if compensation is None:
                    raise ValueError(f"{timesheet.team_member.name} has no compensation set up")
               lines.append((timesheet, calculate_pay(timesheet, compensation, settings)))

          total = sum((pay["net_pay"] for _, pay in lines), Decimal("0.00"))
          WalletService.debit(db, landlord_id, total)

          now = datetime.now()
          payments = []
          for timesheet, pay in lines:
               payment = TeamPayment(
                    landlord_id=landlord_id,
                    team_member_id=timesheet.team_member_id,
                    timesheet_id=timesheet.id,
                    payment_type=TeamPaymentType.PAYROLL,
                    amount=pay["net_pay"],
                    platform_fee=pay["platform_fee"],
                    description=f"Payroll {timesheet.period_start.isoformat()} to {timesheet.period_end.isoformat()}",
                    status="completed",
                    period_start=timesheet.period_start,
                    period_end=timesheet.period_end,
                    paid_at=now,
               )
               db.add(payment)
               payments.append(payment)
               timesheet.status = TimesheetStatus.PAID
               timesheet.paid_at = now

          db.flush()
          logger.info("Landlord %s processed payroll for %d timesheets (%s)", landlord_id, len(payments), total)
          return payments

     @staticmethod
     def pay_bonus(db: Session, landlord_id: int, team_member_id: int, amount: Decimal, description: str) -> TeamPayment:
          member = TeamService.get_member(db, landlord_id, team_member_id)
          if amount <= 0:
               raise ValueError("Bonus amount must be greater than zero")
          WalletService.debit(db, landlord_id, amount)

          payment = TeamPayment(
               landlord_id=landlord_id,
               team_member_id=member.id,
               payment_type=TeamPaymentType.BONUS,
               amount=amount,
               platform_fee=Decimal("0.00"),
               description=description,
               status="completed",
               paid_at=datetime.now(),
          )
          db.add(payment)
          db.flush()
          logger.info("Landlord %s paid bonus %s to member %s", landlord_id, amount, member.id)
          return payment

     @staticmethod
     def list_payments(db: Session, landlord_id: int, team_member_id: Optional[int] = None) -> list[TeamPayment]:
          query = db.query(TeamPayment).filter(TeamPayment.landlord_id == landlord_id)
          if team_member_id:
               query = query.filter(TeamPayment.team_member_id == team_member_id)
          return query.order_by(TeamPayment.paid_at.desc(), TeamPayment.id.desc()).all()
