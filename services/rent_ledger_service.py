# services/rent_ledger_service.py
"""
Monthly rent ledger: sorts a month's charges into the buckets the revenue
dashboard shows.
"""
from calendar import monthrange
from collections import OrderedDict
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import RentPayment, Property, PaymentStatus, PaymentType
from models.rent_payment import MOVE_IN_TYPES
from services.rent_payment_service import landlord_payments_query

ZERO = Decimal("0.00")


class RentLedgerService:

     @staticmethod
     def month_bounds(year: int, month: int) -> tuple[date, date]:
          return date(year, month, 1), date(year, month, monthrange(year, month)[1])

     @staticmethod
     def is_partial(payment: RentPayment) -> bool:
          """Rent received, but less than the lease rent."""
          return (
               payment.payment_type == PaymentType.RENT
               and payment.status == PaymentStatus.PAID
               and ZERO < Decimal(payment.amount) < Decimal(payment.lease.rent_amount)
          )

     @staticmethod
     def build_ledger(
          db: Session,
          landlord_id: int,
          year: int,
          month: int,
          property_id: Optional[int] = None,
          today: Optional[date] = None
     ) -> dict:
          """
          Bucket the month's payments.

          - paid:    status paid (plus move-in charges paid during the month)
          - late:    overdue, or unpaid and due before today
          - partial: paid rent below the lease rent (also listed under paid)
          - pending: everything else that is still owed this month
          - move_in: outstanding move-in charges grouped by tenant, any date
          """
          today = today or date.today()
          start, end = RentLedgerService.month_bounds(year, month)

          base = landlord_payments_query(db, landlord_id)
          if property_id:
               base = base.filter(Property.id == property_id)

          month_payments = (
               base.filter(RentPayment.due_date >= start, RentPayment.due_date <= end)
               .order_by(RentPayment.due_date, RentPayment.id)
               .all()
          )

          paid, late, partial, pending = [], [], [], []
          for payment in month_payments:
               if payment.payment_type in MOVE_IN_TYPES or payment.status == PaymentStatus.CANCELLED:
                    continue
               if payment.status == PaymentStatus.PAID:
                    paid.append(payment)
                    if RentLedgerService.is_partial(payment):
                         partial.append(payment)
               elif payment.is_late(today):
                    late.append(payment)
               else:
                    pending.append(payment)

          # Move-in charges count as collected in the month they were paid
          paid.extend(
               base.filter(
                    RentPayment.payment_type.in_(MOVE_IN_TYPES),
                    RentPayment.status == PaymentStatus.PAID,
                    RentPayment.paid_at >= datetime.combine(start, time.min),
                    RentPayment.paid_at <= datetime.combine(end, time.max)
               )
               .order_by(RentPayment.paid_at)
               .all()
          )

          outstanding_move_in = (
               base.filter(
                    RentPayment.payment_type.in_(MOVE_IN_TYPES),
                    RentPayment.status.in_([PaymentStatus.PENDING, PaymentStatus.OVERDUE])
               )
               .order_by(RentPayment.tenant_id, RentPayment.due_date, RentPayment.id)
               .all()
          )
          groups = OrderedDict()
          for payment in outstanding_move_in:
               group = groups.setdefault(payment.tenant_id, {
                    "tenant_id": payment.tenant_id,
                    "tenant_name": payment.tenant.full_name,
                    "lease_id": payment.lease_id,
                    "due_date": payment.due_date,
                    "payments": [],
                    "total": ZERO,
               })
               group["payments"].append(payment)
               group["total"] += Decimal(payment.amount)
          move_in = list(groups.values())

          return {
               "year": year,
               "month": month,
               "paid": paid,
               "late": late,
               "partial": partial,
               "pending": pending,
               "move_in": move_in,
               "summary": {
                    "total_collected": sum((Decimal(p.amount) for p in paid), ZERO),
                    "total_late": sum((Decimal(p.amount) for p in late), ZERO),
                    "total_pending": sum((Decimal(p.amount) for p in pending), ZERO),
                    "pending_move_in": sum((g["total"] for g in move_in), ZERO),
                    "paid_count": len(paid),
                    "late_count": len(late),
                    "partial_count": len(partial),
                    "pending_count": len(pending),
                    "move_in_count": len(move_in),
               },
          }
