# services/dashboard_service.py
"""
Landlord dashboard tiles: counts and sums scoped to a landlord, optionally
narrowed to one property.
"""
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, distinct
from sqlalchemy.orm import Session

from models import (
     Property,
     PropertyUnit,
     Lease,
     LeaseStatus,
     RentPayment,
     PaymentStatus,
     MaintenanceTicket,
     TicketStatus,
     TicketPriority,
     JobPosting,
     Applicant,
     ApplicantStatus,
)
from services.rent_payment_service import landlord_payments_query

ZERO = Decimal("0.00")


class DashboardService:

     @staticmethod
     def get_overview(
          db: Session,
          landlord_id: int,
          property_id: Optional[int] = None,
          today: Optional[date] = None
     ) -> dict:
          today = today or date.today()
          month_start = datetime.combine(today.replace(day=1), time.min)
          year_start = datetime.combine(today.replace(month=1, day=1), time.min)

          def scoped(query):
               query = query.filter(Property.landlord_id == landlord_id)
               if property_id:
                    query = query.filter(Property.id == property_id)
               return query

          properties_count = scoped(db.query(func.count(Property.id))).scalar() or 0

          total_units = scoped(
               db.query(func.count(PropertyUnit.id))
               .join(Property, PropertyUnit.property_id == Property.id)
          ).scalar() or 0

          active_leases = scoped(
               db.query(Lease)
               .join(PropertyUnit, Lease.unit_id == PropertyUnit.id)
               .join(Property, PropertyUnit.property_id == Property.id)
               .filter(Lease.status == LeaseStatus.ACTIVE)
          )
          occupied_units = active_leases.with_entities(func.count(distinct(Lease.unit_id))).scalar() or 0
          scheduled_rent = active_leases.with_entities(func.sum(Lease.rent_amount)).scalar() or ZERO

          tenants_count = scoped(
               db.query(func.count(distinct(Lease.tenant_id)))
               .join(PropertyUnit, Lease.unit_id == PropertyUnit.id)
               .join(Property, PropertyUnit.property_id == Property.id)
          ).scalar() or 0

          tickets = scoped(
               db.query(MaintenanceTicket)
               .join(Property, MaintenanceTicket.property_id == Property.id)
          )
          maintenance_count = tickets.with_entities(func.count(MaintenanceTicket.id)).scalar() or 0
          urgent_tickets = tickets.filter(
               MaintenanceTicket.status.in_([TicketStatus.OPEN, TicketStatus.IN_PROGRESS]),
               MaintenanceTicket.priority == TicketPriority.URGENT
          ).with_entities(func.count(MaintenanceTicket.id)).scalar() or 0

          payments = landlord_payments_query(db, landlord_id)
          if property_id:
               payments = payments.filter(Property.id == property_id)
          paid = payments.filter(RentPayment.status == PaymentStatus.PAID)

          collected_month = paid.filter(RentPayment.paid_at >= month_start).with_entities(
               func.sum(RentPayment.amount)
          ).scalar() or ZERO
          collected_ytd = paid.filter(RentPayment.paid_at >= year_start).with_entities(
               func.sum(RentPayment.amount)
          ).scalar() or ZERO
          available_balance = paid.filter(RentPayment.payout_id.is_(None)).with_entities(
               func.sum(RentPayment.amount)
          ).scalar() or ZERO

          open_applicants = (
               db.query(func.count(Applicant.id))
               .join(JobPosting, Applicant.job_id == JobPosting.id)
               .filter(JobPosting.landlord_id == landlord_id, Applicant.status == ApplicantStatus.NEW)
               .scalar()
          ) or 0

          scheduled_rent = Decimal(scheduled_rent)
          collected_month = Decimal(collected_month)
          collection_rate = (
               float(round(collected_month / scheduled_rent * 100, 1)) if scheduled_rent > 0 else 0.0
          )

          return {
               "properties_count": properties_count,
               "total_units": total_units,
               "occupied_units": occupied_units,
               "vacant_units": max(total_units - occupied_units, 0),
               "tenants_count": tenants_count,
               "maintenance_tickets_count": maintenance_count,
               "urgent_tickets": urgent_tickets,
               "rent_collected_this_month": float(collected_month),
               "rent_collected_ytd": float(collected_ytd),
               "scheduled_rent_monthly": float(scheduled_rent),
               "collection_rate": collection_rate,
               "available_balance": float(available_balance),
               "open_applicants": open_applicants,
          }
