# services/portfolio_service.py
"""
Portfolio Service - properties, units, tenants and leases.

Every lookup is scoped to the calling landlord; records that belong to
another landlord are reported as not found.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import Property, PropertyUnit, Tenant, Lease, LeaseStatus
from services.exceptions import NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class PortfolioService:
     """Service class for property, unit, tenant and lease records."""

     # -----------------------------------------------------------------------
     # Properties and units
     # -----------------------------------------------------------------------

     @staticmethod
     def get_property(db: Session, landlord_id: int, property_id: int) -> Property:
          prop = db.query(Property).filter(
               Property.id == property_id,
               Property.landlord_id == landlord_id
          ).first()
          if not prop:
               raise NotFoundError(f"Property with ID {property_id} not found")
          return prop

     @staticmethod
     def list_properties(db: Session, landlord_id: int) -> list[Property]:
          return (
               db.query(Property)
               .filter(Property.landlord_id == landlord_id)
               .order_by(Property.name)
               .all()
          )

     @staticmethod
     def create_property(db: Session, landlord_id: int, **fields) -> Property:
          prop = Property(landlord_id=landlord_id, **fields)
          db.add(prop)
          db.flush()
          return prop

     @staticmethod
     def update_property(db: Session, landlord_id: int, property_id: int, **fields) -> Property:
          prop = PortfolioService.get_property(db, landlord_id, property_id)
          for key, value in fields.items():
               setattr(prop, key, value)
          db.flush()
          return prop

     @staticmethod
     def create_unit(db: Session, landlord_id: int, property_id: int, **fields) -> PropertyUnit:
          prop = PortfolioService.get_property(db, landlord_id, property_id)
          duplicate = db.query(PropertyUnit).filter(
               PropertyUnit.property_id == prop.id,
               PropertyUnit.unit_number == fields["unit_number"]
          ).first()
          if duplicate:
               raise ConflictError(f"Unit {fields['unit_number']} already exists in this property")
          unit = PropertyUnit(property_id=prop.id, **fields)
          db.add(unit)
          db.flush()
          return unit

     @staticmethod
     def get_unit(db: Session, landlord_id: int, unit_id: int) -> PropertyUnit:
          unit = (
               db.query(PropertyUnit)
               .join(Property, PropertyUnit.property_id == Property.id)
               .filter(PropertyUnit.id == unit_id, Property.landlord_id == landlord_id)
               .first()
          )
          if not unit:
               raise NotFoundError(f"Unit with ID {unit_id} not found")
          return unit

     # -----------------------------------------------------------------------
     # Tenants
     # -----------------------------------------------------------------------

     @staticmethod
     def list_tenants(db: Session, landlord_id: int) -> list[Tenant]:
          return (
               db.query(Tenant)
               .filter(Tenant.landlord_id == landlord_id)
               .order_by(Tenant.last_name, Tenant.first_name)
               .all()
          )

     @staticmethod
     def create_tenant(db: Session, landlord_id: int, **fields) -> Tenant:
          tenant = Tenant(landlord_id=landlord_id, **fields)
          db.add(tenant)
          db.flush()
          return tenant

     @staticmethod
     def get_tenant(db: Session, landlord_id: int, tenant_id: int) -> Tenant:
          tenant = db.query(Tenant).filter(
               Tenant.id == tenant_id,
               Tenant.landlord_id == landlord_id
          ).first()
          if not tenant:
               raise NotFoundError(f"Tenant with ID {tenant_id} not found")
          return tenant

     # -----------------------------------------------------------------------
     # Leases
     # -----------------------------------------------------------------------

     @staticmethod
     def leases_query(db: Session, landlord_id: int):
          return (
               db.query(Lease)
               .join(PropertyUnit, Lease.unit_id == PropertyUnit.id)
               .join(Property, PropertyUnit.property_id == Property.id)
               .filter(Property.landlord_id == landlord_id)
          )

     @staticmethod
     def get_lease(db: Session, landlord_id: int, lease_id: int) -> Lease:
          lease = PortfolioService.leases_query(db, landlord_id).filter(Lease.id == lease_id).first()
          if not lease:
               raise NotFoundError(f"Lease with ID {lease_id} not found")
          return lease

     @staticmethod
     def list_leases(
          db: Session,
          landlord_id: int,
          status: Optional[LeaseStatus] = None,
          property_id: Optional[int] = None
     ) -> list[Lease]:
          query = PortfolioService.leases_query(db, landlord_id)
          if status:
               query = query.filter(Lease.status == status)
          if property_id:
               query = query.filter(Property.id == property_id)
          return query.order_by(Lease.start_date.desc()).all()

     @staticmethod
     def create_lease(
          db: Session,
          landlord_id: int,
          unit_id: int,
          tenant_id: int,
          rent_amount: Decimal,
          start_date: date,
          end_date: date,
          rent_due_day: int = 1,
          has_pets: bool = False
     ) -> Lease:
          """
          Create an active lease and mark the unit occupied.

          Raises:
               NotFoundError: If the unit or tenant is not the landlord's
               ConflictError: If the unit already has an active lease
               ValueError: If the dates are inverted
          """
          unit = PortfolioService.get_unit(db, landlord_id, unit_id)
          tenant = PortfolioService.get_tenant(db, landlord_id, tenant_id)

          if end_date <= start_date:
               raise ValueError("Lease end date must be after the start date")

          active = db.query(Lease).filter(
               Lease.unit_id == unit.id,
               Lease.status == LeaseStatus.ACTIVE
          ).first()
          if active:
               raise ConflictError(f"Unit {unit.unit_number} already has an active lease")

          lease = Lease(
               unit_id=unit.id,
               tenant_id=tenant.id,
               rent_amount=rent_amount,
               rent_due_day=rent_due_day,
               has_pets=has_pets,
               start_date=start_date,
               end_date=end_date,
               status=LeaseStatus.ACTIVE,
          )
          db.add(lease)
          unit.status = "occupied"
          db.flush()

          logger.info("Created lease %s for tenant %s on unit %s", lease.id, tenant.id, unit.id)
          return lease

     @staticmethod
     def terminate_lease(db: Session, landlord_id: int, lease_id: int) -> Lease:
          lease = PortfolioService.get_lease(db, landlord_id, lease_id)
          if lease.status != LeaseStatus.ACTIVE:
               raise ValueError("Only active leases can be terminated")
          lease.status = LeaseStatus.TERMINATED
          lease.unit.status = "vacant"
          db.flush()
          return lease
