# services/contractor_service.py
"""
Contractor Service - the landlord's vendor directory.
"""
import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models import Contractor, MaintenanceTicket
from services.exceptions import NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class ContractorService:
     """Service class for contractor directory operations."""

     @staticmethod
     def work_order_counts(db: Session, contractor_ids: list[int]) -> dict[int, int]:
          if not contractor_ids:
               return {}
          rows = (
               db.query(MaintenanceTicket.contractor_id, func.count(MaintenanceTicket.id))
               .filter(MaintenanceTicket.contractor_id.in_(contractor_ids))
               .group_by(MaintenanceTicket.contractor_id)
               .all()
          )
          return {contractor_id: count for contractor_id, count in rows}

     @staticmethod
     def list_contractors(
          db: Session,
          landlord_id: int,
          search: Optional[str] = None,
          specialty: Optional[str] = None
     ) -> list[Contractor]:
          """
          Contractors matching a case-insensitive search over name, email
          and phone, optionally limited to one specialty.
          """
          query = db.query(Contractor).filter(Contractor.landlord_id == landlord_id)
          if search and search.strip():
               pattern = f"%{search.strip()}%"
               query = query.filter(or_(
                    Contractor.name.ilike(pattern),
                    Contractor.email.ilike(pattern),
                    Contractor.phone.ilike(pattern),
               ))
          contractors = query.order_by(Contractor.name).all()
          # specialties is a JSON list; filter in Python to stay dialect-neutral
          if specialty:
               contractors = [c for c in contractors if specialty in (c.specialties or [])]
          return contractors

     @staticmethod
     def get_contractor(db: Session, landlord_id: int, contractor_id: int) -> Contractor:
          contractor = db.query(Contractor).filter(
               Contractor.id == contractor_id,
               Contractor.landlord_id == landlord_id
          ).first()
          if not contractor:
               raise NotFoundError("Contractor not found")
          return contractor

     @staticmethod
     def _ensure_unique_email(db: Session, landlord_id: int, email: str, exclude_id: Optional[int] = None) -> None:
          query = db.query(Contractor).filter(
               Contractor.landlord_id == landlord_id,
               func.lower(Contractor.email) == email.lower()
          )
          if exclude_id:
               query = query.filter(Contractor.id != exclude_id)
          if query.first():
               raise ConflictError("A contractor with this email already exists")

     @staticmethod
     def create_contractor(db: Session, landlord_id: int, **fields) -> Contractor:
          fields["email"] = fields["email"].strip().lower()
          ContractorService._ensure_unique_email(db, landlord_id, fields["email"])
          contractor = Contractor(landlord_id=landlord_id, **fields)
          db.add(contractor)
          db.flush()
          logger.info("Landlord %s added contractor %s", landlord_id, contractor.id)
          return contractor

     @staticmethod
     def update_contractor(db: Session, landlord_id: int, contractor_id: int, **fields) -> Contractor:
          contractor = ContractorService.get_contractor(db, landlord_id, contractor_id)
          if fields.get("email"):
               fields["email"] = fields["email"].strip().lower()
               ContractorService._ensure_unique_email(db, landlord_id, fields["email"], exclude_id=contractor.id)
          for key, value in fields.items():
               setattr(contractor, key, value)
          db.flush()
          return contractor

     @staticmethod
     def delete_contractor(db: Session, landlord_id: int, contractor_id: int) -> None:
          """Delete a contractor; their tickets stay but become unassigned."""
          contractor = ContractorService.get_contractor(db, landlord_id, contractor_id)
          db.query(MaintenanceTicket).filter(
               MaintenanceTicket.contractor_id == contractor.id
          ).update({MaintenanceTicket.contractor_id: None}, synchronize_session="fetch")
          db.delete(contractor)
          db.flush()
