# services/maintenance_service.py
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from models import MaintenanceTicket, Property, TicketStatus, TicketPriority
from services.exceptions import NotFoundError
from services.contractor_service import ContractorService
from services.portfolio_service import PortfolioService


class MaintenanceService:
     """Service class for maintenance tickets."""

     @staticmethod
     def list_tickets(
          db: Session,
          landlord_id: int,
          status: Optional[TicketStatus] = None,
          priority: Optional[TicketPriority] = None,
          property_id: Optional[int] = None,
          contractor_id: Optional[int] = None
     ) -> list[MaintenanceTicket]:
          query = (
               db.query(MaintenanceTicket)
               .join(Property, MaintenanceTicket.property_id == Property.id)
               .filter(Property.landlord_id == landlord_id)
          )
          if status:
               query = query.filter(MaintenanceTicket.status == status)
          if priority:
               query = query.filter(MaintenanceTicket.priority == priority)
          if property_id:
               query = query.filter(MaintenanceTicket.property_id == property_id)
          if contractor_id:
               query = query.filter(MaintenanceTicket.contractor_id == contractor_id)
          return query.order_by(MaintenanceTicket.created_at.desc(), MaintenanceTicket.id.desc()).all()

     @staticmethod
     def get_ticket(db: Session, landlord_id: int, ticket_id: int) -> MaintenanceTicket:
          ticket = (
               db.query(MaintenanceTicket)
               .join(Property, MaintenanceTicket.property_id == Property.id)
               .filter(MaintenanceTicket.id == ticket_id, Property.landlord_id == landlord_id)
               .first()
          )
          if not ticket:
               raise NotFoundError(f"Maintenance ticket with ID {ticket_id} not found")
          return ticket

     @staticmethod
     def create_ticket(db: Session, landlord_id: int, property_id: int, **fields) -> MaintenanceTicket:
          PortfolioService.get_property(db, landlord_id, property_id)
          if fields.get("unit_id"):
               unit = PortfolioService.get_unit(db, landlord_id, fields["unit_id"])
               if unit.property_id != property_id:
                    raise ValueError("Unit does not belong to this property")
          if fields.get("contractor_id"):
               ContractorService.get_contractor(db, landlord_id, fields["contractor_id"])
          ticket = MaintenanceTicket(property_id=property_id, **fields)
          db.add(ticket)
          db.flush()
          return ticket

     @staticmethod
     def update_ticket(db: Session, landlord_id: int, ticket_id: int, **fields) -> MaintenanceTicket:
          ticket = MaintenanceService.get_ticket(db, landlord_id, ticket_id)
          if fields.get("contractor_id"):
               ContractorService.get_contractor(db, landlord_id, fields["contractor_id"])
          new_status = fields.get("status")
          if new_status == TicketStatus.RESOLVED and ticket.status != TicketStatus.RESOLVED:
               ticket.resolved_at = datetime.now()
          for key, value in fields.items():
               setattr(ticket, key, value)
          db.flush()
          return ticket
