# routers/maintenance.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, MaintenanceTicket, TicketStatus, TicketPriority
from services.maintenance_service import MaintenanceService
from schemas.maintenance import MaintenanceTicketCreate, MaintenanceTicketUpdate, MaintenanceTicketResponse
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord/maintenance", tags=["maintenance"])


def _build_ticket_response(ticket: MaintenanceTicket) -> MaintenanceTicketResponse:
     return MaintenanceTicketResponse(
          id=ticket.id,
          property_id=ticket.property_id,
          property_name=ticket.property.name if ticket.property else None,
          unit_id=ticket.unit_id,
          tenant_id=ticket.tenant_id,
          contractor_id=ticket.contractor_id,
          contractor_name=ticket.contractor.name if ticket.contractor else None,
          title=ticket.title,
          description=ticket.description,
          category=ticket.category,
          priority=ticket.priority,
          status=ticket.status,
          created_at=ticket.created_at,
          resolved_at=ticket.resolved_at,
     )


@router.get("", response_model=List[MaintenanceTicketResponse], summary="List maintenance tickets")
def list_tickets(
     ticket_status: Optional[TicketStatus] = Query(None, alias="status"),
     priority: Optional[TicketPriority] = Query(None),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     contractor_id: Optional[int] = Query(None, alias="contractorId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     tickets = MaintenanceService.list_tickets(
          db,
          landlord.id,
          status=ticket_status,
          priority=priority,
          property_id=property_id,
          contractor_id=contractor_id,
     )
     return [_build_ticket_response(t) for t in tickets]


@router.post(
     "",
     response_model=MaintenanceTicketResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Open a maintenance ticket"
)
def create_ticket(
     body: MaintenanceTicketCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     fields = body.model_dump()
     property_id = fields.pop("property_id")
     ticket = MaintenanceService.create_ticket(db, landlord.id, property_id, **fields)
     return _build_ticket_response(ticket)


@router.patch("/{ticket_id}", response_model=MaintenanceTicketResponse, summary="Update a maintenance ticket")
def update_ticket(
     ticket_id: int,
     body: MaintenanceTicketUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     ticket = MaintenanceService.update_ticket(db, landlord.id, ticket_id, **body.model_dump(exclude_unset=True))
     return _build_ticket_response(ticket)
