# routers/leases.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, Lease, LeaseStatus
from services.portfolio_service import PortfolioService
from services.rent_payment_service import RentPaymentService
from schemas.portfolio import LeaseCreate, LeaseResponse
from schemas.rent_payment import MoveInChargesResponse
from routers.dependencies import get_current_landlord
from routers.rent_payments import build_payment_response

router = APIRouter(prefix="/api/landlord/leases", tags=["leases"])


def _build_lease_response(lease: Lease) -> LeaseResponse:
     unit = lease.unit
     return LeaseResponse(
          id=lease.id,
          unit_id=lease.unit_id,
          tenant_id=lease.tenant_id,
          rent_amount=lease.rent_amount,
          rent_due_day=lease.rent_due_day,
          has_pets=lease.has_pets,
          start_date=lease.start_date,
          end_date=lease.end_date,
          status=lease.status,
          tenant_name=lease.tenant.full_name if lease.tenant else None,
          property_id=unit.property_id if unit else None,
          property_name=unit.property.name if unit else None,
          unit_number=unit.unit_number if unit else None,
     )


@router.get("", response_model=List[LeaseResponse], summary="List leases")
def list_leases(
     lease_status: Optional[LeaseStatus] = Query(None, alias="status"),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     leases = PortfolioService.list_leases(db, landlord.id, status=lease_status, property_id=property_id)
     return [_build_lease_response(lease) for lease in leases]


@router.post(
     "",
     response_model=LeaseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a lease"
)
def create_lease(
     body: LeaseCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Start an active lease on a vacant unit. A unit holds at most one
     active lease.
     """
     lease = PortfolioService.create_lease(db, landlord.id, **body.model_dump())
     return _build_lease_response(lease)


@router.get("/{lease_id}", response_model=LeaseResponse, summary="Get a lease")
def get_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return _build_lease_response(PortfolioService.get_lease(db, landlord.id, lease_id))


@router.post("/{lease_id}/terminate", response_model=LeaseResponse, summary="Terminate a lease")
def terminate_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return _build_lease_response(PortfolioService.terminate_lease(db, landlord.id, lease_id))


@router.post(
     "/{lease_id}/move-in-charges",
     response_model=MoveInChargesResponse,
     summary="Create move-in charges"
)
def create_move_in_charges(
     lease_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     First month's rent, security deposit, last month's rent and the
     enabled one-time fees, due on the lease start date. Safe to call
     again: existing charges are never duplicated.
     """
     created, message = RentPaymentService.generate_move_in_charges(db, landlord.id, lease_id)
     return MoveInChargesResponse(
          message=message,
          created=[build_payment_response(p) for p in created],
     )
