# routers/contractors.py
"""
Contractor directory routes.

Each landlord keeps their own list of vendors; every lookup is scoped to
the logged-in landlord.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, Contractor
from services.contractor_service import ContractorService
from schemas.base import MessageResponse
from schemas.contractor import (
     ContractorCreate,
     ContractorUpdate,
     ContractorResponse,
     ContractorListResponse,
     ContractorDetailResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/contractors", tags=["contractors"])


def _build_contractor_response(contractor: Contractor, work_order_count: int = 0) -> ContractorResponse:
     return ContractorResponse(
          id=contractor.id,
          name=contractor.name,
          email=contractor.email,
          phone=contractor.phone,
          specialties=contractor.specialties or [],
          notes=contractor.notes,
          rating=contractor.rating,
          is_payment_ready=contractor.is_payment_ready,
          stripe_onboarding_status=contractor.stripe_onboarding_status,
          work_order_count=work_order_count,
          created_at=contractor.created_at,
     )


def _detail(db: Session, contractor: Contractor) -> ContractorDetailResponse:
     counts = ContractorService.work_order_counts(db, [contractor.id])
     return ContractorDetailResponse(
          contractor=_build_contractor_response(contractor, counts.get(contractor.id, 0))
     )


@router.get("", response_model=ContractorListResponse, summary="List contractors")
def list_contractors(
     search: Optional[str] = Query(None, description="Matches name, email or phone"),
     specialty: Optional[str] = Query(None, description="Only contractors offering this specialty"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     contractors = ContractorService.list_contractors(db, landlord.id, search=search, specialty=specialty)
     counts = ContractorService.work_order_counts(db, [c.id for c in contractors])
     return ContractorListResponse(
          contractors=[_build_contractor_response(c, counts.get(c.id, 0)) for c in contractors]
     )


@router.post(
     "",
     response_model=ContractorDetailResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a contractor"
)
def create_contractor(
     body: ContractorCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     contractor = ContractorService.create_contractor(db, landlord.id, **body.model_dump())
     return ContractorDetailResponse(contractor=_build_contractor_response(contractor))


@router.get("/{contractor_id}", response_model=ContractorDetailResponse, summary="Get a contractor")
def get_contractor(
     contractor_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return _detail(db, ContractorService.get_contractor(db, landlord.id, contractor_id))


@router.patch("/{contractor_id}", response_model=ContractorDetailResponse, summary="Update a contractor")
def update_contractor(
     contractor_id: int,
     body: ContractorUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     contractor = ContractorService.update_contractor(
          db, landlord.id, contractor_id, **body.model_dump(exclude_unset=True)
     )
     return _detail(db, contractor)


@router.delete("/{contractor_id}", response_model=MessageResponse, summary="Delete a contractor")
def delete_contractor(
     contractor_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     ContractorService.delete_contractor(db, landlord.id, contractor_id)
     return MessageResponse(message="Contractor deleted")
