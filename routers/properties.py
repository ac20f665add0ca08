# routers/properties.py
"""
Property, unit and tenant routes, plus the per-property fee overrides and
effective fee view.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, FeeType
from services.portfolio_service import PortfolioService
from services.rent_payment_service import RentPaymentService
from services.fee_service import FeeService
from schemas.base import MessageResponse
from schemas.portfolio import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     UnitCreate,
     UnitResponse,
     TenantCreate,
     TenantResponse,
)
from schemas.rent_payment import TenantBalanceResponse
from schemas.fee_settings import (
     FeeOverridesUpdate,
     FeeOverrideResponse,
     FeeOverridesResponse,
     EffectiveFeeResponse,
     EffectiveFeesResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord", tags=["properties"])


# ---------------------------------------------------------------------------
# Properties and units
# ---------------------------------------------------------------------------

@router.get("/properties", response_model=List[PropertyResponse], summary="List properties")
def list_properties(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.list_properties(db, landlord.id)


@router.post(
     "/properties",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property"
)
def create_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.create_property(db, landlord.id, **body.model_dump())


@router.get("/properties/{property_id}", response_model=PropertyResponse, summary="Get a property")
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.get_property(db, landlord.id, property_id)


@router.patch("/properties/{property_id}", response_model=PropertyResponse, summary="Update a property")
def update_property(
     property_id: int,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.update_property(
          db, landlord.id, property_id, **body.model_dump(exclude_unset=True)
     )


@router.get("/properties/{property_id}/units", response_model=List[UnitResponse], summary="List units")
def list_units(
     property_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     prop = PortfolioService.get_property(db, landlord.id, property_id)
     return sorted(prop.units, key=lambda u: u.unit_number)


@router.post(
     "/properties/{property_id}/units",
     response_model=UnitResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a unit"
)
def create_unit(
     property_id: int,
     body: UnitCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.create_unit(db, landlord.id, property_id, **body.model_dump())


# ---------------------------------------------------------------------------
# Fee overrides
# ---------------------------------------------------------------------------

def _overrides_response(overrides) -> FeeOverridesResponse:
     return FeeOverridesResponse(
          overrides=[FeeOverrideResponse.model_validate(o) for o in overrides]
     )


@router.get(
     "/properties/{property_id}/fee-overrides",
     response_model=FeeOverridesResponse,
     summary="List fee overrides for a property"
)
def list_fee_overrides(
     property_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return _overrides_response(FeeService.list_overrides(db, landlord.id, property_id))


@router.put(
     "/properties/{property_id}/fee-overrides",
     response_model=FeeOverridesResponse,
     summary="Set fee overrides for a property"
)
def upsert_fee_overrides(
     property_id: int,
     body: FeeOverridesUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Each item either waives the fee for this property (noFee) or replaces
     the landlord default amount.
     """
     for item in body.overrides:
          FeeService.upsert_override(
               db,
               landlord.id,
               property_id,
               item.fee_type,
               no_fee=item.no_fee,
               amount=item.amount,
          )
     return _overrides_response(FeeService.list_overrides(db, landlord.id, property_id))


@router.delete(
     "/properties/{property_id}/fee-overrides/{fee_type}",
     response_model=MessageResponse,
     summary="Remove a fee override"
)
def delete_fee_override(
     property_id: int,
     fee_type: FeeType,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     FeeService.delete_override(db, landlord.id, property_id, fee_type)
     return MessageResponse(message="Fee override removed")


@router.get(
     "/properties/{property_id}/effective-fees",
     response_model=EffectiveFeesResponse,
     summary="Resolved fees for a property"
)
def get_effective_fees(
     property_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     fees = FeeService.effective_fees(db, landlord.id, property_id)
     return EffectiveFeesResponse(
          property_id=property_id,
          fees=[
               EffectiveFeeResponse(
                    fee_type=fee.fee_type,
                    applies=fee.applies,
                    amount=fee.amount,
                    source=fee.source,
               )
               for fee in fees.values()
          ],
     )


# ---------------------------------------------------------------------------
# Tenants
# ---------------------------------------------------------------------------

@router.get("/tenants", response_model=List[TenantResponse], summary="List tenants")
def list_tenants(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.list_tenants(db, landlord.id)


@router.post(
     "/tenants",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a tenant"
)
def create_tenant(
     body: TenantCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return PortfolioService.create_tenant(db, landlord.id, **body.model_dump())


@router.get(
     "/tenants/{tenant_id}/balance",
     response_model=TenantBalanceResponse,
     summary="Get tenant balance"
)
def get_tenant_balance(
     tenant_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Amounts and counts per status for one tenant:
     - **totalOwed**: pending + overdue
     - **paidAmount**: everything received so far
     """
     return RentPaymentService.calculate_tenant_balance(db, landlord.id, tenant_id)
