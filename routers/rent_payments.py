# routers/rent_payments.py
"""
Rent payment API routes.

Landlord-scoped CRUD over rent payments plus the monthly rent ledger the
revenue dashboard reads. Business rules live in RentPaymentService and
RentLedgerService; errors they raise are turned into the JSON envelope by
the handlers registered in main.py.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, RentPayment, PaymentStatus, PaymentType
from services.rent_payment_service import RentPaymentService
from services.rent_ledger_service import RentLedgerService
from schemas.base import MessageResponse
from schemas.rent_payment import (
     RentPaymentCreate,
     MarkPaidRequest,
     RentPaymentResponse,
     RentPaymentListResponse,
     MoveInGroup,
     RentLedgerSummary,
     RentLedgerResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord", tags=["rent-payments"])


def build_payment_response(payment: RentPayment) -> RentPaymentResponse:
     """Build a rent payment response with related lease/tenant data."""
     lease = payment.lease
     unit = lease.unit if lease else None
     return RentPaymentResponse(
          id=payment.id,
          lease_id=payment.lease_id,
          tenant_id=payment.tenant_id,
          amount=payment.amount,
          due_date=payment.due_date,
          paid_at=payment.paid_at,
          status=payment.status,
          type=payment.payment_type,
          description=payment.description,
          payout_id=payment.payout_id,
          parent_payment_id=payment.parent_payment_id,
          created_at=payment.created_at,
          tenant_name=payment.tenant.full_name if payment.tenant else None,
          property_name=unit.property.name if unit else None,
          unit_number=unit.unit_number if unit else None,
          rent_amount=lease.rent_amount if lease else None,
     )


# ---------------------------------------------------------------------------
# Rent ledger
# ---------------------------------------------------------------------------

@router.get(
     "/rent-ledger",
     response_model=RentLedgerResponse,
     summary="Monthly rent ledger"
)
def get_rent_ledger(
     year: Optional[int] = Query(None, ge=2000, le=2100),
     month: Optional[int] = Query(None, ge=1, le=12),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Paid, late, partial and pending payments due in the month, plus
     outstanding move-in charges grouped by tenant. Defaults to the
     current month.
     """
     today = date.today()
     ledger = RentLedgerService.build_ledger(
          db,
          landlord.id,
          year or today.year,
          month or today.month,
          property_id=property_id,
     )
     return RentLedgerResponse(
          year=ledger["year"],
          month=ledger["month"],
          paid=[build_payment_response(p) for p in ledger["paid"]],
          late=[build_payment_response(p) for p in ledger["late"]],
          partial=[build_payment_response(p) for p in ledger["partial"]],
          pending=[build_payment_response(p) for p in ledger["pending"]],
          move_in=[
               MoveInGroup(
                    tenant_id=group["tenant_id"],
                    tenant_name=group["tenant_name"],
                    lease_id=group["lease_id"],
                    due_date=group["due_date"],
                    payments=[build_payment_response(p) for p in group["payments"]],
                    total=group["total"],
               )
               for group in ledger["move_in"]
          ],
          summary=RentLedgerSummary(**ledger["summary"]),
     )


# ---------------------------------------------------------------------------
# Rent payments
# ---------------------------------------------------------------------------

@router.post(
     "/rent-payments",
     response_model=RentPaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a rent payment"
)
def create_rent_payment(
     payment_data: RentPaymentCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Create a charge against one of the landlord's leases.

     - **leaseId**: lease being charged
     - **amount**: charge amount (must be positive)
     - **dueDate**: payment due date
     - **type**: rent, late_fee, cleaning_fee, ...
     """
     payment = RentPaymentService.create_payment(
          db,
          landlord.id,
          lease_id=payment_data.lease_id,
          amount=payment_data.amount,
          due_date=payment_data.due_date,
          payment_type=payment_data.type,
          status=payment_data.status,
          description=payment_data.description,
     )
     return build_payment_response(payment)


@router.get(
     "/rent-payments",
     response_model=RentPaymentListResponse,
     summary="List rent payments with filters"
)
def list_rent_payments(
     lease_id: Optional[int] = Query(None, alias="leaseId", description="Filter by lease ID"),
     tenant_id: Optional[int] = Query(None, alias="tenantId", description="Filter by tenant ID"),
     payment_status: Optional[PaymentStatus] = Query(None, alias="status", description="Filter by status"),
     payment_type: Optional[PaymentType] = Query(None, alias="type", description="Filter by type"),
     page: int = Query(1, ge=1, description="Page number"),
     page_size: int = Query(50, ge=1, le=100, alias="pageSize", description="Items per page"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     payments, total = RentPaymentService.list_payments(
          db,
          landlord.id,
          lease_id=lease_id,
          tenant_id=tenant_id,
          status=payment_status,
          payment_type=payment_type,
          page=page,
          page_size=page_size,
     )
     return RentPaymentListResponse(
          payments=[build_payment_response(p) for p in payments],
          total=total,
          page=page,
          page_size=page_size,
     )


@router.get(
     "/rent-payments/{payment_id}",
     response_model=RentPaymentResponse,
     summary="Get rent payment by ID"
)
def get_rent_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return build_payment_response(RentPaymentService.get_payment(db, landlord.id, payment_id))


@router.patch(
     "/rent-payments/{payment_id}/mark-paid",
     response_model=RentPaymentResponse,
     summary="Mark rent payment as paid"
)
def mark_rent_payment_paid(
     payment_id: int,
     body: Optional[MarkPaidRequest] = None,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Record the payment as received and credit the landlord wallet.

     - **amount**: what was actually received. Rent may be paid short; the
       rest becomes a new pending rent charge. Other charges are paid in full.
     """
     body = body or MarkPaidRequest()
     payment = RentPaymentService.mark_paid(
          db,
          landlord.id,
          payment_id,
          amount=body.amount,
          paid_at=body.paid_at,
     )
     return build_payment_response(payment)


@router.patch(
     "/rent-payments/{payment_id}/mark-overdue",
     response_model=RentPaymentResponse,
     summary="Mark rent payment as overdue"
)
def mark_rent_payment_overdue(
     payment_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     payment = RentPaymentService.mark_overdue(db, landlord.id, payment_id)
     return build_payment_response(payment)


@router.delete(
     "/rent-payments/{payment_id}",
     response_model=MessageResponse,
     summary="Delete a rent payment"
)
def delete_rent_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """Paid payments cannot be deleted."""
     RentPaymentService.delete_payment(db, landlord.id, payment_id)
     return MessageResponse(message="Rent payment deleted")
