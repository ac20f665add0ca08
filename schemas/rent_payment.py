# schemas/rent_payment.py
"""
Pydantic schemas for rent payment and rent ledger API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import Field, ConfigDict

from models import PaymentStatus, PaymentType
from .base import CamelModel, Money


class RentPaymentCreate(CamelModel):
     """Schema for creating a charge against a lease."""
     lease_id: int = Field(..., gt=0, description="Lease ID (must belong to the landlord)")
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Charge amount")
     due_date: date = Field(..., description="Payment due date")
     type: PaymentType = Field(default=PaymentType.RENT, description="What the charge is for")
     status: PaymentStatus = Field(default=PaymentStatus.PENDING)
     description: Optional[str] = Field(None, max_length=255)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "leaseId": 1,
                    "amount": 1500.00,
                    "dueDate": "2026-03-01",
                    "type": "rent",
                    "status": "pending"
               }
          }
     )


class MarkPaidRequest(CamelModel):
     """Amount actually received, when different from the charge."""
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     paid_at: Optional[datetime] = None


class RentPaymentResponse(CamelModel):
     """Schema for rent payment response."""
     id: int
     lease_id: int
     tenant_id: int
     amount: Money
     due_date: date
     paid_at: Optional[datetime] = None
     status: PaymentStatus
     type: PaymentType
     description: Optional[str] = None
     payout_id: Optional[int] = None
     parent_payment_id: Optional[int] = None
     created_at: Optional[datetime] = None

     # Optional related data
     tenant_name: Optional[str] = None
     property_name: Optional[str] = None
     unit_number: Optional[str] = None
     rent_amount: Optional[Money] = None


class RentPaymentListResponse(CamelModel):
     """Schema for paginated rent payment list response."""
     payments: List[RentPaymentResponse]
     total: int
     page: int = 1
     page_size: int = 50


class TenantBalanceResponse(CamelModel):
     tenant_id: int
     total_owed: float
     pending_amount: float
     overdue_amount: float
     paid_amount: float
     total_payments: int
     pending_count: int
     overdue_count: int
     paid_count: int


class MoveInGroup(CamelModel):
     tenant_id: int
     tenant_name: str
     lease_id: int
     due_date: date
     payments: List[RentPaymentResponse]
     total: Money


class RentLedgerSummary(CamelModel):
     total_collected: Money
     total_late: Money
     total_pending: Money
     pending_move_in: Money
     paid_count: int
     late_count: int
     partial_count: int
     pending_count: int
     move_in_count: int


class RentLedgerResponse(CamelModel):
     success: bool = True
     year: int
     month: int
     paid: List[RentPaymentResponse]
     late: List[RentPaymentResponse]
     partial: List[RentPaymentResponse]
     pending: List[RentPaymentResponse]
     move_in: List[MoveInGroup]
     summary: RentLedgerSummary


class MoveInChargesResponse(CamelModel):
     success: bool = True
     message: str
     created: List[RentPaymentResponse]
