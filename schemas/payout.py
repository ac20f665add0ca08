# schemas/payout.py
"""
Pydantic schemas for payout methods, wallet and cash-out.
"""
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional, List
from pydantic import Field, ConfigDict, field_validator, model_validator

from models import PayoutType, PayoutStatus
from .base import CamelModel, Money


class ManualBankAccountCreate(CamelModel):
     """Routing/account numbers for micro-deposit verification."""
     account_holder_name: str = Field(..., min_length=2, max_length=200)
     routing_number: str = Field(..., pattern=r"^\d{9}$", description="9-digit ABA routing number")
     account_number: str = Field(..., pattern=r"^\d{4,17}$")
     confirm_account_number: str
     account_type: Literal["checking", "savings"] = "checking"
     bank_name: Optional[str] = Field(None, max_length=200)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "accountHolderName": "Jane Landlord",
                    "routingNumber": "110000000",
                    "accountNumber": "000123456789",
                    "confirmAccountNumber": "000123456789",
                    "accountType": "checking"
               }
          }
     )

     @model_validator(mode="after")
     def _account_numbers_match(self):
          if self.account_number != self.confirm_account_number:
               raise ValueError("Account numbers do not match")
          return self


class MicroDepositVerifyRequest(CamelModel):
     """The two deposit amounts in dollars, e.g. 0.32 and 0.45."""
     amount1: Decimal = Field(..., gt=0, lt=1, decimal_places=2)
     amount2: Decimal = Field(..., gt=0, lt=1, decimal_places=2)


class FinancialConnectionsAttachRequest(CamelModel):
     account_id: str = Field(..., min_length=1)


class FinancialConnectionsSessionResponse(CamelModel):
     success: bool = True
     client_secret: str
     session_id: str


class PayoutMethodResponse(CamelModel):
     id: int
     type: str
     account_holder_name: str
     last4: str
     bank_name: Optional[str] = None
     account_type: Optional[str] = None
     is_default: bool
     is_verified: bool
     created_at: Optional[datetime] = None


class PayoutOnboardingResponse(CamelModel):
     success: bool = True
     url: str


class PayoutMethodSavedResponse(CamelModel):
     success: bool = True
     message: str
     method: PayoutMethodResponse
     needs_verification: bool


class PayoutMethodListResponse(CamelModel):
     success: bool = True
     methods: List[PayoutMethodResponse]


class PayoutResponse(CamelModel):
     id: int
     payout_type: PayoutType
     status: PayoutStatus
     gross_amount: Money
     platform_fee: Money
     instant_fee: Money
     net_amount: Money
     stripe_payout_id: Optional[str] = None
     created_at: Optional[datetime] = None


class WalletResponse(CamelModel):
     success: bool = True
     available_balance: Money
     pending_balance: Money
     last_payout_at: Optional[datetime] = None
     recent_payouts: List[PayoutResponse]


class CashOutRequest(CamelModel):
     type: PayoutType = PayoutType.STANDARD
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     property_id: Optional[int] = Field(None, gt=0)

     @field_validator("amount")
     @classmethod
     def _round_amount(cls, value):
          return value.quantize(Decimal("0.01")) if value is not None else value


class CashOutResponse(CamelModel):
     success: bool = True
     message: str
     payout: PayoutResponse
