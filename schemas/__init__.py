# schemas/__init__.py
from .base import CamelModel, Money, MessageResponse
from .auth import RegisterRequest, LoginRequest, TokenResponse
from .dashboard import DashboardResponse
from .rent_payment import (
     RentPaymentCreate,
     RentPaymentResponse,
     RentPaymentListResponse,
     RentLedgerResponse,
)
from .fee_settings import FeeSettingsUpdate, FeeSettingsResponse, EffectiveFeesResponse
from .rent_automation import ReminderSettingsResponse, LateFeeSettingsResponse
from .payout import WalletResponse, CashOutRequest, CashOutResponse
from .contractor import ContractorCreate, ContractorUpdate, ContractorResponse, ContractorListResponse

__all__ = [
     "CamelModel",
     "Money",
     "MessageResponse",
     "RegisterRequest",
     "LoginRequest",
     "TokenResponse",
     "DashboardResponse",
     "RentPaymentCreate",
     "RentPaymentResponse",
     "RentPaymentListResponse",
     "RentLedgerResponse",
     "FeeSettingsUpdate",
     "FeeSettingsResponse",
     "EffectiveFeesResponse",
     "ReminderSettingsResponse",
     "LateFeeSettingsResponse",
     "WalletResponse",
     "CashOutRequest",
     "CashOutResponse",
     "ContractorCreate",
     "ContractorUpdate",
     "ContractorResponse",
     "ContractorListResponse",
]
