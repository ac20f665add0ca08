# routers/payouts.py
"""
Payout method wizard, wallet and cash-out routes.

Processor failures surface as ProcessorError and are rendered by the
handler in main.py (including the requiresManualEntry hint when instant
bank verification is not available).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord
from services.payout_service import PayoutService
from schemas.base import MessageResponse
from schemas.payout import (
     ManualBankAccountCreate,
     MicroDepositVerifyRequest,
     FinancialConnectionsAttachRequest,
     FinancialConnectionsSessionResponse,
     PayoutMethodResponse,
     PayoutMethodSavedResponse,
     PayoutMethodListResponse,
     PayoutOnboardingResponse,
     PayoutResponse,
     WalletResponse,
     CashOutRequest,
     CashOutResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord", tags=["payouts"])


# ---------------------------------------------------------------------------
# Payout methods
# ---------------------------------------------------------------------------

@router.get("/payout-methods", response_model=PayoutMethodListResponse, summary="List payout methods")
def list_payout_methods(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     methods = PayoutService.list_methods(db, landlord.id)
     return PayoutMethodListResponse(methods=[PayoutMethodResponse.model_validate(m) for m in methods])


@router.post(
     "/payout-methods/financial-connections/session",
     response_model=FinancialConnectionsSessionResponse,
     summary="Start instant bank verification"
)
def create_financial_connections_session(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     session = PayoutService.create_financial_connections_session(db, landlord)
     return FinancialConnectionsSessionResponse(
          client_secret=session["client_secret"],
          session_id=session["session_id"],
     )


@router.post(
     "/payout-methods/financial-connections/attach",
     response_model=PayoutMethodSavedResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Save an instantly verified bank account"
)
def attach_financial_connections_account(
     body: FinancialConnectionsAttachRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     method = PayoutService.attach_financial_connections_account(db, landlord, body.account_id)
     return PayoutMethodSavedResponse(
          message="Bank account connected",
          method=PayoutMethodResponse.model_validate(method),
          needs_verification=False,
     )


@router.post(
     "/payout-methods/manual",
     response_model=PayoutMethodSavedResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a bank account by routing and account number"
)
def add_manual_bank_account(
     body: ManualBankAccountCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     The account is tokenized and attached at the processor. Unless it is
     verified right away, two micro-deposits arrive in 1-2 business days
     and must be confirmed with the verify endpoint.
     """
     method = PayoutService.add_manual_bank_account(
          db,
          landlord,
          account_holder_name=body.account_holder_name,
          routing_number=body.routing_number,
          account_number=body.account_number,
          account_type=body.account_type,
          bank_name=body.bank_name,
     )
     needs_verification = not method.is_verified
     return PayoutMethodSavedResponse(
          message=(
               "Bank account added. Confirm the two micro-deposits to finish verification."
               if needs_verification else "Bank account added"
          ),
          method=PayoutMethodResponse.model_validate(method),
          needs_verification=needs_verification,
     )


@router.post(
     "/payout-methods/{method_id}/verify",
     response_model=PayoutMethodSavedResponse,
     summary="Confirm micro-deposit amounts"
)
def verify_micro_deposits(
     method_id: int,
     body: MicroDepositVerifyRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     method = PayoutService.verify_micro_deposits(db, landlord, method_id, body.amount1, body.amount2)
     return PayoutMethodSavedResponse(
          message="Bank account verified",
          method=PayoutMethodResponse.model_validate(method),
          needs_verification=False,
     )


@router.post(
     "/payout-methods/{method_id}/default",
     response_model=PayoutMethodSavedResponse,
     summary="Make a payout method the default"
)
def set_default_payout_method(
     method_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     method = PayoutService.set_default(db, landlord.id, method_id)
     return PayoutMethodSavedResponse(
          message="Default payout method updated",
          method=PayoutMethodResponse.model_validate(method),
          needs_verification=not method.is_verified,
     )


@router.delete(
     "/payout-methods/{method_id}",
     response_model=MessageResponse,
     summary="Remove a payout method"
)
def delete_payout_method(
     method_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     PayoutService.delete_method(db, landlord, method_id)
     return MessageResponse(message="Payout method removed")


# ---------------------------------------------------------------------------
# Wallet and cash-out
# ---------------------------------------------------------------------------

@router.post(
     "/payouts/onboarding",
     response_model=PayoutOnboardingResponse,
     summary="Start payout account onboarding"
)
def start_payout_onboarding(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Link to the processor's hosted onboarding. Payouts stay disabled
     until the landlord finishes it.
     """
     return PayoutOnboardingResponse(url=PayoutService.create_onboarding_link(db, landlord))


@router.get("/wallet", response_model=WalletResponse, summary="Wallet balance and recent payouts")
def get_wallet(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     summary = PayoutService.get_wallet_summary(db, landlord.id)
     return WalletResponse(
          available_balance=summary["available_balance"],
          pending_balance=summary["pending_balance"],
          last_payout_at=summary["last_payout_at"],
          recent_payouts=[PayoutResponse.model_validate(p) for p in summary["recent_payouts"]],
     )


@router.post("/payouts/cash-out", response_model=CashOutResponse, summary="Cash out collected rent")
def cash_out(
     body: CashOutRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Pay collected rent to the default bank account.

     - **type**: standard (free, 2-3 business days) or instant (1.5%, capped)
     - **amount**: gross amount; defaults to everything available
     - **propertyId**: only cash out rent collected for this property
     """
     payout = PayoutService.cash_out(
          db,
          landlord,
          payout_type=body.type,
          amount=body.amount,
          property_id=body.property_id,
     )
     return CashOutResponse(
          message=f"Payout of ${payout.net_amount:,.2f} is on its way",
          payout=PayoutResponse.model_validate(payout),
     )
