# routers/fee_settings.py
"""
Landlord fee defaults.

The API groups fees the way the settings page shows them; storage keeps
one FeeSetting row per fee type. The security deposit is stored as a
number of months in the amount column, and last month's rent uses the
enabled flag to mean "required".
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, FeeType, FeeSetting
from services.fee_service import FeeService
from schemas.fee_settings import (
     FeeConfig,
     SecurityDepositConfig,
     LastMonthRentConfig,
     FeeSettings,
     FeeSettingsUpdate,
     FeeSettingsResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord/fee-settings", tags=["fee-settings"])

MONEY_FEES = {
     "pet_deposit": FeeType.PET_DEPOSIT,
     "pet_rent": FeeType.PET_RENT,
     "cleaning_fee": FeeType.CLEANING_FEE,
     "application_fee": FeeType.APPLICATION_FEE,
}


def _selected(setting: FeeSetting) -> list[int]:
     return [] if setting.apply_to_all else list(setting.selected_property_ids or [])


def _settings_payload(settings: dict[FeeType, FeeSetting]) -> FeeSettings:
     groups = {
          key: FeeConfig(
               enabled=settings[fee_type].enabled,
               amount=settings[fee_type].amount,
               apply_to_all=settings[fee_type].apply_to_all,
               selected_properties=_selected(settings[fee_type]),
          )
          for key, fee_type in MONEY_FEES.items()
     }
     deposit = settings[FeeType.SECURITY_DEPOSIT]
     last_month = settings[FeeType.LAST_MONTH_RENT]
     return FeeSettings(
          **groups,
          security_deposit=SecurityDepositConfig(
               months=deposit.amount if deposit.enabled else 0,
               apply_to_all=deposit.apply_to_all,
               selected_properties=_selected(deposit),
          ),
          last_month_rent=LastMonthRentConfig(
               required=last_month.enabled,
               apply_to_all=last_month.apply_to_all,
               selected_properties=_selected(last_month),
          ),
     )


@router.get("", response_model=FeeSettingsResponse, summary="Get fee settings")
def get_fee_settings(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return FeeSettingsResponse(settings=_settings_payload(FeeService.get_settings(db, landlord.id)))


@router.put("", response_model=FeeSettingsResponse, summary="Update fee settings")
def update_fee_settings(
     body: FeeSettingsUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     """
     Upsert any subset of the fee groups. Groups left out keep their
     current values.
     """
     for key, fee_type in MONEY_FEES.items():
          group = getattr(body, key)
          if group is None:
               continue
          FeeService.update_setting(
               db,
               landlord.id,
               fee_type,
               enabled=group.enabled,
               amount=group.amount,
               apply_to_all=group.apply_to_all,
               selected_property_ids=group.selected_properties,
          )

     if body.security_deposit is not None:
          FeeService.update_setting(
               db,
               landlord.id,
               FeeType.SECURITY_DEPOSIT,
               enabled=body.security_deposit.months > 0,
               amount=body.security_deposit.months,
               apply_to_all=body.security_deposit.apply_to_all,
               selected_property_ids=body.security_deposit.selected_properties,
          )

     if body.last_month_rent is not None:
          FeeService.update_setting(
               db,
               landlord.id,
               FeeType.LAST_MONTH_RENT,
               enabled=body.last_month_rent.required,
               apply_to_all=body.last_month_rent.apply_to_all,
               selected_property_ids=body.last_month_rent.selected_properties,
          )

     return FeeSettingsResponse(
          message="Fee settings saved",
          settings=_settings_payload(FeeService.get_settings(db, landlord.id)),
     )
