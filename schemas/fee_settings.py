# schemas/fee_settings.py
"""
Pydantic schemas for fee settings, property overrides and effective fees.
"""
from decimal import Decimal
from typing import Optional, List
from pydantic import Field, ConfigDict, model_validator

from models import FeeType
from .base import CamelModel, Money


class FeeConfig(CamelModel):
     """A money fee: pet deposit, pet rent, cleaning fee, application fee."""
     enabled: bool
     amount: Money = Field(..., ge=0, max_digits=12, decimal_places=2)
     apply_to_all: bool = True
     selected_properties: List[int] = []


class SecurityDepositConfig(CamelModel):
     """Deposit measured in months of rent; 0 disables it."""
     months: Money = Field(..., ge=0, le=12, max_digits=4, decimal_places=2)
     apply_to_all: bool = True
     selected_properties: List[int] = []


class LastMonthRentConfig(CamelModel):
     required: bool
     apply_to_all: bool = True
     selected_properties: List[int] = []


class FeeSettings(CamelModel):
     pet_deposit: FeeConfig
     pet_rent: FeeConfig
     cleaning_fee: FeeConfig
     application_fee: FeeConfig
     security_deposit: SecurityDepositConfig
     last_month_rent: LastMonthRentConfig


class FeeSettingsUpdate(CamelModel):
     """Any subset of the fee groups; omitted groups are left unchanged."""
     pet_deposit: Optional[FeeConfig] = None
     pet_rent: Optional[FeeConfig] = None
     cleaning_fee: Optional[FeeConfig] = None
     application_fee: Optional[FeeConfig] = None
     security_deposit: Optional[SecurityDepositConfig] = None
     last_month_rent: Optional[LastMonthRentConfig] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "petDeposit": {"enabled": True, "amount": 300, "applyToAll": True, "selectedProperties": []},
                    "cleaningFee": {"enabled": True, "amount": 150, "applyToAll": False, "selectedProperties": [2]},
                    "securityDeposit": {"months": 1, "applyToAll": True, "selectedProperties": []},
                    "lastMonthRent": {"required": True, "applyToAll": True, "selectedProperties": []}
               }
          }
     )


class FeeSettingsResponse(CamelModel):
     success: bool = True
     message: Optional[str] = None
     settings: FeeSettings


class FeeOverrideItem(CamelModel):
     fee_type: FeeType
     no_fee: bool = False
     amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

     @model_validator(mode="after")
     def _amount_or_no_fee(self):
          if not self.no_fee and self.amount is None:
               raise ValueError("Provide an amount or set noFee")
          return self


class FeeOverridesUpdate(CamelModel):
     overrides: List[FeeOverrideItem] = Field(..., min_length=1)


class FeeOverrideResponse(CamelModel):
     id: int
     property_id: int
     fee_type: FeeType
     no_fee: bool
     amount: Optional[Money] = None


class FeeOverridesResponse(CamelModel):
     success: bool = True
     overrides: List[FeeOverrideResponse]


class EffectiveFeeResponse(CamelModel):
     fee_type: FeeType
     applies: bool
     amount: Money
     source: str


class EffectiveFeesResponse(CamelModel):
     success: bool = True
     property_id: int
     fees: List[EffectiveFeeResponse]
