# schemas/rent_automation.py
"""
Pydantic schemas for rent reminder and late fee configuration.
"""
from decimal import Decimal
from typing import Literal, Optional, List
from pydantic import Field, ConfigDict, field_validator

from models import LateFeeType, RecurringInterval
from .base import CamelModel, Money


class ReminderSettings(CamelModel):
     enabled: bool
     reminder_days_before: List[int]
     reminder_channels: List[str]
     custom_message: Optional[str] = None


class ReminderSettingsUpdate(CamelModel):
     enabled: Optional[bool] = None
     reminder_days_before: Optional[List[int]] = Field(None, min_length=1, max_length=10)
     reminder_channels: Optional[List[Literal["email", "sms"]]] = Field(None, min_length=1)
     custom_message: Optional[str] = Field(None, max_length=500)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "enabled": True,
                    "reminderDaysBefore": [7, 3, 1],
                    "reminderChannels": ["email"],
                    "customMessage": "Pay through the tenant portal."
               }
          }
     )

     @field_validator("reminder_days_before")
     @classmethod
     def _days_in_range(cls, value):
          if value is not None and any(day < 1 or day > 30 for day in value):
               raise ValueError("Reminder days must be between 1 and 30")
          return value


class ReminderSettingsResponse(CamelModel):
     success: bool = True
     settings: ReminderSettings


class LateFeeSettingsSchema(CamelModel):
     enabled: bool
     grace_period_days: int
     fee_type: LateFeeType
     fee_amount: Money
     max_fee: Optional[Money] = None
     recurring_fee: bool
     recurring_interval: Optional[RecurringInterval] = None
     notify_tenant: bool


class LateFeeSettingsUpdate(CamelModel):
     enabled: Optional[bool] = None
     grace_period_days: Optional[int] = Field(None, ge=0, le=30)
     fee_type: Optional[LateFeeType] = None
     fee_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     max_fee: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     recurring_fee: Optional[bool] = None
     recurring_interval: Optional[RecurringInterval] = None
     notify_tenant: Optional[bool] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "enabled": True,
                    "gracePeriodDays": 5,
                    "feeType": "percentage",
                    "feeAmount": 5,
                    "maxFee": 100,
                    "notifyTenant": True
               }
          }
     )


class LateFeeSettingsResponse(CamelModel):
     success: bool = True
     settings: LateFeeSettingsSchema
