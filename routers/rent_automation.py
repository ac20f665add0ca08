# routers/rent_automation.py
"""
Rent reminder and late fee configuration. Reading is open to every
landlord; saving needs a Pro or Enterprise plan.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord
from services.rent_automation_service import RentAutomationService
from schemas.rent_automation import (
     ReminderSettings,
     ReminderSettingsUpdate,
     ReminderSettingsResponse,
     LateFeeSettingsSchema,
     LateFeeSettingsUpdate,
     LateFeeSettingsResponse,
)
from routers.dependencies import get_current_landlord

router = APIRouter(prefix="/api/landlord/rent-automation", tags=["rent-automation"])


@router.get("/reminders", response_model=ReminderSettingsResponse, summary="Get rent reminder settings")
def get_reminder_settings(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     settings = RentAutomationService.get_reminder_settings(db, landlord.id)
     return ReminderSettingsResponse(settings=ReminderSettings.model_validate(settings))


@router.put("/reminders", response_model=ReminderSettingsResponse, summary="Update rent reminder settings")
def update_reminder_settings(
     body: ReminderSettingsUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     settings = RentAutomationService.update_reminder_settings(
          db, landlord, **body.model_dump(exclude_unset=True)
     )
     return ReminderSettingsResponse(settings=ReminderSettings.model_validate(settings))


@router.get("/late-fees", response_model=LateFeeSettingsResponse, summary="Get late fee settings")
def get_late_fee_settings(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     settings = RentAutomationService.get_late_fee_settings(db, landlord.id)
     return LateFeeSettingsResponse(settings=LateFeeSettingsSchema.model_validate(settings))


@router.put("/late-fees", response_model=LateFeeSettingsResponse, summary="Update late fee settings")
def update_late_fee_settings(
     body: LateFeeSettingsUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     settings = RentAutomationService.update_late_fee_settings(
          db, landlord, **body.model_dump(exclude_unset=True)
     )
     return LateFeeSettingsResponse(settings=LateFeeSettingsSchema.model_validate(settings))
