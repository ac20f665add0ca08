# schemas/team.py
"""
Pydantic schemas for team members, schedule, time tracking, timesheets,
payroll and time off.
"""
import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional, List
from pydantic import Field, ConfigDict

from models import (
     TeamMemberStatus,
     PayType,
     ShiftStatus,
     TimeEntryStatus,
     TimesheetStatus,
     TimeOffStatus,
     PayPeriodType,
     TeamPaymentType,
)
from .base import CamelModel, Money

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"
TeamRole = Literal["manager", "maintenance", "leasing_agent", "cleaner", "other"]


# ---------------------------------------------------------------------------
# Members and compensation
# ---------------------------------------------------------------------------

class TeamMemberCreate(CamelModel):
     name: str = Field(..., min_length=2, max_length=200)
     email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     role: TeamRole = "maintenance"


class TeamMemberUpdate(CamelModel):
     name: Optional[str] = Field(None, min_length=2, max_length=200)
     phone: Optional[str] = Field(None, max_length=50)
     role: Optional[TeamRole] = None
     status: Optional[TeamMemberStatus] = None


class CompensationUpsert(CamelModel):
     pay_type: PayType
     hourly_rate: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
     salary_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     overtime_rate: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
     commission_rate: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"payType": "hourly", "hourlyRate": 22.50, "overtimeRate": 33.75}
          }
     )


class CompensationResponse(CamelModel):
     pay_type: PayType
     hourly_rate: Optional[Money] = None
     salary_amount: Optional[Money] = None
     overtime_rate: Optional[Money] = None
     commission_rate: Optional[Money] = None


class TeamMemberResponse(CamelModel):
     id: int
     name: str
     email: str
     phone: Optional[str] = None
     role: str
     status: TeamMemberStatus
     user_id: Optional[int] = None
     compensation: Optional[CompensationResponse] = None
     created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

class ShiftCreate(CamelModel):
     team_member_id: int = Field(..., gt=0)
     property_id: Optional[int] = Field(None, gt=0)
     date: dt.date
     start_time: str = Field(..., pattern=HHMM)
     end_time: str = Field(..., pattern=HHMM)
     notes: Optional[str] = Field(None, max_length=1000)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "teamMemberId": 3,
                    "propertyId": 1,
                    "date": "2026-03-02",
                    "startTime": "09:00",
                    "endTime": "17:00"
               }
          }
     )


class ShiftUpdate(CamelModel):
     team_member_id: Optional[int] = Field(None, gt=0)
     property_id: Optional[int] = Field(None, gt=0)
     date: Optional[dt.date] = None
     start_time: Optional[str] = Field(None, pattern=HHMM)
     end_time: Optional[str] = Field(None, pattern=HHMM)
     notes: Optional[str] = Field(None, max_length=1000)
     status: Optional[ShiftStatus] = None


class ShiftResponse(CamelModel):
     id: int
     team_member_id: int
     team_member_name: Optional[str] = None
     property_id: Optional[int] = None
     property_name: Optional[str] = None
     date: dt.date
     start_time: str
     end_time: str
     notes: Optional[str] = None
     status: ShiftStatus


# ---------------------------------------------------------------------------
# Time tracking
# ---------------------------------------------------------------------------

class ClockInRequest(CamelModel):
     property_id: Optional[int] = Field(None, gt=0)
     shift_id: Optional[int] = Field(None, gt=0)
     location: Optional[str] = Field(None, max_length=255)
     notes: Optional[str] = Field(None, max_length=1000)


class ClockOutRequest(CamelModel):
     time_entry_id: int = Field(..., gt=0)
     break_minutes: int = Field(0, ge=0, le=480)
     location: Optional[str] = Field(None, max_length=255)
     notes: Optional[str] = Field(None, max_length=1000)


class ManualTimeEntryCreate(CamelModel):
     team_member_id: int = Field(..., gt=0)
     property_id: Optional[int] = Field(None, gt=0)
     clock_in: datetime
     clock_out: datetime
     break_minutes: int = Field(0, ge=0, le=480)
     notes: Optional[str] = Field(None, max_length=1000)


class TimeEntryResponse(CamelModel):
     id: int
     team_member_id: int
     team_member_name: Optional[str] = None
     property_id: Optional[int] = None
     shift_id: Optional[int] = None
     timesheet_id: Optional[int] = None
     clock_in: datetime
     clock_out: Optional[datetime] = None
     break_minutes: int
     total_minutes: Optional[int] = None
     is_manual: bool
     status: TimeEntryStatus
     notes: Optional[str] = None


class ActiveEntryResponse(CamelModel):
     success: bool = True
     entry: Optional[TimeEntryResponse] = None


# ---------------------------------------------------------------------------
# Timesheets
# ---------------------------------------------------------------------------

class TimesheetGenerateRequest(CamelModel):
     team_member_id: int = Field(..., gt=0)
     period_start: date
     period_end: date


class TimesheetReviewRequest(CamelModel):
     status: Literal["approved", "rejected"]
     review_notes: Optional[str] = Field(None, max_length=1000)


class TimesheetResponse(CamelModel):
     id: int
     team_member_id: int
     team_member_name: Optional[str] = None
     period_start: date
     period_end: date
     total_hours: Money
     regular_hours: Money
     overtime_hours: Money
     status: TimesheetStatus
     submitted_at: Optional[datetime] = None
     reviewed_at: Optional[datetime] = None
     review_notes: Optional[str] = None
     paid_at: Optional[datetime] = None


class TimesheetDetailResponse(TimesheetResponse):
     entries: List[TimeEntryResponse] = []


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

class PayrollSettingsSchema(CamelModel):
     pay_period_type: PayPeriodType
     pay_period_start_day: int
     overtime_threshold: Money
     daily_overtime_threshold: Optional[Money] = None
     overtime_multiplier: Money


class PayrollSettingsUpdate(CamelModel):
     pay_period_type: Optional[PayPeriodType] = None
     pay_period_start_day: Optional[int] = Field(None, ge=0, le=31)
     overtime_threshold: Optional[Decimal] = Field(None, ge=0, le=168)
     daily_overtime_threshold: Optional[Decimal] = Field(None, ge=0, le=24)
     overtime_multiplier: Optional[Decimal] = Field(None, ge=1, le=3)


class PayrollSettingsResponse(CamelModel):
     success: bool = True
     settings: PayrollSettingsSchema


class PendingPayrollItem(CamelModel):
     timesheet_id: int
     team_member_id: int
     team_member_name: str
     period_start: date
     period_end: date
     pay_type: PayType
     regular_hours: Money
     overtime_hours: Money
     total_hours: Money
     regular_pay: Money
     overtime_pay: Money
     gross_pay: Money
     platform_fee: Money
     net_pay: Money


class PendingPayrollResponse(CamelModel):
     success: bool = True
     items: List[PendingPayrollItem]
     total: Money


class ProcessPayrollRequest(CamelModel):
     timesheet_ids: List[int] = Field(..., min_length=1)


class BonusRequest(CamelModel):
     team_member_id: int = Field(..., gt=0)
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     description: str = Field(..., min_length=3, max_length=200)


class TeamPaymentResponse(CamelModel):
     id: int
     team_member_id: int
     team_member_name: Optional[str] = None
     timesheet_id: Optional[int] = None
     payment_type: TeamPaymentType
     amount: Money
     platform_fee: Money
     description: Optional[str] = None
     status: str
     period_start: Optional[date] = None
     period_end: Optional[date] = None
     paid_at: Optional[datetime] = None


class ProcessPayrollResponse(CamelModel):
     success: bool = True
     message: str
     payments: List[TeamPaymentResponse]
     total: Money


# ---------------------------------------------------------------------------
# Time off
# ---------------------------------------------------------------------------

class TimeOffCreate(CamelModel):
     start_date: date
     end_date: date
     request_type: Literal["vacation", "sick", "personal", "other"] = "vacation"
     reason: Optional[str] = Field(None, max_length=1000)


class TimeOffReviewRequest(CamelModel):
     status: Literal["approved", "denied"]
     review_notes: Optional[str] = Field(None, max_length=1000)


class TimeOffResponse(CamelModel):
     id: int
     team_member_id: int
     team_member_name: Optional[str] = None
     start_date: date
     end_date: date
     request_type: str
     reason: Optional[str] = None
     status: TimeOffStatus
     review_notes: Optional[str] = None
     reviewed_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class LaborCostRow(CamelModel):
     property_id: Optional[int] = None
     property_name: str
     hours: Money
     cost: Money
     entry_count: int


class LaborCostReport(CamelModel):
     success: bool = True
     start_date: date
     end_date: date
     by_property: List[LaborCostRow]
     total_hours: Money
     total_cost: Money
     entry_count: int
