# routers/team.py
"""
Landlord-side team routes: members and pay, the shift schedule, time
entries, timesheets, payroll, time off and labor cost reports.

Reads are open to any landlord; every change needs the Enterprise plan
(require_enterprise raises TierRequiredError -> 403).
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from models import (
     Landlord,
     TeamMember,
     TeamMemberStatus,
     Shift,
     TimeEntry,
     TimeEntryStatus,
     Timesheet,
     TimesheetStatus,
     TimeOffRequest,
     TimeOffStatus,
     TeamPayment,
)
from services.team_service import TeamService
from services.time_tracking_service import TimeTrackingService
from services.payroll_service import PayrollService
from schemas.base import MessageResponse
from schemas.team import (
     TeamMemberCreate,
     TeamMemberUpdate,
     TeamMemberResponse,
     CompensationUpsert,
     CompensationResponse,
     ShiftCreate,
     ShiftUpdate,
     ShiftResponse,
     ManualTimeEntryCreate,
     TimeEntryResponse,
     TimesheetGenerateRequest,
     TimesheetReviewRequest,
     TimesheetResponse,
     TimesheetDetailResponse,
     PayrollSettingsSchema,
     PayrollSettingsUpdate,
     PayrollSettingsResponse,
     PendingPayrollItem,
     PendingPayrollResponse,
     ProcessPayrollRequest,
     BonusRequest,
     TeamPaymentResponse,
     ProcessPayrollResponse,
     TimeOffReviewRequest,
     TimeOffResponse,
     LaborCostRow,
     LaborCostReport,
)
from routers.dependencies import get_current_landlord, require_enterprise

router = APIRouter(prefix="/api/landlord/team", tags=["team"])


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------

def build_member_response(member: TeamMember) -> TeamMemberResponse:
     return TeamMemberResponse(
          id=member.id,
          name=member.name,
          email=member.email,
          phone=member.phone,
          role=member.role,
          status=member.status,
          user_id=member.user_id,
          compensation=(
               CompensationResponse.model_validate(member.compensation) if member.compensation else None
          ),
          created_at=member.created_at,
     )


def build_shift_response(shift: Shift) -> ShiftResponse:
     return ShiftResponse(
          id=shift.id,
          team_member_id=shift.team_member_id,
          team_member_name=shift.team_member.name if shift.team_member else None,
          property_id=shift.property_id,
          property_name=shift.property.name if shift.property else None,
          date=shift.date,
          start_time=shift.start_time,
          end_time=shift.end_time,
          notes=shift.notes,
          status=shift.status,
     )


def build_entry_response(entry: TimeEntry) -> TimeEntryResponse:
     return TimeEntryResponse(
          id=entry.id,
          team_member_id=entry.team_member_id,
          team_member_name=entry.team_member.name if entry.team_member else None,
          property_id=entry.property_id,
          shift_id=entry.shift_id,
          timesheet_id=entry.timesheet_id,
          clock_in=entry.clock_in,
          clock_out=entry.clock_out,
          break_minutes=entry.break_minutes,
          total_minutes=entry.total_minutes,
          is_manual=entry.is_manual,
          status=entry.status,
          notes=entry.notes,
     )


def build_timesheet_response(timesheet: Timesheet, with_entries: bool = False) -> TimesheetResponse:
     fields = dict(
          id=timesheet.id,
          team_member_id=timesheet.team_member_id,
          team_member_name=timesheet.team_member.name if timesheet.team_member else None,
          period_start=timesheet.period_start,
          period_end=timesheet.period_end,
          total_hours=timesheet.total_hours,
          regular_hours=timesheet.regular_hours,
          overtime_hours=timesheet.overtime_hours,
          status=timesheet.status,
          submitted_at=timesheet.submitted_at,
          reviewed_at=timesheet.reviewed_at,
          review_notes=timesheet.review_notes,
          paid_at=timesheet.paid_at,
     )
     if with_entries:
          entries = sorted(timesheet.time_entries, key=lambda e: e.clock_in)
          return TimesheetDetailResponse(**fields, entries=[build_entry_response(e) for e in entries])
     return TimesheetResponse(**fields)


def build_payment_response(payment: TeamPayment) -> TeamPaymentResponse:
     return TeamPaymentResponse(
          id=payment.id,
          team_member_id=payment.team_member_id,
          team_member_name=payment.team_member.name if payment.team_member else None,
          timesheet_id=payment.timesheet_id,
          payment_type=payment.payment_type,
          amount=payment.amount,
          platform_fee=payment.platform_fee,
          description=payment.description,
          status=payment.status,
          period_start=payment.period_start,
          period_end=payment.period_end,
          paid_at=payment.paid_at,
     )


def build_time_off_response(request: TimeOffRequest) -> TimeOffResponse:
     return TimeOffResponse(
          id=request.id,
          team_member_id=request.team_member_id,
          team_member_name=request.team_member.name if request.team_member else None,
          start_date=request.start_date,
          end_date=request.end_date,
          request_type=request.request_type,
          reason=request.reason,
          status=request.status,
          review_notes=request.review_notes,
          reviewed_at=request.reviewed_at,
     )


# ---------------------------------------------------------------------------
# Members and compensation
# ---------------------------------------------------------------------------

@router.get("/members", response_model=List[TeamMemberResponse], summary="List team members")
def list_members(
     member_status: Optional[TeamMemberStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return [build_member_response(m) for m in TeamService.list_members(db, landlord.id, member_status)]


@router.post(
     "/members",
     response_model=TeamMemberResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a team member"
)
def create_member(
     body: TeamMemberCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     member = TeamService.create_member(
          db,
          landlord.id,
          name=body.name,
          email=body.email,
          phone=body.phone,
          role=body.role,
     )
     return build_member_response(member)


@router.patch("/members/{member_id}", response_model=TeamMemberResponse, summary="Update a team member")
def update_member(
     member_id: int,
     body: TeamMemberUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     member = TeamService.update_member(db, landlord.id, member_id, **body.model_dump(exclude_unset=True))
     return build_member_response(member)


@router.get(
     "/members/{member_id}/compensation",
     response_model=CompensationResponse,
     summary="Get a team member's pay"
)
def get_compensation(
     member_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     member = TeamService.get_member(db, landlord.id, member_id)
     if member.compensation is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="No compensation set up for this team member"
          )
     return member.compensation


@router.put(
     "/members/{member_id}/compensation",
     response_model=CompensationResponse,
     summary="Set a team member's pay"
)
def upsert_compensation(
     member_id: int,
     body: CompensationUpsert,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     return TeamService.upsert_compensation(db, landlord.id, member_id, **body.model_dump())


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------

@router.get("/shifts", response_model=List[ShiftResponse], summary="List shifts")
def list_shifts(
     start_date: Optional[date] = Query(None, alias="startDate"),
     end_date: Optional[date] = Query(None, alias="endDate"),
     team_member_id: Optional[int] = Query(None, alias="teamMemberId"),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     shifts = TeamService.list_shifts(
          db,
          landlord.id,
          start_date=start_date,
          end_date=end_date,
          team_member_id=team_member_id,
          property_id=property_id,
     )
     return [build_shift_response(s) for s in shifts]


@router.post(
     "/shifts",
     response_model=ShiftResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Schedule a shift"
)
def create_shift(
     body: ShiftCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     return build_shift_response(TeamService.create_shift(db, landlord.id, **body.model_dump()))


@router.patch("/shifts/{shift_id}", response_model=ShiftResponse, summary="Update a shift")
def update_shift(
     shift_id: int,
     body: ShiftUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     shift = TeamService.update_shift(db, landlord.id, shift_id, **body.model_dump(exclude_unset=True))
     return build_shift_response(shift)


@router.delete("/shifts/{shift_id}", response_model=MessageResponse, summary="Delete a shift")
def delete_shift(
     shift_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     TeamService.delete_shift(db, landlord.id, shift_id)
     return MessageResponse(message="Shift deleted")


# ---------------------------------------------------------------------------
# Time entries
# ---------------------------------------------------------------------------

@router.get("/time-entries", response_model=List[TimeEntryResponse], summary="List time entries")
def list_time_entries(
     team_member_id: Optional[int] = Query(None, alias="teamMemberId"),
     start_date: Optional[date] = Query(None, alias="startDate"),
     end_date: Optional[date] = Query(None, alias="endDate"),
     entry_status: Optional[TimeEntryStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     entries = TimeTrackingService.list_entries(
          db,
          landlord.id,
          team_member_id=team_member_id,
          start_date=start_date,
          end_date=end_date,
          status=entry_status,
     )
     return [build_entry_response(e) for e in entries]


@router.get("/working-now", response_model=List[TimeEntryResponse], summary="Who is clocked in")
def working_now(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return [build_entry_response(e) for e in TimeTrackingService.working_now(db, landlord.id)]


@router.post(
     "/time-entries",
     response_model=TimeEntryResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a manual time entry"
)
def create_manual_entry(
     body: ManualTimeEntryCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     entry = TimeTrackingService.create_manual_entry(db, landlord.id, **body.model_dump())
     return build_entry_response(entry)


# ---------------------------------------------------------------------------
# Timesheets
# ---------------------------------------------------------------------------

@router.post(
     "/timesheets/generate",
     response_model=TimesheetDetailResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Generate a timesheet from time entries"
)
def generate_timesheet(
     body: TimesheetGenerateRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     """
     Sum the member's completed entries in the period and split regular
     and overtime hours using the payroll settings.
     """
     timesheet = TimeTrackingService.generate_timesheet(
          db,
          landlord.id,
          team_member_id=body.team_member_id,
          period_start=body.period_start,
          period_end=body.period_end,
     )
     return build_timesheet_response(timesheet, with_entries=True)


@router.get("/timesheets", response_model=List[TimesheetResponse], summary="List timesheets")
def list_timesheets(
     timesheet_status: Optional[TimesheetStatus] = Query(None, alias="status"),
     team_member_id: Optional[int] = Query(None, alias="teamMemberId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     timesheets = TimeTrackingService.list_timesheets(
          db, landlord.id, status=timesheet_status, team_member_id=team_member_id
     )
     return [build_timesheet_response(t) for t in timesheets]


@router.get("/timesheets/{timesheet_id}", response_model=TimesheetDetailResponse, summary="Get a timesheet")
def get_timesheet(
     timesheet_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     timesheet = TimeTrackingService.get_timesheet(db, landlord.id, timesheet_id)
     return build_timesheet_response(timesheet, with_entries=True)


@router.post(
     "/timesheets/{timesheet_id}/review",
     response_model=TimesheetResponse,
     summary="Approve or reject a submitted timesheet"
)
def review_timesheet(
     timesheet_id: int,
     body: TimesheetReviewRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     timesheet = TimeTrackingService.review_timesheet(
          db,
          landlord.id,
          timesheet_id,
          status=TimesheetStatus(body.status),
          review_notes=body.review_notes,
     )
     return build_timesheet_response(timesheet)


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

@router.get("/payroll/settings", response_model=PayrollSettingsResponse, summary="Get payroll settings")
def get_payroll_settings(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     settings = PayrollService.get_settings(db, landlord.id)
     return PayrollSettingsResponse(settings=PayrollSettingsSchema.model_validate(settings))


@router.put("/payroll/settings", response_model=PayrollSettingsResponse, summary="Update payroll settings")
def update_payroll_settings(
     body: PayrollSettingsUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     settings = PayrollService.update_settings(db, landlord.id, **body.model_dump(exclude_unset=True))
     return PayrollSettingsResponse(settings=PayrollSettingsSchema.model_validate(settings))


@router.get("/payroll/pending", response_model=PendingPayrollResponse, summary="Approved timesheets awaiting pay")
def get_pending_payroll(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     items = []
     for line in PayrollService.pending_payroll(db, landlord.id):
          timesheet = line["timesheet"]
          items.append(PendingPayrollItem(
               timesheet_id=timesheet.id,
               team_member_id=timesheet.team_member_id,
               team_member_name=line["team_member"].name,
               period_start=timesheet.period_start,
               period_end=timesheet.period_end,
               pay_type=line["pay_type"],
               regular_hours=timesheet.regular_hours,
               overtime_hours=timesheet.overtime_hours,
               total_hours=timesheet.total_hours,
               regular_pay=line["regular_pay"],
               overtime_pay=line["overtime_pay"],
               gross_pay=line["gross_pay"],
               platform_fee=line["platform_fee"],
               net_pay=line["net_pay"],
          ))
     return PendingPayrollResponse(
          items=items,
          total=sum((item.net_pay for item in items), Decimal("0.00")),
     )


@router.post("/payroll/process", response_model=ProcessPayrollResponse, summary="Pay approved timesheets")
def process_payroll(
     body: ProcessPayrollRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     """
     Debit the wallet for the selected approved timesheets, record one
     payment per timesheet and mark them paid. Nothing is written if any
     check fails.
     """
     payments = PayrollService.process_payroll(db, landlord.id, body.timesheet_ids)
     total = sum((p.amount for p in payments), Decimal("0.00"))
     return ProcessPayrollResponse(
          message=f"Processed payroll for {len(payments)} timesheet{'s' if len(payments) != 1 else ''}",
          payments=[build_payment_response(p) for p in payments],
          total=total,
     )


@router.post(
     "/payroll/bonus",
     response_model=TeamPaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Pay a bonus"
)
def pay_bonus(
     body: BonusRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     payment = PayrollService.pay_bonus(
          db, landlord.id, body.team_member_id, body.amount, body.description
     )
     return build_payment_response(payment)


@router.get("/payments", response_model=List[TeamPaymentResponse], summary="Team payment history")
def list_team_payments(
     team_member_id: Optional[int] = Query(None, alias="teamMemberId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return [build_payment_response(p) for p in PayrollService.list_payments(db, landlord.id, team_member_id)]


# ---------------------------------------------------------------------------
# Time off
# ---------------------------------------------------------------------------

@router.get("/time-off", response_model=List[TimeOffResponse], summary="List time off requests")
def list_time_off(
     request_status: Optional[TimeOffStatus] = Query(None, alias="status"),
     team_member_id: Optional[int] = Query(None, alias="teamMemberId"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     requests = TeamService.list_time_off(db, landlord.id, status=request_status, team_member_id=team_member_id)
     return [build_time_off_response(r) for r in requests]


@router.post(
     "/time-off/{request_id}/review",
     response_model=TimeOffResponse,
     summary="Approve or deny a time off request"
)
def review_time_off(
     request_id: int,
     body: TimeOffReviewRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     request = TeamService.review_time_off(
          db,
          landlord.id,
          request_id,
          status=TimeOffStatus(body.status),
          review_notes=body.review_notes,
     )
     return build_time_off_response(request)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@router.get("/reports/labor-costs", response_model=LaborCostReport, summary="Labor cost by property")
def labor_costs(
     start: date = Query(..., description="First day of the report"),
     end: date = Query(..., description="Last day of the report"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     if end < start:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="End date cannot be before start date")
     report = TimeTrackingService.labor_costs(db, landlord.id, start, end)
     return LaborCostReport(
          start_date=report["start_date"],
          end_date=report["end_date"],
          by_property=[LaborCostRow(**row) for row in report["by_property"]],
          total_hours=report["total_hours"],
          total_cost=report["total_cost"],
          entry_count=report["entry_count"],
     )
