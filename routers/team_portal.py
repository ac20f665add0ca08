# routers/team_portal.py
"""
Self-service routes for team members: clock in/out, submit timesheets and
request time off.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from models import TeamMember
from services.team_service import TeamService
from services.time_tracking_service import TimeTrackingService
from schemas.team import (
     ClockInRequest,
     ClockOutRequest,
     TimeEntryResponse,
     ActiveEntryResponse,
     TimesheetResponse,
     TimeOffCreate,
     TimeOffResponse,
)
from routers.dependencies import get_current_team_member
from routers.team import build_entry_response, build_timesheet_response, build_time_off_response

router = APIRouter(prefix="/api/team", tags=["team-portal"])


@router.post(
     "/clock-in",
     response_model=TimeEntryResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Clock in"
)
def clock_in(
     body: ClockInRequest,
     db: Session = Depends(get_session),
     member: TeamMember = Depends(get_current_team_member)
):
     entry = TimeTrackingService.clock_in(
          db,
          member,
          property_id=body.property_id,
          shift_id=body.shift_id,
          location=body.location,
          notes=body.notes,
     )
     return build_entry_response(entry)


@router.post("/clock-out", response_model=TimeEntryResponse, summary="Clock out")
def clock_out(
     body: ClockOutRequest,
     db: Session = Depends(get_session),
     member: TeamMember = Depends(get_current_team_member)
):
     entry = TimeTrackingService.clock_out(
          db,
          member,
          body.time_entry_id,
          break_minutes=body.break_minutes,
          location=body.location,
          notes=body.notes,
     )
     return build_entry_response(entry)


@router.get("/time-entries/active", response_model=ActiveEntryResponse, summary="Current open time entry")
def get_active_entry(
     db: Session = Depends(get_session),
     member: TeamMember = Depends(get_current_team_member)
):
     entry = TimeTrackingService.get_active_entry(db, member)
     return ActiveEntryResponse(entry=build_entry_response(entry) if entry else None)


@router.post("/timesheets/{timesheet_id}/submit", response_model=TimesheetResponse, summary="Submit a timesheet")
def submit_timesheet(
     timesheet_id: int,
     db: Session = Depends(get_session),
     member: TeamMember = Depends(get_current_team_member)
):
     return build_timesheet_response(TimeTrackingService.submit_timesheet(db, member, timesheet_id))


@router.post(
     "/time-off",
     response_model=TimeOffResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Request time off"
)
def request_time_off(
     body: TimeOffCreate,
     db: Session = Depends(get_session),
     member: TeamMember = Depends(get_current_team_member)
):
     request = TeamService.request_time_off(
          db,
          member,
          start_date=body.start_date,
          end_date=body.end_date,
          request_type=body.request_type,
          reason=body.reason,
     )
     return build_time_off_response(request)
