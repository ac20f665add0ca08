# services/time_tracking_service.py
"""
Time Tracking Service - clock-in/out, time entries, timesheets and the
labor cost report.
"""
import logging
import math
from collections import defaultdict
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     TeamMember,
     TimeEntry,
     TimeEntryStatus,
     Timesheet,
     TimesheetStatus,
     Shift,
     ShiftStatus,
     Property,
     PayType,
)
from services.exceptions import NotFoundError, ConflictError
from services.payroll_service import PayrollService
from services.portfolio_service import PortfolioService
from services.team_service import TeamService

logger = logging.getLogger(__name__)

MAX_BREAK_MINUTES = 480
HOURS = Decimal("0.01")


def worked_minutes(clock_in: datetime, clock_out: datetime, break_minutes: int) -> int:
     """Whole minutes between the two times, less the break, never negative."""
     elapsed = math.floor((clock_out - clock_in).total_seconds() / 60)
     return max(0, elapsed - (break_minutes or 0))


def to_hours(minutes: int) -> Decimal:
     return (Decimal(minutes) / Decimal(60)).quantize(HOURS, rounding=ROUND_HALF_UP)


def split_overtime(
     minutes_by_day: dict[date, int],
     weekly_threshold_hours: Decimal,
     daily_threshold_hours: Optional[Decimal] = None
) -> tuple[int, int]:
     """
     Split worked minutes into (regular, overtime).

     Minutes past the daily threshold (if any) are overtime. The remaining
     regular minutes are then summed per ISO week, and anything past the
     weekly threshold is overtime as well.
     """
     overtime = 0
     regular_by_week = defaultdict(int)
     for day, minutes in minutes_by_day.items():
          if daily_threshold_hours is not None:
               daily_cap = int(Decimal(daily_threshold_hours) * 60)
               if minutes > daily_cap:
                    overtime += minutes - daily_cap
                    minutes = daily_cap
          iso = day.isocalendar()
          regular_by_week[(iso[0], iso[1])] += minutes

     weekly_cap = int(Decimal(weekly_threshold_hours) * 60)
     regular = 0
     for minutes in regular_by_week.values():
          if minutes > weekly_cap:
               overtime += minutes - weekly_cap
               minutes = weekly_cap
          regular += minutes
     return regular, overtime


class TimeTrackingService:
     """Service class for time entries and timesheets."""

     # -----------------------------------------------------------------------
     # Clock in / out (team member)
     # -----------------------------------------------------------------------

     @staticmethod
     def get_active_entry(db: Session, member: TeamMember) -> Optional[TimeEntry]:
          return db.query(TimeEntry).filter(
               TimeEntry.team_member_id == member.id,
               TimeEntry.status == TimeEntryStatus.ACTIVE
          ).first()

     @staticmethod
     def clock_in(
          db: Session,
          member: TeamMember,
          property_id: Optional[int] = None,
          shift_id: Optional[int] = None,
          location: Optional[str] = None,
          notes: Optional[str] = None,
          now: Optional[datetime] = None
     ) -> TimeEntry:
          if TimeTrackingService.get_active_entry(db, member):
               raise ConflictError("You are already clocked in")
          if property_id:
               PortfolioService.get_property(db, member.landlord_id, property_id)
          if shift_id:
               shift = TeamService.get_shift(db, member.landlord_id, shift_id)
               if shift.team_member_id != member.id:
                    raise ValueError("This shift is assigned to someone else")

          entry = TimeEntry(
               team_member_id=member.id,
               property_id=property_id,
               shift_id=shift_id,
               clock_in=now or datetime.now(),
               clock_in_location=location,
               notes=notes,
               break_minutes=0,
               status=TimeEntryStatus.ACTIVE,
          )
          db.add(entry)
          db.flush()
          logger.info("Team member %s clocked in (entry %s)", member.id, entry.id)
          return entry

     @staticmethod
     def clock_out(
          db: Session,
          member: TeamMember,
          time_entry_id: int,
          break_minutes: int = 0,
          location: Optional[str] = None,
          notes: Optional[str] = None,
          now: Optional[datetime] = None
     ) -> TimeEntry:
          entry = db.query(TimeEntry).filter(
               TimeEntry.id == time_entry_id,
               TimeEntry.team_member_id == member.id
          ).first()
          if not entry:
               raise NotFoundError("Time entry not found")
          if entry.status != TimeEntryStatus.ACTIVE:
               raise ValueError("This time entry is already clocked out")

          entry.clock_out = now or datetime.now()
          entry.break_minutes = break_minutes
          entry.total_minutes = worked_minutes(entry.clock_in, entry.clock_out, break_minutes)
          entry.clock_out_location = location
          if notes:
               entry.notes = f"{entry.notes}\n{notes}" if entry.notes else notes
          entry.status = TimeEntryStatus.COMPLETED

          if entry.shift_id:
               shift = db.query(Shift).filter(Shift.id == entry.shift_id).first()
               if shift and shift.status == ShiftStatus.SCHEDULED:
                    shift.status = ShiftStatus.COMPLETED

          db.flush()
          logger.info("Team member %s clocked out (%s minutes)", member.id, entry.total_minutes)
          return entry

     # -----------------------------------------------------------------------
     # Entries (landlord)
     # -----------------------------------------------------------------------

     @staticmethod
     def entries_query(db: Session, landlord_id: int):
          return (
               db.query(TimeEntry)
               .join(TeamMember, TimeEntry.team_member_id == TeamMember.id)
               .filter(TeamMember.landlord_id == landlord_id)
          )

     @staticmethod
     def list_entries(
          db: Session,
          landlord_id: int,
          team_member_id: Optional[int] = None,
          start_date: Optional[date] = None,
          end_date: Optional[date] = None,
          status: Optional[TimeEntryStatus] = None
     ) -> list[TimeEntry]:
          query = TimeTrackingService.entries_query(db, landlord_id)
          if team_member_id:
               query = query.filter(TimeEntry.team_member_id == team_member_id)
          if start_date:
               query = query.filter(TimeEntry.clock_in >= datetime.combine(start_date, time.min))
          if end_date:
               query = query.filter(TimeEntry.clock_in <= datetime.combine(end_date, time.max))
          if status:
               query = query.filter(TimeEntry.status == status)
          return query.order_by(TimeEntry.clock_in.desc()).all()

     @staticmethod
     def working_now(db: Session, landlord_id: int) -> list[TimeEntry]:
          return (
               TimeTrackingService.entries_query(db, landlord_id)
               .filter(TimeEntry.status == TimeEntryStatus.ACTIVE)
               .order_by(TimeEntry.clock_in)
               .all()
          )

     @staticmethod
     def create_manual_entry(
          db: Session,
          landlord_id: int,
          team_member_id: int,
          clock_in: datetime,
          clock_out: datetime,
          break_minutes: int = 0,
          property_id: Optional[int] = None,
          notes: Optional[str] = None
     ) -> TimeEntry:
          member = TeamService.get_member(db, landlord_id, team_member_id)
          if clock_out <= clock_in:
               raise ValueError("Clock-out must be after clock-in")
          if not 0 <= break_minutes <= MAX_BREAK_MINUTES:
               raise ValueError(f"Break must be between 0 and {MAX_BREAK_MINUTES} minutes")
          if property_id:
               PortfolioService.get_property(db, landlord_id, property_id)

          entry = TimeEntry(
               team_member_id=member.id,
               property_id=property_id,
               clock_in=clock_in,
               clock_out=clock_out,
               break_minutes=break_minutes,
               total_minutes=worked_minutes(clock_in, clock_out, break_minutes),
               notes=notes,
               is_manual=True,
               status=TimeEntryStatus.COMPLETED,
          )
          db.add(entry)
          db.flush()
          return entry

     # -----------------------------------------------------------------------
     # Timesheets
     # -----------------------------------------------------------------------

     @staticmethod
     def get_timesheet(db: Session, landlord_id: int, timesheet_id: int) -> Timesheet:
          timesheet = db.query(Timesheet).filter(
               Timesheet.id == timesheet_id,
               Timesheet.landlord_id == landlord_id
          ).first()
          if not timesheet:
               raise NotFoundError(f"Timesheet with ID {timesheet_id} not found")
          return timesheet

     @staticmethod
     def list_timesheets(
          db: Session,
          landlord_id: int,
          status: Optional[TimesheetStatus] = None,
          team_member_id: Optional[int] = None
     ) -> list[Timesheet]:
          query = db.query(Timesheet).filter(Timesheet.landlord_id == landlord_id)
          if status:
               query = query.filter(Timesheet.status == status)
          if team_member_id:
               query = query.filter(Timesheet.team_member_id == team_member_id)
          return query.order_by(Timesheet.period_start.desc(), Timesheet.id.desc()).all()

     @staticmethod
     def generate_timesheet(
          db: Session,
          landlord_id: int,
          team_member_id: int,
          period_start: date,
          period_end: date
     ) -> Timesheet:
          """
          Build a draft timesheet from the member's completed, unassigned
          entries that started inside the period. A rejected timesheet for
          the same period is rebuilt in place.
          """
          member = TeamService.get_member(db, landlord_id, team_member_id)
          if period_end < period_start:
               raise ValueError("Period end cannot be before period start")

          existing = db.query(Timesheet).filter(
               Timesheet.team_member_id == member.id,
               Timesheet.period_start == period_start,
               Timesheet.period_end == period_end
          ).first()
          if existing and existing.status != TimesheetStatus.REJECTED:
               raise ConflictError("A timesheet for this period already exists")

          entries = db.query(TimeEntry).filter(
               TimeEntry.team_member_id == member.id,
               TimeEntry.status == TimeEntryStatus.COMPLETED,
               TimeEntry.timesheet_id.is_(None),
               TimeEntry.clock_in >= datetime.combine(period_start, time.min),
               TimeEntry.clock_in <= datetime.combine(period_end, time.max)
          ).all()
          if not entries:
               raise ValueError("No completed time entries in this period")

          minutes_by_day = defaultdict(int)
          for entry in entries:
               minutes_by_day[entry.clock_in.date()] += entry.total_minutes or 0

          settings = PayrollService.get_settings(db, landlord_id)
          regular, overtime = split_overtime(
               minutes_by_day,
               settings.overtime_threshold,
               settings.daily_overtime_threshold,
          )

          timesheet = existing or Timesheet(
               landlord_id=landlord_id,
               team_member_id=member.id,
               period_start=period_start,
               period_end=period_end,
          )
          timesheet.regular_hours = to_hours(regular)
          timesheet.overtime_hours = to_hours(overtime)
          timesheet.total_hours = to_hours(regular + overtime)
          timesheet.status = TimesheetStatus.DRAFT
          timesheet.submitted_at = None
          timesheet.reviewed_at = None
          timesheet.review_notes = None
          db.add(timesheet)
          db.flush()
          for entry in entries:
               entry.timesheet_id = timesheet.id
          db.flush()
          db.expire(timesheet, ["time_entries"])

          logger.info(
               "Generated timesheet %s for member %s: %s regular, %s overtime",
               timesheet.id, member.id, timesheet.regular_hours, timesheet.overtime_hours
          )
          return timesheet

     @staticmethod
     def submit_timesheet(db: Session, member: TeamMember, timesheet_id: int) -> Timesheet:
          timesheet = db.query(Timesheet).filter(
               Timesheet.id == timesheet_id,
               Timesheet.team_member_id == member.id
          ).first()
          if not timesheet:
               raise NotFoundError(f"Timesheet with ID {timesheet_id} not found")
          if timesheet.status != TimesheetStatus.DRAFT:
               raise ValueError("Only draft timesheets can be submitted")
          timesheet.status = TimesheetStatus.SUBMITTED
          timesheet.submitted_at = datetime.now()
          db.flush()
          return timesheet

     @staticmethod
     def review_timesheet(
          db: Session,
          landlord_id: int,
          timesheet_id: int,
          status: TimesheetStatus,
          review_notes: Optional[str] = None
     ) -> Timesheet:
          timesheet = TimeTrackingService.get_timesheet(db, landlord_id, timesheet_id)
          if timesheet.status != TimesheetStatus.SUBMITTED:
               raise ValueError("Only submitted timesheets can be reviewed")
          if status not in (TimesheetStatus.APPROVED, TimesheetStatus.REJECTED):
               raise ValueError("Status must be approved or rejected")

          timesheet.status = status
          timesheet.review_notes = review_notes
          timesheet.reviewed_at = datetime.now()
          if status == TimesheetStatus.REJECTED:
               # Entries become available for a corrected timesheet
               for entry in timesheet.time_entries:
                    entry.timesheet_id = None
          db.flush()
          if status == TimesheetStatus.REJECTED:
               db.expire(timesheet, ["time_entries"])
          return timesheet

     # -----------------------------------------------------------------------
     # Reports
     # -----------------------------------------------------------------------

     @staticmethod
     def labor_costs(db: Session, landlord_id: int, start_date: date, end_date: date) -> dict:
          """Hours and cost of completed entries, grouped by property."""
          entries = TimeTrackingService.list_entries(
               db, landlord_id,
               start_date=start_date,
               end_date=end_date,
               status=TimeEntryStatus.COMPLETED,
          )
          property_names = {
               p.id: p.name
               for p in db.query(Property).filter(Property.landlord_id == landlord_id).all()
          }

          buckets = {}
          for entry in entries:
               compensation = entry.team_member.compensation
               rate = Decimal("0")
               if compensation and compensation.pay_type == PayType.HOURLY and compensation.hourly_rate:
                    rate = Decimal(compensation.hourly_rate)
               elif compensation and compensation.pay_type == PayType.SALARY and compensation.salary_amount:
                    rate = Decimal(compensation.salary_amount) / Decimal(2080)

               hours = Decimal(entry.total_minutes or 0) / Decimal(60)
               bucket = buckets.setdefault(entry.property_id, {
                    "property_id": entry.property_id,
                    "property_name": property_names.get(entry.property_id, "Unassigned"),
                    "hours": Decimal("0"),
                    "cost": Decimal("0"),
                    "entry_count": 0,
               })
               bucket["hours"] += hours
               bucket["cost"] += hours * rate
               bucket["entry_count"] += 1

          rows = sorted(
               buckets.values(),
               key=lambda b: (b["property_id"] is None, b["property_name"])
          )
          for row in rows:
               row["hours"] = row["hours"].quantize(HOURS, rounding=ROUND_HALF_UP)
               row["cost"] = row["cost"].quantize(HOURS, rounding=ROUND_HALF_UP)

          return {
               "start_date": start_date,
               "end_date": end_date,
               "by_property": rows,
               "total_hours": sum((r["hours"] for r in rows), Decimal("0.00")),
               "total_cost": sum((r["cost"] for r in rows), Decimal("0.00")),
               "entry_count": sum(r["entry_count"] for r in rows),
          }
