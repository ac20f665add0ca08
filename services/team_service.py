# services/team_service.py
"""
Team Service - team members, compensation, shift schedule and time off.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     Landlord,
     SubscriptionTier,
     User,
     TeamMember,
     TeamMemberCompensation,
     TeamMemberStatus,
     PayType,
     Shift,
     ShiftStatus,
     TimeOffRequest,
     TimeOffStatus,
)
from services.exceptions import NotFoundError, ConflictError, TierRequiredError
from services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)


def ensure_team_tier(landlord: Landlord) -> None:
     if not landlord.has_tier(SubscriptionTier.ENTERPRISE):
          raise TierRequiredError("Team management requires an Enterprise subscription")


def _parse_hhmm(value: str) -> int:
     hours, minutes = value.split(":")
     return int(hours) * 60 + int(minutes)


class TeamService:
     """Service class for team members and scheduling."""

     # -----------------------------------------------------------------------
     # Members
     # -----------------------------------------------------------------------

     @staticmethod
     def list_members(db: Session, landlord_id: int, status: Optional[TeamMemberStatus] = None) -> list[TeamMember]:
          query = db.query(TeamMember).filter(TeamMember.landlord_id == landlord_id)
          if status:
               query = query.filter(TeamMember.status == status)
          return query.order_by(TeamMember.name).all()

     @staticmethod
     def get_member(db: Session, landlord_id: int, member_id: int) -> TeamMember:
          member = db.query(TeamMember).filter(
               TeamMember.id == member_id,
               TeamMember.landlord_id == landlord_id
          ).first()
          if not member:
               raise NotFoundError(f"Team member with ID {member_id} not found")
          return member

     @staticmethod
     def create_member(db: Session, landlord_id: int, name: str, email: str, **fields) -> TeamMember:
          email = email.strip().lower()
          duplicate = db.query(TeamMember).filter(
               TeamMember.landlord_id == landlord_id,
               TeamMember.email == email
          ).first()
          if duplicate:
               raise ConflictError("A team member with this email already exists")

          # Link the portal login if the member already has one
          user = db.query(User).filter(User.email == email).first()
          member = TeamMember(
               landlord_id=landlord_id,
               user_id=user.id if user else None,
               name=name,
               email=email,
               **fields,
          )
          db.add(member)
          db.flush()
          logger.info("Landlord %s added team member %s", landlord_id, member.id)
          return member

     @staticmethod
     def update_member(db: Session, landlord_id: int, member_id: int, **fields) -> TeamMember:
          member = TeamService.get_member(db, landlord_id, member_id)
          for key, value in fields.items():
               setattr(member, key, value)
          db.flush()
          return member

     @staticmethod
     def upsert_compensation(
          db: Session,
          landlord_id: int,
          member_id: int,
          pay_type: PayType,
          hourly_rate: Optional[Decimal] = None,
          salary_amount: Optional[Decimal] = None,
          overtime_rate: Optional[Decimal] = None,
          commission_rate: Optional[Decimal] = None
     ) -> TeamMemberCompensation:
          member = TeamService.get_member(db, landlord_id, member_id)
          if pay_type == PayType.HOURLY and not hourly_rate:
               raise ValueError("Hourly rate is required for hourly pay")
          if pay_type == PayType.SALARY and not salary_amount:
               raise ValueError("Salary amount is required for salaried pay")

          compensation = member.compensation
          if compensation is None:
               compensation = TeamMemberCompensation(team_member_id=member.id)
               db.add(compensation)
               member.compensation = compensation

          compensation.pay_type = pay_type
          compensation.hourly_rate = hourly_rate if pay_type == PayType.HOURLY else None
          compensation.salary_amount = salary_amount if pay_type == PayType.SALARY else None
          compensation.overtime_rate = overtime_rate
          compensation.commission_rate = commission_rate
          db.flush()
          return compensation

     # -----------------------------------------------------------------------
     # Shifts
     # -----------------------------------------------------------------------

     @staticmethod
     def list_shifts(
          db: Session,
          landlord_id: int,
          start_date: Optional[date] = None,
          end_date: Optional[date] = None,
          team_member_id: Optional[int] = None,
          property_id: Optional[int] = None
     ) -> list[Shift]:
          query = db.query(Shift).filter(Shift.landlord_id == landlord_id)
          if start_date:
               query = query.filter(Shift.date >= start_date)
          if end_date:
               query = query.filter(Shift.date <= end_date)
          if team_member_id:
               query = query.filter(Shift.team_member_id == team_member_id)
          if property_id:
               query = query.filter(Shift.property_id == property_id)
          return query.order_by(Shift.date, Shift.start_time).all()

     @staticmethod
     def get_shift(db: Session, landlord_id: int, shift_id: int) -> Shift:
          shift = db.query(Shift).filter(Shift.id == shift_id, Shift.landlord_id == landlord_id).first()
          if not shift:
               raise NotFoundError(f"Shift with ID {shift_id} not found")
          return shift

     @staticmethod
     def _validate_shift(db: Session, landlord_id: int, shift: Shift) -> None:
          member = TeamService.get_member(db, landlord_id, shift.team_member_id)
          if not member.is_active:
               raise ValueError("Cannot schedule an inactive team member")
          if shift.property_id:
               PortfolioService.get_property(db, landlord_id, shift.property_id)
          if _parse_hhmm(shift.end_time) <= _parse_hhmm(shift.start_time):
               raise ValueError("Shift end time must be after start time")

     @staticmethod
     def create_shift(db: Session, landlord_id: int, **fields) -> Shift:
          shift = Shift(landlord_id=landlord_id, status=ShiftStatus.SCHEDULED, **fields)
          TeamService._validate_shift(db, landlord_id, shift)
          db.add(shift)
          db.flush()
          return shift

     @staticmethod
     def update_shift(db: Session, landlord_id: int, shift_id: int, **fields) -> Shift:
          shift = TeamService.get_shift(db, landlord_id, shift_id)
          for key, value in fields.items():
               setattr(shift, key, value)
          TeamService._validate_shift(db, landlord_id, shift)
          db.flush()
          return shift

     @staticmethod
     def delete_shift(db: Session, landlord_id: int, shift_id: int) -> None:
          shift = TeamService.get_shift(db, landlord_id, shift_id)
          db.delete(shift)
          db.flush()

     # -----------------------------------------------------------------------
     # Time off
     # -----------------------------------------------------------------------

     @staticmethod
     def request_time_off(
          db: Session,
          member: TeamMember,
          start_date: date,
          end_date: date,
          request_type: str = "vacation",
          reason: Optional[str] = None
     ) -> TimeOffRequest:
          if end_date < start_date:
               raise ValueError("End date cannot be before start date")
          request = TimeOffRequest(
               team_member_id=member.id,
               landlord_id=member.landlord_id,
               start_date=start_date,
               end_date=end_date,
               request_type=request_type,
               reason=reason,
               status=TimeOffStatus.PENDING,
          )
          db.add(request)
          db.flush()
          return request

     @staticmethod
     def list_time_off(
          db: Session,
          landlord_id: int,
          status: Optional[TimeOffStatus] = None,
          team_member_id: Optional[int] = None
     ) -> list[TimeOffRequest]:
          query = db.query(TimeOffRequest).filter(TimeOffRequest.landlord_id == landlord_id)
          if status:
               query = query.filter(TimeOffRequest.status == status)
          if team_member_id:
               query = query.filter(TimeOffRequest.team_member_id == team_member_id)
          return query.order_by(TimeOffRequest.start_date.desc()).all()

     @staticmethod
     def review_time_off(
          db: Session,
          landlord_id: int,
          request_id: int,
          status: TimeOffStatus,
          review_notes: Optional[str] = None
     ) -> TimeOffRequest:
          request = db.query(TimeOffRequest).filter(
               TimeOffRequest.id == request_id,
               TimeOffRequest.landlord_id == landlord_id
          ).first()
          if not request:
               raise NotFoundError("Time off request not found")
          if request.status != TimeOffStatus.PENDING:
               raise ValueError("This request has already been reviewed")
          if status not in (TimeOffStatus.APPROVED, TimeOffStatus.DENIED):
               raise ValueError("Status must be approved or denied")

          request.status = status
          request.review_notes = review_notes
          request.reviewed_at = datetime.now()
          db.flush()
          return request
