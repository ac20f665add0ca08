# models/scheduling.py
import enum
from sqlalchemy import Column, Integer, String, Text, Date, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class ShiftStatus(str, enum.Enum):
     SCHEDULED = "scheduled"
     COMPLETED = "completed"
     MISSED = "missed"
     CANCELLED = "cancelled"


class TimeEntryStatus(str, enum.Enum):
     ACTIVE = "active"
     COMPLETED = "completed"


class TimeOffStatus(str, enum.Enum):
     PENDING = "pending"
     APPROVED = "approved"
     DENIED = "denied"


class Shift(Base):
     """
     Shift model - a scheduled block of work for a team member.
     start_time / end_time are wall-clock "HH:MM" strings on `date`.
     """
     __tablename__ = "shifts"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=True)

     date = Column(Date, nullable=False, index=True)
     start_time = Column(String(5), nullable=False)
     end_time = Column(String(5), nullable=False)
     notes = Column(Text, nullable=True)
     status = Column(enum_type(ShiftStatus, "shift_status"), default=ShiftStatus.SCHEDULED, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     team_member = relationship("TeamMember", back_populates="shifts")
     property = relationship("Property")

     def __repr__(self):
          return f"<Shift(id={self.id}, member={self.team_member_id}, date={self.date} {self.start_time}-{self.end_time})>"


class TimeEntry(Base):
     """
     TimeEntry model - one clock-in/clock-out pair.
     total_minutes is worked time net of breaks, set on clock-out.
     """
     __tablename__ = "time_entries"

     id = Column(Integer, primary_key=True, autoincrement=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id"), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=True)
     shift_id = Column(Integer, ForeignKey("shifts.id"), nullable=True)
     timesheet_id = Column(Integer, ForeignKey("timesheets.id"), nullable=True, index=True)

     clock_in = Column(DateTime, nullable=False)
     clock_out = Column(DateTime, nullable=True)
     break_minutes = Column(Integer, default=0, nullable=False)
     total_minutes = Column(Integer, nullable=True)
     clock_in_location = Column(String(255), nullable=True)
     clock_out_location = Column(String(255), nullable=True)
     notes = Column(Text, nullable=True)
     is_manual = Column(Boolean, default=False, nullable=False)
     status = Column(
          enum_type(TimeEntryStatus, "time_entry_status"),
          default=TimeEntryStatus.ACTIVE,
          nullable=False,
          index=True
     )

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     team_member = relationship("TeamMember", back_populates="time_entries")
     property = relationship("Property")
     timesheet = relationship("Timesheet", back_populates="time_entries")

     def __repr__(self):
          return f"<TimeEntry(id={self.id}, member={self.team_member_id}, status='{self.status}')>"


class TimeOffRequest(Base):
     """Time off requested by a team member, reviewed by the landlord."""
     __tablename__ = "time_off_requests"

     id = Column(Integer, primary_key=True, autoincrement=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)

     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)
     request_type = Column(String(20), default="vacation", nullable=False)  # vacation, sick, personal, other
     reason = Column(Text, nullable=True)
     status = Column(enum_type(TimeOffStatus, "time_off_status"), default=TimeOffStatus.PENDING, nullable=False)
     review_notes = Column(Text, nullable=True)
     reviewed_at = Column(DateTime, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     team_member = relationship("TeamMember")

     def __repr__(self):
          return f"<TimeOffRequest(id={self.id}, member={self.team_member_id}, status='{self.status}')>"
