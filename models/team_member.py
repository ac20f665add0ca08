# models/team_member.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class TeamMemberStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"


class PayType(str, enum.Enum):
     HOURLY = "hourly"
     SALARY = "salary"


class TeamMember(Base):
     """
     TeamMember model - staff employed by a landlord (property managers,
     maintenance technicians, leasing agents).
     Linked to a user account once the member has a login.
     """
     __tablename__ = "team_members"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
     user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=False)
     phone = Column(String(50), nullable=True)
     role = Column(String(50), default="maintenance", nullable=False)  # manager, maintenance, leasing_agent, other
     status = Column(
          enum_type(TeamMemberStatus, "team_member_status"),
          default=TeamMemberStatus.ACTIVE,
          nullable=False
     )

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     compensation = relationship(
          "TeamMemberCompensation",
          back_populates="team_member",
          uselist=False,
          cascade="all, delete-orphan"
     )
     shifts = relationship("Shift", back_populates="team_member", cascade="all, delete-orphan")
     time_entries = relationship("TimeEntry", back_populates="team_member", cascade="all, delete-orphan")

     @property
     def is_active(self) -> bool:
          return self.status == TeamMemberStatus.ACTIVE

     def __repr__(self):
          return f"<TeamMember(id={self.id}, name='{self.name}', role='{self.role}')>"


class TeamMemberCompensation(Base):
     """Pay terms for one team member."""
     __tablename__ = "team_member_compensations"

     id = Column(Integer, primary_key=True, autoincrement=True)
     team_member_id = Column(Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, unique=True)
     pay_type = Column(enum_type(PayType, "compensation_pay_type"), default=PayType.HOURLY, nullable=False)
     hourly_rate = Column(Numeric(10, 2), nullable=True)
     salary_amount = Column(Numeric(12, 2), nullable=True)  # annual
     overtime_rate = Column(Numeric(10, 2), nullable=True)
     commission_rate = Column(Numeric(5, 2), nullable=True)  # percent

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     team_member = relationship("TeamMember", back_populates="compensation")

     def __repr__(self):
          return f"<TeamMemberCompensation(team_member_id={self.team_member_id}, pay_type='{self.pay_type}')>"
