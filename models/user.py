# models/user.py
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class UserRole(str, enum.Enum):
     """Account roles carried in the JWT payload."""
     ADMIN = "admin"
     LANDLORD = "landlord"
     TENANT = "tenant"
     TEAM_MEMBER = "team_member"


class User(Base):
     """
     User model - central authentication table.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     role = Column(enum_type(UserRole, "user_role"), nullable=False, default=UserRole.LANDLORD)
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     landlord = relationship("Landlord", back_populates="user", uselist=False)

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name}".strip()

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
