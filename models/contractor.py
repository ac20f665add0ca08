# models/contractor.py
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from .base import Base


CONTRACTOR_SPECIALTIES = (
     "plumbing",
     "electrical",
     "hvac",
     "appliance_repair",
     "carpentry",
     "painting",
     "flooring",
     "roofing",
     "landscaping",
     "cleaning",
     "pest_control",
     "locksmith",
     "general_handyman",
     "other",
)


class Contractor(Base):
     """
     Contractor model - an outside vendor in the landlord's directory.
     Maintenance tickets can be assigned to a contractor.
     """
     __tablename__ = "contractors"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)

     name = Column(String(100), nullable=False)
     email = Column(String(255), nullable=False)
     phone = Column(String(50), nullable=True)
     specialties = Column(JSON, default=list, nullable=False)
     notes = Column(Text, nullable=True)
     rating = Column(Numeric(2, 1), nullable=True)

     # Payment readiness
     is_payment_ready = Column(Boolean, default=False, nullable=False)
     stripe_onboarding_status = Column(String(20), default="pending", nullable=False)  # pending, complete

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     maintenance_tickets = relationship("MaintenanceTicket", back_populates="contractor")

     def __repr__(self):
          return f"<Contractor(id={self.id}, name='{self.name}')>"
