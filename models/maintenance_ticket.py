# models/maintenance_ticket.py
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class TicketStatus(str, enum.Enum):
     OPEN = "open"
     IN_PROGRESS = "in_progress"
     RESOLVED = "resolved"
     CLOSED = "closed"


class TicketPriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"
     URGENT = "urgent"


class MaintenanceTicket(Base):
     """
     MaintenanceTicket model - a repair request for a property or unit.
     """
     __tablename__ = "maintenance_tickets"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
     unit_id = Column(Integer, ForeignKey("property_units.id"), nullable=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=True)
     contractor_id = Column(Integer, ForeignKey("contractors.id"), nullable=True, index=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=True)
     category = Column(String(50), default="general", nullable=False)
     priority = Column(
          enum_type(TicketPriority, "ticket_priority"),
          default=TicketPriority.MEDIUM,
          nullable=False
     )
     status = Column(
          enum_type(TicketStatus, "ticket_status"),
          default=TicketStatus.OPEN,
          nullable=False,
          index=True
     )

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
     resolved_at = Column(DateTime, nullable=True)

     # Relationships
     property = relationship("Property", back_populates="maintenance_tickets")
     contractor = relationship("Contractor", back_populates="maintenance_tickets")

     def __repr__(self):
          return f"<MaintenanceTicket(id={self.id}, status='{self.status}', priority='{self.priority}')>"
