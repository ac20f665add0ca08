# schemas/maintenance.py
from datetime import datetime
from typing import Optional
from pydantic import Field

from models import TicketStatus, TicketPriority
from .base import CamelModel


class MaintenanceTicketCreate(CamelModel):
     property_id: int = Field(..., gt=0)
     unit_id: Optional[int] = Field(None, gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     contractor_id: Optional[int] = Field(None, gt=0)
     title: str = Field(..., min_length=3, max_length=200)
     description: Optional[str] = None
     category: str = Field("general", max_length=50)
     priority: TicketPriority = TicketPriority.MEDIUM


class MaintenanceTicketUpdate(CamelModel):
     title: Optional[str] = Field(None, min_length=3, max_length=200)
     description: Optional[str] = None
     category: Optional[str] = Field(None, max_length=50)
     priority: Optional[TicketPriority] = None
     status: Optional[TicketStatus] = None
     contractor_id: Optional[int] = Field(None, gt=0)


class MaintenanceTicketResponse(CamelModel):
     id: int
     property_id: int
     property_name: Optional[str] = None
     unit_id: Optional[int] = None
     tenant_id: Optional[int] = None
     contractor_id: Optional[int] = None
     contractor_name: Optional[str] = None
     title: str
     description: Optional[str] = None
     category: str
     priority: TicketPriority
     status: TicketStatus
     created_at: Optional[datetime] = None
     resolved_at: Optional[datetime] = None
