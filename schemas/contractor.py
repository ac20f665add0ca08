# schemas/contractor.py
"""
Pydantic schemas for the contractor directory.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import Field, EmailStr, ConfigDict, field_validator

from models.contractor import CONTRACTOR_SPECIALTIES
from .base import CamelModel, Money


def _check_specialties(value: Optional[List[str]]) -> Optional[List[str]]:
     if value is None:
          return value
     unknown = [s for s in value if s not in CONTRACTOR_SPECIALTIES]
     if unknown:
          raise ValueError(f"Invalid specialty: {', '.join(unknown)}")
     # keep the caller's order, drop repeats
     return list(dict.fromkeys(value))


class ContractorCreate(CamelModel):
     name: str = Field(..., min_length=2, max_length=100)
     email: EmailStr
     phone: Optional[str] = Field(None, max_length=50)
     specialties: List[str] = Field(..., min_length=1)
     notes: Optional[str] = Field(None, max_length=500)
     rating: Optional[Decimal] = Field(None, ge=0, le=5, max_digits=2, decimal_places=1)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Rivera Plumbing",
                    "email": "office@riveraplumbing.com",
                    "phone": "555-0142",
                    "specialties": ["plumbing", "hvac"],
                    "notes": "Available weekends"
               }
          }
     )

     @field_validator("name")
     @classmethod
     def _strip_name(cls, v: str) -> str:
          v = v.strip()
          if len(v) < 2:
               raise ValueError("Name must be at least 2 characters")
          return v

     @field_validator("specialties")
     @classmethod
     def _valid_specialties(cls, v):
          return _check_specialties(v)


class ContractorUpdate(CamelModel):
     name: Optional[str] = Field(None, min_length=2, max_length=100)
     email: Optional[EmailStr] = None
     phone: Optional[str] = Field(None, max_length=50)
     specialties: Optional[List[str]] = Field(None, min_length=1)
     notes: Optional[str] = Field(None, max_length=500)
     rating: Optional[Decimal] = Field(None, ge=0, le=5, max_digits=2, decimal_places=1)
     is_payment_ready: Optional[bool] = None

     @field_validator("specialties")
     @classmethod
     def _valid_specialties(cls, v):
          return _check_specialties(v)


class ContractorResponse(CamelModel):
     id: int
     name: str
     email: str
     phone: Optional[str] = None
     specialties: List[str]
     notes: Optional[str] = None
     rating: Optional[Money] = None
     is_payment_ready: bool
     stripe_onboarding_status: str
     work_order_count: int = 0
     created_at: Optional[datetime] = None


class ContractorListResponse(CamelModel):
     success: bool = True
     contractors: List[ContractorResponse]


class ContractorDetailResponse(CamelModel):
     success: bool = True
     contractor: ContractorResponse
