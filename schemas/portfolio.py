# schemas/portfolio.py
"""
Pydantic schemas for properties, units, tenants and leases.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import Field, ConfigDict, EmailStr

from models import LeaseStatus
from .base import CamelModel, Money


class PropertyCreate(CamelModel):
     name: str = Field(..., min_length=1, max_length=255)
     property_type: str = Field("apartment", max_length=50)
     description: Optional[str] = None
     street: Optional[str] = Field(None, max_length=255)
     city: Optional[str] = Field(None, max_length=100)
     state: Optional[str] = Field(None, max_length=100)
     zip_code: Optional[str] = Field(None, max_length=20)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Maple Court",
                    "propertyType": "apartment",
                    "street": "12 Maple St",
                    "city": "Austin",
                    "state": "TX",
                    "zipCode": "78701"
               }
          }
     )


class PropertyUpdate(CamelModel):
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     property_type: Optional[str] = Field(None, max_length=50)
     description: Optional[str] = None
     street: Optional[str] = Field(None, max_length=255)
     city: Optional[str] = Field(None, max_length=100)
     state: Optional[str] = Field(None, max_length=100)
     zip_code: Optional[str] = Field(None, max_length=20)


class UnitCreate(CamelModel):
     unit_number: str = Field(..., min_length=1, max_length=50)
     bedrooms: Optional[int] = Field(None, ge=0)
     bathrooms: Optional[Decimal] = Field(None, ge=0)
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)


class UnitResponse(CamelModel):
     id: int
     property_id: int
     unit_number: str
     bedrooms: Optional[int] = None
     bathrooms: Optional[Money] = None
     rent_amount: Optional[Money] = None
     status: str


class PropertyResponse(CamelModel):
     id: int
     name: str
     property_type: str
     description: Optional[str] = None
     street: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     zip_code: Optional[str] = None
     units: List[UnitResponse] = []
     created_at: datetime


class TenantCreate(CamelModel):
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     email: Optional[EmailStr] = None
     phone: Optional[str] = Field(None, max_length=50)


class TenantResponse(CamelModel):
     id: int
     first_name: str
     last_name: str
     full_name: str
     email: Optional[str] = None
     phone: Optional[str] = None


class LeaseCreate(CamelModel):
     unit_id: int = Field(..., gt=0)
     tenant_id: int = Field(..., gt=0)
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Monthly rent")
     rent_due_day: int = Field(1, ge=1, le=28)
     has_pets: bool = False
     start_date: date
     end_date: date

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "unitId": 1,
                    "tenantId": 1,
                    "rentAmount": 1500.00,
                    "rentDueDay": 1,
                    "hasPets": False,
                    "startDate": "2026-03-01",
                    "endDate": "2027-02-28"
               }
          }
     )


class LeaseResponse(CamelModel):
     id: int
     unit_id: int
     tenant_id: int
     rent_amount: Money
     rent_due_day: int
     has_pets: bool
     start_date: date
     end_date: date
     status: LeaseStatus

     # Optional related data
     tenant_name: Optional[str] = None
     property_id: Optional[int] = None
     property_name: Optional[str] = None
     unit_number: Optional[str] = None
