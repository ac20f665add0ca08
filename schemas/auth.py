# schemas/auth.py
from typing import Literal, Optional
from pydantic import Field, EmailStr

from .base import CamelModel


class RegisterRequest(CamelModel):
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     email: EmailStr
     password: str = Field(..., min_length=8, max_length=128)
     role: Literal["landlord", "team_member"] = "landlord"
     company_name: Optional[str] = Field(None, max_length=200)


class LoginRequest(CamelModel):
     email: EmailStr
     password: str


class UserResponse(CamelModel):
     id: int
     email: str
     first_name: str
     last_name: str
     role: str


class TokenResponse(CamelModel):
     success: bool = True
     token: str
     user: UserResponse
