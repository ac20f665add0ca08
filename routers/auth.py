# routers/auth.py
"""
Account registration and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from models import UserRole
from services.auth_service import AuthService
from schemas.auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user) -> TokenResponse:
     return TokenResponse(
          token=AuthService.create_access_token(user),
          user=UserResponse(
               id=user.id,
               email=user.email,
               first_name=user.first_name,
               last_name=user.last_name,
               role=user.role.value,
          ),
     )


@router.post(
     "/register",
     response_model=TokenResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an account"
)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     user = AuthService.register(
          db,
          email=body.email,
          password=body.password,
          first_name=body.first_name,
          last_name=body.last_name,
          role=UserRole(body.role),
          company_name=body.company_name,
     )
     return _token_response(user)


@router.post("/login", response_model=TokenResponse, summary="Log in")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     user = AuthService.authenticate(db, body.email, body.password)
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
     return _token_response(user)
