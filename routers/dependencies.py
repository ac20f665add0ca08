# routers/dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth and resolution of the
landlord or team member behind the token.
"""
import logging

from fastapi import Depends, HTTPException, Request, status
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from config import config
from database import get_session
from models import User, UserRole, Landlord, TeamMember, TeamMemberStatus
from services.team_service import ensure_team_tier

logger = logging.getLogger(__name__)


def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def get_current_user(
     token: dict = Depends(verify_token),
     db: Session = Depends(get_session)
) -> User:
     user = db.query(User).filter(User.id == token.get("id")).first()
     if not user or not user.is_active:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
     return user


def get_current_landlord(
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session)
) -> Landlord:
     """The Landlord row for a landlord user, created on first use."""
     if user.role != UserRole.LANDLORD:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Landlord access required")

     landlord = db.query(Landlord).filter(Landlord.user_id == user.id).first()
     if landlord is None:
          landlord = Landlord(user_id=user.id, name=user.full_name)
          db.add(landlord)
          db.flush()
          logger.info("Created landlord profile %s for user %s", landlord.id, user.id)
     return landlord


def require_enterprise(landlord: Landlord = Depends(get_current_landlord)) -> Landlord:
     ensure_team_tier(landlord)
     return landlord


def get_current_team_member(
     user: User = Depends(get_current_user),
     db: Session = Depends(get_session)
) -> TeamMember:
     """
     The active team member record for the logged-in user. A member added
     by email before the user registered is linked on first use.
     """
     member = db.query(TeamMember).filter(
          TeamMember.user_id == user.id,
          TeamMember.status == TeamMemberStatus.ACTIVE
     ).first()
     if member is None:
          member = db.query(TeamMember).filter(
               TeamMember.email == user.email,
               TeamMember.user_id.is_(None),
               TeamMember.status == TeamMemberStatus.ACTIVE
          ).first()
          if member is not None:
               member.user_id = user.id
               db.flush()
     if member is None:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Team member access required")
     return member
