# services/auth_service.py
"""
Registration, login and JWT issuing.
"""
import logging
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import config
from models import User, UserRole, Landlord
from services.exceptions import ConflictError

logger = logging.getLogger(__name__)

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TTL = timedelta(days=7)


class AuthService:
     """Service class for account creation and authentication."""

     @staticmethod
     def create_access_token(user: User) -> str:
          payload = {
               "id": user.id,
               "role": user.role.value if isinstance(user.role, UserRole) else user.role,
               "exp": datetime.now(timezone.utc) + TOKEN_TTL,
          }
          return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)

     @staticmethod
     def register(
          db: Session,
          email: str,
          password: str,
          first_name: str,
          last_name: str,
          role: UserRole = UserRole.LANDLORD,
          company_name: str | None = None,
     ) -> User:
          """
          Create a user. Landlord accounts also get their Landlord row.

          Raises:
               ConflictError: If the email is already registered
          """
          email = email.strip().lower()
          if db.query(User).filter(User.email == email).first():
               raise ConflictError("An account with this email already exists")

          user = User(
               email=email,
               password=pwd_context.hash(password),
               first_name=first_name,
               last_name=last_name,
               role=role,
          )
          db.add(user)
          db.flush()

          if role == UserRole.LANDLORD:
               db.add(Landlord(
                    user_id=user.id,
                    name=user.full_name,
                    company_name=company_name,
               ))
               db.flush()

          logger.info("Registered %s user %s", role.value, user.id)
          return user

     @staticmethod
     def authenticate(db: Session, email: str, password: str) -> User | None:
          """Return the user when the credentials match, None otherwise."""
          user = db.query(User).filter(User.email == email.strip().lower()).first()
          if not user or not user.is_active:
               return None
          if not pwd_context.verify(password, user.password):
               return None
          return user
