# database.py
"""
Engine and session handling.

Production runs against Azure SQL through pymssql; any other SQLAlchemy
URL (SQLite for local runs) works through DATABASE_URL. Schema changes
go through Alembic.

Usage:
     # In FastAPI routes:
     @router.get("/properties")
     def list_properties(db: Session = Depends(get_session)):
          ...

     # In scheduled jobs:
     with get_session_context() as db:
          RentAutomationService.run_daily(db)
     """
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from config import config

logger = logging.getLogger(__name__)

SERVER_POOL_OPTIONS = {
     "poolclass": QueuePool,
     "pool_size": 5,
     "max_overflow": 10,
     "pool_timeout": 30,
     "pool_recycle": 1800,
}


def build_engine(url: str) -> Engine:
     if url.startswith("sqlite"):
          options = {"connect_args": {"check_same_thread": False}}
     else:
          options = dict(SERVER_POOL_OPTIONS)
     return create_engine(url, echo=config.SQL_ECHO, **options)


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
     """Commit on success, roll back on any exception, always close."""
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def get_session() -> Generator[Session, None, None]:
     """FastAPI dependency: one unit of work per request."""
     with get_session_context() as session:
          yield session


def init_db() -> None:
     """
     Create any missing tables from the models. Used for local SQLite
     runs; deployed databases are migrated with Alembic.
     """
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection() -> bool:
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
     except Exception:
          logger.exception("Database connection failed")
          return False
     return True
