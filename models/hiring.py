# models/hiring.py
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, enum_type


class JobStatus(str, enum.Enum):
     DRAFT = "draft"
     ACTIVE = "active"
     CLOSED = "closed"


class ApplicantStatus(str, enum.Enum):
     NEW = "new"
     REVIEWING = "reviewing"
     INTERVIEW = "interview"
     HIRED = "hired"
     REJECTED = "rejected"


class JobPosting(Base):
     """JobPosting model - an opening on the landlord's team."""
     __tablename__ = "job_postings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=False)
     job_type = Column(String(20), default="full_time", nullable=False)  # full_time, part_time, contract
     location = Column(String(255), nullable=True)
     salary = Column(String(100), nullable=True)  # free text, e.g. "$20-25/hr"
     requirements = Column(Text, nullable=True)
     benefits = Column(Text, nullable=True)
     status = Column(enum_type(JobStatus, "job_status"), default=JobStatus.DRAFT, nullable=False, index=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     applicants = relationship("Applicant", back_populates="job", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<JobPosting(id={self.id}, title='{self.title}', status='{self.status}')>"


class Applicant(Base):
     """Applicant model - someone who applied to a job posting."""
     __tablename__ = "applicants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     job_id = Column(Integer, ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False, index=True)

     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=False)
     phone = Column(String(50), nullable=True)
     resume_url = Column(String(500), nullable=True)
     cover_letter = Column(Text, nullable=True)
     status = Column(enum_type(ApplicantStatus, "applicant_status"), default=ApplicantStatus.NEW, nullable=False)
     notes = Column(Text, nullable=True)
     applied_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     job = relationship("JobPosting", back_populates="applicants")

     def __repr__(self):
          return f"<Applicant(id={self.id}, job_id={self.job_id}, status='{self.status}')>"
