# services/hiring_service.py
"""
Hiring Service - job postings and applicants.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

import azure_blob
from config import config
from models import JobPosting, JobStatus, Applicant, ApplicantStatus
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Allowed status moves for a posting
JOB_TRANSITIONS = {
     JobStatus.DRAFT: {JobStatus.ACTIVE, JobStatus.CLOSED},
     JobStatus.ACTIVE: {JobStatus.CLOSED},
     JobStatus.CLOSED: {JobStatus.ACTIVE},
}


class HiringService:
     """Service class for hiring."""

     @staticmethod
     def list_jobs(db: Session, landlord_id: int, status: Optional[JobStatus] = None) -> list[tuple[JobPosting, int]]:
          """Postings with their applicant counts."""
          query = (
               db.query(JobPosting, func.count(Applicant.id))
               .outerjoin(Applicant, Applicant.job_id == JobPosting.id)
               .filter(JobPosting.landlord_id == landlord_id)
               .group_by(JobPosting.id)
          )
          if status:
               query = query.filter(JobPosting.status == status)
          return query.order_by(JobPosting.created_at.desc(), JobPosting.id.desc()).all()

     @staticmethod
     def get_job(db: Session, landlord_id: int, job_id: int) -> JobPosting:
          job = db.query(JobPosting).filter(
               JobPosting.id == job_id,
               JobPosting.landlord_id == landlord_id
          ).first()
          if not job:
               raise NotFoundError(f"Job posting with ID {job_id} not found")
          return job

     @staticmethod
     def create_job(db: Session, landlord_id: int, **fields) -> JobPosting:
          job = JobPosting(landlord_id=landlord_id, **fields)
          db.add(job)
          db.flush()
          return job

     @staticmethod
     def update_job(db: Session, landlord_id: int, job_id: int, **fields) -> JobPosting:
          job = HiringService.get_job(db, landlord_id, job_id)
          new_status = fields.pop("status", None)
          if new_status is not None and new_status != job.status:
               if new_status not in JOB_TRANSITIONS[job.status]:
                    raise ValueError(f"Cannot move a posting from {job.status.value} to {new_status.value}")
               job.status = new_status
          for key, value in fields.items():
               setattr(job, key, value)
          db.flush()
          return job

     @staticmethod
     def delete_job(db: Session, landlord_id: int, job_id: int) -> None:
          job = HiringService.get_job(db, landlord_id, job_id)
          db.delete(job)
          db.flush()

     # -----------------------------------------------------------------------
     # Applicants
     # -----------------------------------------------------------------------

     @staticmethod
     def apply(
          db: Session,
          job_id: int,
          name: str,
          email: str,
          phone: Optional[str] = None,
          cover_letter: Optional[str] = None,
          resume=None
     ) -> Applicant:
          """
          Public application to an active posting. The resume, if any, is
          stored in Azure Blob Storage.
          """
          job = db.query(JobPosting).filter(
               JobPosting.id == job_id,
               JobPosting.status == JobStatus.ACTIVE
          ).first()
          if not job:
               raise NotFoundError("This job is not accepting applications")

          resume_url = None
          if resume is not None and resume.filename:
               resume_url = azure_blob.upload_to_blob(resume, config.RESUME_CONTAINER, f"job-{job.id}")

          applicant = Applicant(
               job_id=job.id,
               name=name,
               email=email.strip().lower(),
               phone=phone,
               cover_letter=cover_letter,
               resume_url=resume_url,
               status=ApplicantStatus.NEW,
          )
          db.add(applicant)
          db.flush()
          logger.info("New applicant %s for job %s", applicant.id, job.id)
          return applicant

     @staticmethod
     def list_applicants(
          db: Session,
          landlord_id: int,
          job_id: Optional[int] = None,
          status: Optional[ApplicantStatus] = None
     ) -> list[Applicant]:
          query = (
               db.query(Applicant)
               .join(JobPosting, Applicant.job_id == JobPosting.id)
               .filter(JobPosting.landlord_id == landlord_id)
          )
          if job_id:
               query = query.filter(Applicant.job_id == job_id)
          if status:
               query = query.filter(Applicant.status == status)
          return query.order_by(Applicant.applied_at.desc(), Applicant.id.desc()).all()

     @staticmethod
     def get_applicant(db: Session, landlord_id: int, applicant_id: int) -> Applicant:
          applicant = (
               db.query(Applicant)
               .join(JobPosting, Applicant.job_id == JobPosting.id)
               .filter(Applicant.id == applicant_id, JobPosting.landlord_id == landlord_id)
               .first()
          )
          if not applicant:
               raise NotFoundError(f"Applicant with ID {applicant_id} not found")
          return applicant

     @staticmethod
     def update_applicant(db: Session, landlord_id: int, applicant_id: int, **fields) -> Applicant:
          applicant = HiringService.get_applicant(db, landlord_id, applicant_id)
          for key, value in fields.items():
               setattr(applicant, key, value)
          db.flush()
          return applicant

     @staticmethod
     def delete_applicant(db: Session, landlord_id: int, applicant_id: int) -> None:
          applicant = HiringService.get_applicant(db, landlord_id, applicant_id)
          if applicant.resume_url:
               azure_blob.delete_from_blob(applicant.resume_url)
          db.delete(applicant)
          db.flush()
