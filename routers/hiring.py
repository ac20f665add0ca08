# routers/hiring.py
"""
Hiring routes: the landlord's job postings and applicants, plus the
public posting page and application form.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, JobPosting, JobStatus, Applicant, ApplicantStatus
from services.hiring_service import HiringService
from schemas.base import MessageResponse
from schemas.hiring import (
     JobPostingCreate,
     JobPostingUpdate,
     JobPostingResponse,
     PublicJobResponse,
     ApplicantUpdate,
     ApplicantResponse,
     ApplicationReceivedResponse,
     ApplicantListResponse,
)
from routers.dependencies import get_current_landlord, require_enterprise

router = APIRouter(prefix="/api/landlord/hiring", tags=["hiring"])
public_router = APIRouter(prefix="/api/hiring", tags=["hiring"])

MAX_RESUME_BYTES = 5 * 1024 * 1024
RESUME_TYPES = {
     "application/pdf",
     "application/msword",
     "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def _build_job_response(job: JobPosting, applicant_count: int = 0) -> JobPostingResponse:
     return JobPostingResponse(
          id=job.id,
          title=job.title,
          description=job.description,
          job_type=job.job_type,
          location=job.location,
          salary=job.salary,
          requirements=job.requirements,
          benefits=job.benefits,
          status=job.status,
          applicant_count=applicant_count,
          created_at=job.created_at,
     )


def _build_applicant_response(applicant: Applicant) -> ApplicantResponse:
     return ApplicantResponse(
          id=applicant.id,
          job_id=applicant.job_id,
          job_title=applicant.job.title if applicant.job else None,
          name=applicant.name,
          email=applicant.email,
          phone=applicant.phone,
          resume_url=applicant.resume_url,
          cover_letter=applicant.cover_letter,
          status=applicant.status,
          notes=applicant.notes,
          applied_at=applicant.applied_at,
     )


# ---------------------------------------------------------------------------
# Job postings
# ---------------------------------------------------------------------------

@router.get("/jobs", response_model=List[JobPostingResponse], summary="List job postings")
def list_jobs(
     job_status: Optional[JobStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     return [_build_job_response(job, count) for job, count in HiringService.list_jobs(db, landlord.id, job_status)]


@router.post(
     "/jobs",
     response_model=JobPostingResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a job posting"
)
def create_job(
     body: JobPostingCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     fields = body.model_dump()
     fields["status"] = JobStatus(fields["status"])
     return _build_job_response(HiringService.create_job(db, landlord.id, **fields))


@router.patch("/jobs/{job_id}", response_model=JobPostingResponse, summary="Update a job posting")
def update_job(
     job_id: int,
     body: JobPostingUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     job = HiringService.update_job(db, landlord.id, job_id, **body.model_dump(exclude_unset=True))
     return _build_job_response(job, len(job.applicants))


@router.delete("/jobs/{job_id}", response_model=MessageResponse, summary="Delete a job posting")
def delete_job(
     job_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     HiringService.delete_job(db, landlord.id, job_id)
     return MessageResponse(message="Job posting deleted")


# ---------------------------------------------------------------------------
# Applicants
# ---------------------------------------------------------------------------

@router.get("/applicants", response_model=ApplicantListResponse, summary="List applicants")
def list_applicants(
     job_id: Optional[int] = Query(None, alias="jobId"),
     applicant_status: Optional[ApplicantStatus] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(get_current_landlord)
):
     applicants = HiringService.list_applicants(db, landlord.id, job_id=job_id, status=applicant_status)
     return ApplicantListResponse(applicants=[_build_applicant_response(a) for a in applicants])


@router.patch("/applicants/{applicant_id}", response_model=ApplicantResponse, summary="Update an applicant")
def update_applicant(
     applicant_id: int,
     body: ApplicantUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     applicant = HiringService.update_applicant(
          db, landlord.id, applicant_id, **body.model_dump(exclude_unset=True)
     )
     return _build_applicant_response(applicant)


@router.delete("/applicants/{applicant_id}", response_model=MessageResponse, summary="Delete an applicant")
def delete_applicant(
     applicant_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_enterprise)
):
     HiringService.delete_applicant(db, landlord.id, applicant_id)
     return MessageResponse(message="Applicant deleted")


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

@public_router.get("/jobs/{job_id}", response_model=PublicJobResponse, summary="View an open job posting")
def get_public_job(job_id: int, db: Session = Depends(get_session)):
     job = db.query(JobPosting).filter(JobPosting.id == job_id, JobPosting.status == JobStatus.ACTIVE).first()
     if not job:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="This job is not accepting applications")
     return PublicJobResponse(
          id=job.id,
          title=job.title,
          description=job.description,
          job_type=job.job_type,
          location=job.location,
          salary=job.salary,
          requirements=job.requirements,
          benefits=job.benefits,
     )


@public_router.post(
     "/jobs/{job_id}/apply",
     response_model=ApplicationReceivedResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Apply to a job"
)
def apply_to_job(
     job_id: int,
     name: str = Form(..., min_length=2, max_length=200),
     email: str = Form(..., max_length=255),
     phone: Optional[str] = Form(None, max_length=50),
     cover_letter: Optional[str] = Form(None, alias="coverLetter"),
     resume: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session)
):
     """
     Multipart form. The optional resume (PDF or Word, up to 5 MB) is
     stored in Azure Blob Storage.
     """
     if "@" not in email:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A valid email is required")
     if resume is not None and resume.filename:
          if resume.content_type not in RESUME_TYPES:
               raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Resume must be a PDF or Word document"
               )
          if resume.size is not None and resume.size > MAX_RESUME_BYTES:
               raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Resume must be 5 MB or smaller")

     applicant = HiringService.apply(
          db,
          job_id,
          name=name,
          email=email,
          phone=phone,
          cover_letter=cover_letter,
          resume=resume,
     )
     return ApplicationReceivedResponse(message="Application received", applicant_id=applicant.id)
