# schemas/hiring.py
from datetime import datetime
from typing import Literal, Optional, List
from pydantic import Field

from models import JobStatus, ApplicantStatus
from .base import CamelModel

JobType = Literal["full_time", "part_time", "contract"]


class JobPostingCreate(CamelModel):
     title: str = Field(..., min_length=3, max_length=200)
     description: str = Field(..., min_length=10)
     job_type: JobType = Field("full_time", alias="type")
     location: Optional[str] = Field(None, max_length=255)
     salary: Optional[str] = Field(None, max_length=100)
     requirements: Optional[str] = None
     benefits: Optional[str] = None
     status: Literal["draft", "active"] = "draft"


class JobPostingUpdate(CamelModel):
     title: Optional[str] = Field(None, min_length=3, max_length=200)
     description: Optional[str] = Field(None, min_length=10)
     job_type: Optional[JobType] = Field(None, alias="type")
     location: Optional[str] = Field(None, max_length=255)
     salary: Optional[str] = Field(None, max_length=100)
     requirements: Optional[str] = None
     benefits: Optional[str] = None
     status: Optional[JobStatus] = None


class JobPostingResponse(CamelModel):
     id: int
     title: str
     description: str
     job_type: str = Field(..., alias="type")
     location: Optional[str] = None
     salary: Optional[str] = None
     requirements: Optional[str] = None
     benefits: Optional[str] = None
     status: JobStatus
     applicant_count: int = 0
     created_at: Optional[datetime] = None


class PublicJobResponse(CamelModel):
     """What applicants see of a posting."""
     id: int
     title: str
     description: str
     job_type: str = Field(..., alias="type")
     location: Optional[str] = None
     salary: Optional[str] = None
     requirements: Optional[str] = None
     benefits: Optional[str] = None


class ApplicantUpdate(CamelModel):
     status: Optional[ApplicantStatus] = None
     notes: Optional[str] = Field(None, max_length=2000)


class ApplicantResponse(CamelModel):
     id: int
     job_id: int
     job_title: Optional[str] = None
     name: str
     email: str
     phone: Optional[str] = None
     resume_url: Optional[str] = None
     cover_letter: Optional[str] = None
     status: ApplicantStatus
     notes: Optional[str] = None
     applied_at: Optional[datetime] = None


class ApplicationReceivedResponse(CamelModel):
     success: bool = True
     message: str
     applicant_id: int


class ApplicantListResponse(CamelModel):
     success: bool = True
     applicants: List[ApplicantResponse]
