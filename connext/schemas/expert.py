# File: connext/schemas/expert.py
from typing import List, Optional
from datetime import datetime
from pydantic import EmailStr
from connext.models.expert import ExpertStatus
from connext.schemas.base import CamelModel, UTCDateTime


class EmploymentEntry(CamelModel):
    company: str
    job_title: str
    from_year: Optional[int] = None
    to_year: Optional[int] = None


class ExpertBase(CamelModel):
    name: str
    email: EmailStr
    expertise: str
    industry: str
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    areas_of_expertise: Optional[List[str]] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    years_of_experience: Optional[int] = None
    bio: Optional[str] = None
    work_history: Optional[str] = None
    employment_history: Optional[List[EmploymentEntry]] = None
    can_consult_in_english: bool = True
    hourly_rate: Optional[float] = None
    currency: str = "USD"
    terms_accepted: bool = False
    lgpd_accepted: bool = False


class ExpertCreate(ExpertBase):
    status: ExpertStatus = ExpertStatus.AVAILABLE
    sourced_by_ra_id: Optional[int] = None
    sourced_at: Optional[UTCDateTime] = None
    recruited_by: Optional[str] = None


class ExpertUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    expertise: Optional[str] = None
    industry: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    areas_of_expertise: Optional[List[str]] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    years_of_experience: Optional[int] = None
    bio: Optional[str] = None
    work_history: Optional[str] = None
    employment_history: Optional[List[EmploymentEntry]] = None
    can_consult_in_english: Optional[bool] = None
    hourly_rate: Optional[float] = None
    currency: Optional[str] = None
    status: Optional[ExpertStatus] = None
    terms_accepted: Optional[bool] = None
    lgpd_accepted: Optional[bool] = None
    sourced_by_ra_id: Optional[int] = None
    sourced_at: Optional[UTCDateTime] = None


class Expert(ExpertBase):
    id: int
    status: str
    sourced_by_ra_id: Optional[int] = None
    sourced_at: Optional[datetime] = None
    recruited_by: Optional[str] = None
    created_at: datetime


class VQAnswer(CamelModel):
    question_id: int
    answer: str


class ExpertRegistration(ExpertBase):
    """Self-registration payload submitted through an invitation link."""

    vq_answers: List[VQAnswer] = []
    availability_note: Optional[str] = None
