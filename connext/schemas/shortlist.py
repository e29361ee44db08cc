from typing import List, Optional
from datetime import datetime
from connext.schemas.base import CamelModel


class ShortlistProfile(CamelModel):
    name: str
    email: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    timezone: Optional[str] = None
    years_of_experience: Optional[int] = None
    industry: Optional[str] = None
    expertise: Optional[str] = None
    biography: Optional[str] = None


class ShortlistEmployment(CamelModel):
    company: str
    job_title: str
    from_year: Optional[int] = None
    to_year: Optional[int] = None


class ShortlistVettingAnswer(CamelModel):
    question_id: int
    question_text: str
    answer_text: Optional[str] = None


class ShortlistAvailability(CamelModel):
    note: Optional[str] = None


class ShortlistExpert(CamelModel):
    project_expert_id: int
    expert_id: int
    pipeline_status: Optional[str] = None
    angles: List[str] = []
    responded_at: Optional[datetime] = None
    profile: ShortlistProfile
    employment_history: List[ShortlistEmployment] = []
    vetting_answers: List[ShortlistVettingAnswer] = []
    availability: ShortlistAvailability


class ClientShortlist(CamelModel):
    project_id: int
    project_title: str
    total_experts: int
    experts: List[ShortlistExpert]
