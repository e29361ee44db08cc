# File: connext/schemas/project_expert.py
from typing import List, Optional
from datetime import datetime
from connext.models.project_expert import AssignmentStatus
from connext.schemas.base import CamelModel, UTCDateTime
from connext.schemas.expert import VQAnswer


class ProjectExpertCreate(CamelModel):
    project_id: int
    expert_id: int
    notes: Optional[str] = None
    angles: Optional[List[str]] = None


class ProjectExpertUpdate(CamelModel):
    status: Optional[AssignmentStatus] = None
    notes: Optional[str] = None
    angles: Optional[List[str]] = None
    availability_note: Optional[str] = None


class ProjectExpert(CamelModel):
    id: int
    project_id: int
    expert_id: int
    status: str
    invitation_status: str
    pipeline_status: Optional[str] = None
    invitation_token: Optional[str] = None
    assigned_at: datetime
    invited_at: Optional[datetime] = None
    opened_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    selected_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    vq_answers: Optional[List[VQAnswer]] = None
    availability_note: Optional[str] = None
    decline_reason: Optional[str] = None
    notes: Optional[str] = None
    angles: Optional[List[str]] = None


class ScheduleAssignmentRequest(CamelModel):
    scheduled_at: Optional[UTCDateTime] = None


class InviteResponse(CamelModel):
    assignment: ProjectExpert
    invitation_url: str
