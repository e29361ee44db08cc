# File: connext/schemas/project.py
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import Field
from connext.models.project import ProjectStatus
from connext.schemas.base import CamelModel, UTCDateTime


class ProjectBase(CamelModel):
    name: str
    industry: str
    client_name: str
    project_overview: Optional[str] = None
    description: Optional[str] = None
    client_organization_id: Optional[int] = None
    client_poc_name: Optional[str] = None
    client_poc_email: Optional[str] = None
    budget: Optional[float] = None
    created_by_pm_id: Optional[int] = None
    assigned_ra_id: Optional[int] = None


class ProjectCreate(ProjectBase):
    status: ProjectStatus = ProjectStatus.NEW
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None


class ProjectUpdate(CamelModel):
    name: Optional[str] = None
    industry: Optional[str] = None
    client_name: Optional[str] = None
    project_overview: Optional[str] = None
    description: Optional[str] = None
    client_organization_id: Optional[int] = None
    client_poc_name: Optional[str] = None
    client_poc_email: Optional[str] = None
    budget: Optional[float] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None
    created_by_pm_id: Optional[int] = None
    assigned_ra_id: Optional[int] = None


class Project(ProjectBase):
    id: int
    status: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_cu_used: float = 0
    created_at: datetime


class ProjectActivity(CamelModel):
    id: int
    project_id: int
    user_id: Optional[int] = None
    activity_type: str
    description: str
    details: Optional[Dict[str, Any]] = None
    created_at: datetime


class BulkAssignRequest(CamelModel):
    expert_ids: List[int] = Field(min_length=1)
    notes: Optional[str] = None


class BulkAssignResult(CamelModel):
    created: List[int]
    skipped: List[int]


class SendInvitationsRequest(CamelModel):
    project_expert_ids: Optional[List[int]] = None


class SendInvitationsResult(CamelModel):
    invited: List[int]
    skipped: List[int]
