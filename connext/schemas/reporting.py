from typing import Dict, List
from connext.schemas.base import CamelModel
from connext.schemas.project import Project


class DashboardStats(CamelModel):
    total_projects: int
    active_projects: int
    projects_by_status: Dict[str, int]
    total_experts: int
    experts_by_industry: Dict[str, int]
    pending_invitations: int
    completed_calls: int
    total_call_minutes: int
    total_cu_used: float
    total_usage_credits: float
    recent_projects: List[Project]
