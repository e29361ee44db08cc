# File: connext/api/v1/endpoints/reporting.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from connext import schemas
from connext.core import deps
from connext.db.database import get_db
from connext.models.call_record import CallRecord, CallStatus
from connext.models.expert import Expert
from connext.models.project import Project, ProjectStatus
from connext.models.project_expert import InvitationStatus, ProjectExpert
from connext.models.usage_record import UsageRecord
from connext.models.user import User
from connext.services.credit_units import calculate_cu

logger = logging.getLogger(__name__)
router = APIRouter()

CLOSED_PROJECT_STATUSES = (ProjectStatus.COMPLETED.value, ProjectStatus.CANCELLED.value)
PENDING_INVITATION_STATUSES = (InvitationStatus.INVITED.value, InvitationStatus.OPENED.value)


@router.get("/calculate-cu", response_model=schemas.CUCalculation)
def calculate_credit_units(minutes: int = Query(0)) -> Any:
    """Public helper: credit units billed for a call of the given length"""
    return {"minutes": minutes, "cu": calculate_cu(minutes)}


@router.get("/dashboard/stats", response_model=schemas.DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    projects_by_status = dict(
        db.query(Project.status, func.count(Project.id)).group_by(Project.status).all()
    )
    experts_by_industry = {
        industry or "Unspecified": count
        for industry, count in db.query(Expert.industry, func.count(Expert.id)).group_by(Expert.industry).all()
    }
    pending_invitations = (
        db.query(func.count(ProjectExpert.id))
        .filter(ProjectExpert.invitation_status.in_(PENDING_INVITATION_STATUSES))
        .scalar()
    )
    completed_calls, total_call_minutes, total_cu_used = (
        db.query(
            func.count(CallRecord.id),
            func.coalesce(func.sum(CallRecord.actual_duration_minutes), 0),
            func.coalesce(func.sum(CallRecord.cu_used), 0),
        )
        .filter(CallRecord.status == CallStatus.COMPLETED.value)
        .one()
    )
    total_usage_credits = db.query(func.coalesce(func.sum(UsageRecord.credits_used), 0)).scalar()
    recent_projects = (
        db.query(Project).order_by(Project.created_at.desc(), Project.id.desc()).limit(5).all()
    )

    total_projects = sum(projects_by_status.values())
    return {
        "total_projects": total_projects,
        "active_projects": total_projects - sum(projects_by_status.get(s, 0) for s in CLOSED_PROJECT_STATUSES),
        "projects_by_status": projects_by_status,
        "total_experts": sum(experts_by_industry.values()),
        "experts_by_industry": experts_by_industry,
        "pending_invitations": pending_invitations or 0,
        "completed_calls": completed_calls,
        "total_call_minutes": int(total_call_minutes),
        "total_cu_used": float(total_cu_used),
        "total_usage_credits": float(total_usage_credits),
        "recent_projects": recent_projects,
    }
