# File: connext/schemas/invitation_link.py
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import Field
from connext.models.invitation_link import InviteType
from connext.schemas.base import CamelModel, UTCDateTime
from connext.schemas.expert import VQAnswer


class InvitationLinkCreate(CamelModel):
    invite_type: InviteType = InviteType.GENERAL
    project_id: Optional[int] = None
    ra_id: Optional[int] = None
    expert_id: Optional[int] = None
    recruited_by: Optional[str] = None
    expires_at: Optional[UTCDateTime] = None


class InvitationLink(CamelModel):
    id: int
    token: str
    invite_type: str
    project_id: Optional[int] = None
    ra_id: Optional[int] = None
    expert_id: Optional[int] = None
    project_expert_id: Optional[int] = None
    recruited_by: Optional[str] = None
    created_by_id: Optional[int] = None
    is_active: bool
    expires_at: Optional[datetime] = None
    used_at: Optional[datetime] = None
    created_at: datetime


class InvitationLinkWithUrl(InvitationLink):
    invitation_url: str


class InviteProject(CamelModel):
    id: int
    name: str
    client_name: str
    industry: str
    project_overview: Optional[str] = None
    description: Optional[str] = None


class InviteVettingQuestion(CamelModel):
    id: int
    question: str
    order_index: int
    is_required: bool


class InviteExpert(CamelModel):
    id: int
    name: str
    email: str


class OnboardingInvitation(CamelModel):
    """Landing data for a registration link (general or RA)."""

    project: Optional[InviteProject] = None
    vetting_questions: List[InviteVettingQuestion] = []
    invite_type: str
    recruited_by: Optional[str] = None
    recruited_by_ra_id: Optional[int] = None


class ExpertInvitation(CamelModel):
    """Landing data for a per-assignment invitation token."""

    project_expert_id: int
    project: InviteProject
    expert: InviteExpert
    vetting_questions: List[InviteVettingQuestion] = []
    invited_at: Optional[datetime] = None
    invitation_status: str


class AcceptInvitationRequest(CamelModel):
    vq_answers: List[VQAnswer] = []
    availability_note: Optional[str] = None


class DeclineInvitationRequest(CamelModel):
    reason: Optional[str] = None


class QuickInviteRequest(CamelModel):
    expert_id: int
    send_email: bool = False


class QuickInviteDecisionRequest(CamelModel):
    decision: str = Field(pattern="^(accepted|declined)$")
    sample_answers: Dict[int, str] = {}


class InvitationResponseResult(CamelModel):
    project_expert_id: int
    status: str
    invitation_status: str
    pipeline_status: Optional[str] = None
    responded_at: Optional[datetime] = None
