from .base import BaseModel
from .user import User, UserRole
from .client import ClientOrganization, ClientPoc
from .project import Project, ProjectStatus
from .expert import Expert, ExpertStatus
from .vetting_question import VettingQuestion
from .project_expert import ProjectExpert, AssignmentStatus, InvitationStatus, PipelineStatus
from .call_record import CallRecord, CallStatus
from .invitation_link import ExpertInvitationLink, InviteType
from .usage_record import UsageRecord
from .project_activity import ProjectActivity

__all__ = [
    "BaseModel", "User", "UserRole", "ClientOrganization", "ClientPoc",
    "Project", "ProjectStatus", "Expert", "ExpertStatus", "VettingQuestion",
    "ProjectExpert", "AssignmentStatus", "InvitationStatus", "PipelineStatus",
    "CallRecord", "CallStatus", "ExpertInvitationLink", "InviteType",
    "UsageRecord", "ProjectActivity",
]
