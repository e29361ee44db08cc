# File: connext/models/project_expert.py
from sqlalchemy import Column, String, Integer, ForeignKey, Text, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from connext.core.utils import utcnow
from connext.models.base import BaseModel
import enum


class AssignmentStatus(str, enum.Enum):
    ASSIGNED = "assigned"
    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CLIENT_SELECTED = "client_selected"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class InvitationStatus(str, enum.Enum):
    NOT_INVITED = "not_invited"
    INVITED = "invited"
    OPENED = "opened"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PipelineStatus(str, enum.Enum):
    INTERESTED = "interested"
    SHORTLISTED = "shortlisted"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"


class ProjectExpert(BaseModel):
    """Assignment of an expert to a project and its progress through the pipeline."""

    __tablename__ = "project_experts"
    __table_args__ = (UniqueConstraint("project_id", "expert_id", name="uq_project_expert"),)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    expert_id = Column(Integer, ForeignKey("experts.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String(50), nullable=False, default=AssignmentStatus.ASSIGNED.value)
    invitation_status = Column(String(50), nullable=False, default=InvitationStatus.NOT_INVITED.value)
    pipeline_status = Column(String(50), nullable=True)
    invitation_token = Column(String(255), unique=True, index=True, nullable=True)

    # Transition timestamps
    assigned_at = Column(DateTime, default=utcnow, nullable=False)
    invited_at = Column(DateTime, nullable=True)
    opened_at = Column(DateTime, nullable=True)
    responded_at = Column(DateTime, nullable=True)
    selected_at = Column(DateTime, nullable=True)
    scheduled_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    # Expert response
    vq_answers = Column(JSON, nullable=True)  # [{questionId, answer}]
    availability_note = Column(Text, nullable=True)
    decline_reason = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)
    angles = Column(JSON, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="project_experts")
    expert = relationship("Expert", back_populates="project_experts")
