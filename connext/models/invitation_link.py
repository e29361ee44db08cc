# File: connext/models/invitation_link.py
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Boolean
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel
import enum


class InviteType(str, enum.Enum):
    GENERAL = "general"   # open registration link
    RA = "ra"             # registration credited to a recruiter
    EXISTING = "existing" # project invite for an expert already in the database


class ExpertInvitationLink(BaseModel):
    __tablename__ = "expert_invitation_links"

    token = Column(String(255), unique=True, index=True, nullable=False)
    invite_type = Column(String(20), nullable=False, default=InviteType.GENERAL.value)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    ra_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    expert_id = Column(Integer, ForeignKey("experts.id", ondelete="CASCADE"), nullable=True)
    project_expert_id = Column(Integer, ForeignKey("project_experts.id", ondelete="CASCADE"), nullable=True)
    recruited_by = Column(String(255), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)
    used_at = Column(DateTime, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="invitation_links")
    ra = relationship("User", foreign_keys=[ra_id])
    expert = relationship("Expert")
    project_expert = relationship("ProjectExpert")
