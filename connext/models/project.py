# File: connext/models/project.py
from sqlalchemy import Column, String, Integer, ForeignKey, Numeric, Text, DateTime
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel
import enum


class ProjectStatus(str, enum.Enum):
    NEW = "new"
    SOURCING = "sourcing"
    PENDING_CLIENT_REVIEW = "pending_client_review"
    CLIENT_SELECTED = "client_selected"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Project(BaseModel):
    __tablename__ = "projects"

    name = Column(String(255), nullable=False)
    project_overview = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    industry = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, default=ProjectStatus.NEW.value)

    # Client
    client_organization_id = Column(
        Integer, ForeignKey("client_organizations.id", ondelete="SET NULL"), nullable=True, index=True
    )
    client_name = Column(String(255), nullable=False)
    client_poc_name = Column(String(255), nullable=True)
    client_poc_email = Column(String(255), nullable=True)

    budget = Column(Numeric(10, 2), nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)

    # Staffing
    created_by_pm_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    assigned_ra_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    total_cu_used = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    client_organization = relationship("ClientOrganization", back_populates="projects")
    created_by_pm = relationship("User", foreign_keys=[created_by_pm_id])
    assigned_ra = relationship("User", foreign_keys=[assigned_ra_id])
    vetting_questions = relationship(
        "VettingQuestion",
        back_populates="project",
        cascade="all, delete",
        order_by="VettingQuestion.order_index",
    )
    project_experts = relationship("ProjectExpert", back_populates="project", cascade="all, delete")
    call_records = relationship("CallRecord", back_populates="project", cascade="all, delete")
    usage_records = relationship("UsageRecord", back_populates="project", cascade="all, delete")
    invitation_links = relationship("ExpertInvitationLink", back_populates="project", cascade="all, delete")
    activities = relationship("ProjectActivity", back_populates="project", cascade="all, delete")
