# File: connext/models/call_record.py
from sqlalchemy import Column, String, Integer, ForeignKey, Numeric, Text, DateTime
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel
import enum


class CallStatus(str, enum.Enum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class CallRecord(BaseModel):
    """A scheduled or completed consultation between an expert and the client."""

    __tablename__ = "call_records"

    project_expert_id = Column(
        Integer, ForeignKey("project_experts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    expert_id = Column(Integer, ForeignKey("experts.id", ondelete="CASCADE"), nullable=False, index=True)

    call_date = Column(DateTime, nullable=True)
    scheduled_start_time = Column(DateTime, nullable=True)
    scheduled_end_time = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    actual_duration_minutes = Column(Integer, nullable=True)
    cu_used = Column(Numeric(10, 2), nullable=False, default=0)

    status = Column(String(50), nullable=False, default=CallStatus.PENDING.value)
    zoom_link = Column(String(500), nullable=True)
    recording_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="call_records")
    expert = relationship("Expert", back_populates="call_records")
    project_expert = relationship("ProjectExpert")
