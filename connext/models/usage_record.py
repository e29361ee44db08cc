from sqlalchemy import Column, Integer, ForeignKey, Numeric, Text, DateTime
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel


class UsageRecord(BaseModel):
    """Legacy credit usage entry, kept alongside call records."""

    __tablename__ = "usage_records"

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    expert_id = Column(Integer, ForeignKey("experts.id", ondelete="CASCADE"), nullable=False, index=True)
    call_date = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    credits_used = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    project = relationship("Project", back_populates="usage_records")
    expert = relationship("Expert", back_populates="usage_records")
