from sqlalchemy import Column, String, Integer, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel


class ProjectActivity(BaseModel):
    __tablename__ = "project_activities"

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    activity_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    details = Column(JSON, nullable=True)

    project = relationship("Project", back_populates="activities")
    user = relationship("User")
