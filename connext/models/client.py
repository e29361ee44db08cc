# File: connext/models/client.py
from sqlalchemy import Column, String, Integer, ForeignKey, Numeric, Text
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel


class ClientOrganization(BaseModel):
    __tablename__ = "client_organizations"

    name = Column(String(255), nullable=False, index=True)
    industry = Column(String(255), nullable=True)
    main_pm_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    total_cu_used = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # Relationships
    main_pm = relationship("User", foreign_keys=[main_pm_id])
    pocs = relationship("ClientPoc", back_populates="organization", cascade="all, delete")
    projects = relationship("Project", back_populates="client_organization")


class ClientPoc(BaseModel):
    __tablename__ = "client_pocs"

    organization_id = Column(
        Integer, ForeignKey("client_organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    organization = relationship("ClientOrganization", back_populates="pocs")
