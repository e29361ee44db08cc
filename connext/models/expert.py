# File: connext/models/expert.py
from sqlalchemy import Column, String, Integer, ForeignKey, Numeric, Text, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship
from connext.models.base import BaseModel
import enum


class ExpertStatus(str, enum.Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    INACTIVE = "inactive"


class Expert(BaseModel):
    __tablename__ = "experts"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    linkedin_url = Column(String(500), nullable=True)

    # Location
    country = Column(String(100), nullable=True)
    region = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    timezone = Column(String(100), nullable=True)

    # Expertise
    expertise = Column(String(255), nullable=False)
    areas_of_expertise = Column(JSON, nullable=True)
    industry = Column(String(255), nullable=False)
    company = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)
    work_history = Column(Text, nullable=True)
    employment_history = Column(JSON, nullable=True)  # [{company, jobTitle, fromYear, toYear}]
    can_consult_in_english = Column(Boolean, default=True, nullable=False)

    # Rates
    hourly_rate = Column(Numeric(10, 2), nullable=True)
    currency = Column(String(10), nullable=False, default="USD")

    status = Column(String(50), nullable=False, default=ExpertStatus.AVAILABLE.value)
    terms_accepted = Column(Boolean, default=False, nullable=False)
    lgpd_accepted = Column(Boolean, default=False, nullable=False)

    # Sourcing (drives RA incentives)
    sourced_by_ra_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    sourced_at = Column(DateTime, nullable=True)
    recruited_by = Column(String(255), nullable=True)

    # Relationships
    sourced_by_ra = relationship("User", foreign_keys=[sourced_by_ra_id])
    project_experts = relationship("ProjectExpert", back_populates="expert", cascade="all, delete")
    call_records = relationship("CallRecord", back_populates="expert", cascade="all, delete")
    usage_records = relationship("UsageRecord", back_populates="expert", cascade="all, delete")
