# File: connext/db/seed.py
"""Demo data for a fresh development database.

    python -m connext.db.seed

Does nothing when users already exist. Every seeded employee gets the
password from SEED_PASSWORD and must change it on first login.
"""

import logging
import os
from datetime import datetime

from sqlalchemy.orm import Session

from connext.core.security import get_password_hash
from connext.db.database import Base, SessionLocal, engine
from connext.models import (
    CallRecord, ClientOrganization, ClientPoc, Expert, Project, ProjectExpert,
    User, UserRole, VettingQuestion,
)

logger = logging.getLogger(__name__)

SEED_PASSWORD = os.getenv("SEED_PASSWORD", "ChangeMe123!")

USERS = [
    ("admin@mirae.com", "Admin User", UserRole.ADMIN),
    ("pm@mirae.com", "Sarah Chen", UserRole.PM),
    ("ra@mirae.com", "Michael Lee", UserRole.RA),
    ("finance@mirae.com", "Emily Park", UserRole.FINANCE),
]

EXPERTS = [
    {
        "name": "Dr. James Chen", "email": "james.chen@email.com", "country": "United States",
        "expertise": "Battery Technology", "industry": "Energy", "company": "Tesla",
        "job_title": "Principal Battery Engineer", "years_of_experience": 15, "hourly_rate": 350,
        "areas_of_expertise": ["Lithium-ion batteries", "Solid-state batteries", "Energy storage systems"],
        "bio": "Former Tesla battery team lead with 15+ years in EV battery development",
    },
    {
        "name": "Dr. Sarah Kim", "email": "sarah.kim@email.com", "country": "United States",
        "expertise": "Medical AI", "industry": "Healthcare", "company": "Google Health",
        "job_title": "Senior Research Scientist", "years_of_experience": 12, "hourly_rate": 400,
        "areas_of_expertise": ["Diagnostic AI", "Medical imaging", "FDA regulatory"],
        "bio": "AI researcher specializing in medical diagnostics and FDA-cleared algorithms",
    },
    {
        "name": "Michael Wong", "email": "michael.wong@email.com", "country": "United States",
        "expertise": "Semiconductor Manufacturing", "industry": "Technology", "company": "Intel",
        "job_title": "VP of Manufacturing", "years_of_experience": 20, "hourly_rate": 500,
        "areas_of_expertise": ["Chip fabrication", "Supply chain", "ASML equipment"],
        "bio": "20-year semiconductor veteran with deep expertise in chip manufacturing",
    },
    {
        "name": "Emily Zhang", "email": "emily.zhang@email.com", "country": "United States",
        "expertise": "Digital Payments", "industry": "Finance", "company": "Stripe",
        "job_title": "Director of Product", "years_of_experience": 10, "hourly_rate": 375,
        "areas_of_expertise": ["Payment infrastructure", "Fintech", "Regulatory compliance"],
        "bio": "Fintech executive with experience building payment systems at scale",
    },
]


def seed(db: Session) -> bool:
    """Insert the demo data set. Returns False when the database is not empty."""
    if db.query(User).first():
        logger.info("Database already has data, skipping seed")
        return False

    users = {}
    for email, full_name, role in USERS:
        user = User(
            email=email,
            full_name=full_name,
            role=role,
            hashed_password=get_password_hash(SEED_PASSWORD),
            must_change_password=True,
        )
        db.add(user)
        users[role] = user
    db.flush()
    pm, ra = users[UserRole.PM], users[UserRole.RA]

    mckinsey = ClientOrganization(name="McKinsey & Company", industry="Consulting", main_pm_id=pm.id)
    jpmorgan = ClientOrganization(name="JPMorgan Chase", industry="Finance", main_pm_id=pm.id)
    db.add_all([mckinsey, jpmorgan])
    db.flush()
    db.add_all([
        ClientPoc(organization_id=mckinsey.id, name="Jennifer Kim", email="jennifer.kim@mckinsey.com",
                  job_title="Senior Partner", phone="+1 212 555 0101"),
        ClientPoc(organization_id=jpmorgan.id, name="Robert Johnson", email="robert.johnson@jpmorgan.com",
                  job_title="Executive Director", phone="+1 212 555 0401"),
    ])

    battery = Project(
        name="Battery Technology Market Analysis",
        project_overview="Comprehensive analysis of EV battery technology landscape and competitive dynamics",
        description="Need experts in lithium-ion battery manufacturing and solid-state battery development",
        industry="Energy", status="sourcing",
        client_organization_id=mckinsey.id, client_name=mckinsey.name,
        client_poc_name="Jennifer Kim", client_poc_email="jennifer.kim@mckinsey.com",
        created_by_pm_id=pm.id, assigned_ra_id=ra.id,
    )
    healthcare = Project(
        name="Healthcare AI Integration Study",
        project_overview="Assessment of AI/ML adoption in hospital systems and diagnostic tools",
        industry="Healthcare", status="pending_client_review",
        client_organization_id=mckinsey.id, client_name=mckinsey.name,
        created_by_pm_id=pm.id, assigned_ra_id=ra.id,
    )
    payments = Project(
        name="Fintech Payment Systems Analysis",
        project_overview="Competitive landscape of digital payment platforms",
        industry="Finance", status="new",
        client_organization_id=jpmorgan.id, client_name=jpmorgan.name,
        client_poc_name="Robert Johnson", client_poc_email="robert.johnson@jpmorgan.com",
        created_by_pm_id=pm.id,
    )
    db.add_all([battery, healthcare, payments])
    db.flush()

    db.add_all([
        VettingQuestion(project_id=battery.id, order_index=1, is_required=True,
                        question="How many years of experience do you have with lithium-ion battery manufacturing?"),
        VettingQuestion(project_id=battery.id, order_index=2, is_required=False,
                        question="Have you worked on solid-state battery development?"),
        VettingQuestion(project_id=healthcare.id, order_index=1, is_required=True,
                        question="Have you developed or deployed FDA-cleared AI/ML diagnostic tools?"),
        VettingQuestion(project_id=payments.id, order_index=1, is_required=True,
                        question="What payment rails have you built or worked with?"),
    ])

    sourced_at = datetime(2024, 11, 1)
    experts = []
    for data in EXPERTS:
        expert = Expert(**data, terms_accepted=True, lgpd_accepted=True,
                        sourced_by_ra_id=ra.id, sourced_at=sourced_at, recruited_by=ra.email)
        db.add(expert)
        experts.append(expert)
    db.flush()

    accepted = ProjectExpert(
        project_id=battery.id, expert_id=experts[0].id, status="accepted",
        invitation_status="accepted", pipeline_status="interested",
        responded_at=datetime(2024, 11, 20), availability_note="Available next week",
    )
    selected = ProjectExpert(
        project_id=healthcare.id, expert_id=experts[1].id, status="client_selected",
        invitation_status="accepted", pipeline_status="shortlisted",
        responded_at=datetime(2024, 11, 22), selected_at=datetime(2024, 11, 25),
    )
    db.add_all([
        accepted,
        selected,
        ProjectExpert(project_id=payments.id, expert_id=experts[3].id, notes="Stripe payments expert"),
    ])
    db.flush()

    db.add(CallRecord(
        project_expert_id=selected.id, project_id=healthcare.id, expert_id=experts[1].id,
        call_date=datetime(2024, 12, 1, 16, 0), duration_minutes=45, actual_duration_minutes=45,
        cu_used=0.75, status="completed", completed_at=datetime(2024, 12, 1, 16, 45),
        notes="Excellent insights on FDA approval process",
    ))
    healthcare.total_cu_used = 0.75
    mckinsey.total_cu_used = 0.75

    db.commit()
    logger.info(
        f"Seeded {len(USERS)} users, 2 organizations, 3 projects and {len(experts)} experts"
    )
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
