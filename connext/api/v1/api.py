# File: connext/api/v1/api.py
from fastapi import APIRouter
from connext.api.v1.endpoints import (
    auth, employees, clients, projects, experts, vetting_questions, project_experts,
    call_records, invitation_links, expert_invite, usage, ra_incentives, reporting,
)

# Create main API router
api_router = APIRouter()

# Staff session and employee management
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    employees.router,
    prefix="/employees",
    tags=["employees"]
)

# Clients
api_router.include_router(
    clients.organizations_router,
    prefix="/client-organizations",
    tags=["client-organizations"]
)

api_router.include_router(
    clients.pocs_router,
    prefix="/client-pocs",
    tags=["client-pocs"]
)

# Projects and the expert pipeline
api_router.include_router(
    projects.router,
    prefix="/projects",
    tags=["projects"]
)

api_router.include_router(
    experts.router,
    prefix="/experts",
    tags=["experts"]
)

api_router.include_router(
    vetting_questions.router,
    prefix="/vetting-questions",
    tags=["vetting-questions"]
)

api_router.include_router(
    project_experts.router,
    prefix="/project-experts",
    tags=["project-experts"]
)

api_router.include_router(
    call_records.router,
    prefix="/call-records",
    tags=["call-records"]
)

# Invitation links and expert self-registration
api_router.include_router(
    invitation_links.router,
    prefix="/invitation-links",
    tags=["invitation-links"]
)

api_router.include_router(
    invitation_links.register_router,
    prefix="/register-expert",
    tags=["expert-registration"]
)

api_router.include_router(
    invitation_links.onboarding_router,
    prefix="/invite",
    tags=["expert-registration"]
)

# Public expert-facing pages, authenticated by token only
api_router.include_router(
    expert_invite.router,
    prefix="/expert-invite",
    tags=["expert-invite"]
)

api_router.include_router(
    expert_invite.quick_invite_router,
    prefix="/quick-invite",
    tags=["quick-invite"]
)

# Billing and reporting
api_router.include_router(
    usage.router,
    prefix="/usage",
    tags=["usage"]
)

api_router.include_router(
    ra_incentives.router,
    prefix="/ra-incentives",
    tags=["ra-incentives"]
)

api_router.include_router(
    reporting.router,
    prefix="",
    tags=["reporting"]
)
