# File: connext/api/v1/endpoints/invitation_links.py
"""
Registration links: staff create them, experts use them to sign up.

General and RA links land on /invite/{projectId}/{inviteType}/{token}. RA
links credit the new expert to the recruiter for incentive reporting.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.utils import utcnow
from connext.db.database import get_db
from connext.models.expert import Expert, ExpertStatus
from connext.models.invitation_link import ExpertInvitationLink, InviteType
from connext.models.project import Project
from connext.models.project_expert import AssignmentStatus, InvitationStatus, PipelineStatus, ProjectExpert
from connext.models.user import User, UserRole
from connext.services import pipeline
from connext.services import invitation_links as links

logger = logging.getLogger(__name__)

router = APIRouter()
register_router = APIRouter()
onboarding_router = APIRouter()


def _with_url(link: ExpertInvitationLink) -> schemas.InvitationLinkWithUrl:
    data = schemas.InvitationLink.model_validate(link).model_dump()
    return schemas.InvitationLinkWithUrl(**data, invitation_url=links.build_link_url(link))


def _check_required_answers(project: Optional[Project], answers: List[schemas.VQAnswer]) -> None:
    if project is None:
        return
    missing = pipeline.missing_required_answers(project.vetting_questions, answers)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Answers are required for vetting questions {missing}"
        )


def _register_expert(
    db: Session,
    link: ExpertInvitationLink,
    registration: schemas.ExpertRegistration,
    join_pipeline: bool,
) -> Expert:
    """Create the expert from a registration link and consume the link."""
    if crud.expert.get_by_email(db, email=registration.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An expert with this email already exists"
        )
    if join_pipeline:
        _check_required_answers(link.project, registration.vq_answers)

    links.consume_link(db, link)

    data = registration.model_dump(exclude={"vq_answers", "availability_note"})
    data["status"] = ExpertStatus.AVAILABLE.value
    data["recruited_by"] = link.recruited_by
    if link.ra_id is not None:
        data["sourced_by_ra_id"] = link.ra_id
        data["sourced_at"] = utcnow()
    expert = Expert(**data)
    db.add(expert)
    db.flush()

    if link.project_id:
        assignment_data = {"project_id": link.project_id, "expert_id": expert.id}
        if join_pipeline:
            assignment_data.update(
                status=AssignmentStatus.ACCEPTED.value,
                invitation_status=InvitationStatus.ACCEPTED.value,
                pipeline_status=PipelineStatus.INTERESTED.value,
                responded_at=utcnow(),
                vq_answers=[a.model_dump(by_alias=True) for a in registration.vq_answers],
                availability_note=registration.availability_note,
            )
        assignment = ProjectExpert(**assignment_data)
        db.add(assignment)
        db.flush()
        pipeline.log_activity(
            db, link.project_id, "expert_registered",
            f"{expert.name} registered through an invitation link",
            user_id=link.ra_id,
            details={"projectExpertId": assignment.id, "inviteType": link.invite_type},
        )

    db.commit()
    db.refresh(expert)
    logger.info(f"Expert {expert.id} registered via {link.invite_type} link {link.id}")
    return expert


# ---------------------------
# Staff link management
# ---------------------------

@router.get("", response_model=List[schemas.InvitationLinkWithUrl])
def list_invitation_links(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    return [_with_url(link) for link in crud.invitation_link.get_multi(db)]


@router.post("", response_model=schemas.InvitationLinkWithUrl, status_code=status.HTTP_201_CREATED)
def create_invitation_link(
    link_in: schemas.InvitationLinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if link_in.project_id is not None and not crud.project.get(db, id=link_in.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if link_in.expert_id is not None and not crud.expert.get(db, id=link_in.expert_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")

    ra_id = link_in.ra_id
    recruited_by = link_in.recruited_by
    if link_in.invite_type == InviteType.RA.value and ra_id is None:
        if current_user.role != UserRole.RA:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An RA link needs the recruiting RA"
            )
        ra_id = current_user.id
    if ra_id is not None and recruited_by is None:
        ra = crud.user.get(db, id=ra_id)
        if not ra:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="RA not found")
        recruited_by = ra.email

    link = links.create_link(
        db,
        invite_type=link_in.invite_type,
        project_id=link_in.project_id,
        ra_id=ra_id,
        expert_id=link_in.expert_id,
        recruited_by=recruited_by,
        created_by_id=current_user.id,
        expires_at=link_in.expires_at,
    )
    return _with_url(link)


@router.get("/{token}", response_model=schemas.InvitationLink)
def read_invitation_link(token: str, db: Session = Depends(get_db)) -> Any:
    """Public: check a link before showing the registration form"""
    return links.get_valid_link(db, token)


# ---------------------------
# Expert self-registration
# ---------------------------

@register_router.post("/{token}", response_model=schemas.Expert, status_code=status.HTTP_201_CREATED)
def register_expert(
    token: str,
    registration: schemas.ExpertRegistration,
    db: Session = Depends(get_db),
) -> Any:
    """Register through a link. A project link also assigns the new expert to the project."""
    link = links.get_valid_link(db, token)
    if link.project_expert_id is not None:
        # Assignment invitations are answered, not registered against
        raise links.InvitationLinkError(links.INVALID_LINK)
    return _register_expert(db, link, registration, join_pipeline=bool(registration.vq_answers))


@onboarding_router.get("/{project_id}/{invite_type}/{token}", response_model=schemas.OnboardingInvitation)
def read_onboarding_invitation(
    project_id: int,
    invite_type: str,
    token: str,
    db: Session = Depends(get_db),
) -> Any:
    """Project summary and vetting questions for the onboarding form"""
    link = links.get_valid_onboarding_link(db, project_id, invite_type, token)
    project = link.project
    if project is None:
        raise links.InvitationLinkError(links.INVALID_LINK, "Project not found")
    return {
        "project": project,
        "vetting_questions": project.vetting_questions,
        "invite_type": link.invite_type,
        "recruited_by": link.recruited_by,
        "recruited_by_ra_id": link.ra_id,
    }


@onboarding_router.post(
    "/{project_id}/{invite_type}/{token}/submit",
    response_model=schemas.Expert,
    status_code=status.HTTP_201_CREATED,
)
def submit_onboarding(
    project_id: int,
    invite_type: str,
    token: str,
    registration: schemas.ExpertRegistration,
    db: Session = Depends(get_db),
) -> Any:
    """Register, answer the vetting questions and join the project pipeline in one step"""
    link = links.get_valid_onboarding_link(db, project_id, invite_type, token)
    if link.project is None:
        raise links.InvitationLinkError(links.INVALID_LINK, "Project not found")
    return _register_expert(db, link, registration, join_pipeline=True)
