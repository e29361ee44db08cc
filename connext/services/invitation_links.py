"""
Invitation link validation and single-use consumption.

Failures carry a ``reason`` key that the web client maps to its copy:
invalidLink (404), expiredLink (410) and usedLink (409).
"""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from connext import crud
from connext.core.config import settings
from connext.core.security import generate_invitation_token
from connext.core.utils import utcnow
from connext.models.invitation_link import ExpertInvitationLink, InviteType
from connext.models.project_expert import InvitationStatus, ProjectExpert

logger = logging.getLogger(__name__)

INVALID_LINK = "invalidLink"
EXPIRED_LINK = "expiredLink"
USED_LINK = "usedLink"

REASON_STATUS_CODES = {
    INVALID_LINK: 404,
    EXPIRED_LINK: 410,
    USED_LINK: 409,
}

REASON_MESSAGES = {
    INVALID_LINK: "Invitation link not found",
    EXPIRED_LINK: "Invitation link expired",
    USED_LINK: "Invitation link already used",
}


class InvitationLinkError(Exception):
    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        self.status_code = REASON_STATUS_CODES[reason]
        self.message = message or REASON_MESSAGES[reason]
        super().__init__(self.message)


def build_link_url(link: ExpertInvitationLink) -> str:
    base = settings.frontend_url
    if link.project_expert_id:
        return f"{base}/expert-invite/{link.token}"
    if link.project_id:
        return f"{base}/invite/{link.project_id}/{link.invite_type}/{link.token}"
    return f"{base}/register/{link.token}"


def create_link(
    db: Session,
    *,
    invite_type: str = InviteType.GENERAL.value,
    project_id: Optional[int] = None,
    ra_id: Optional[int] = None,
    expert_id: Optional[int] = None,
    recruited_by: Optional[str] = None,
    created_by_id: Optional[int] = None,
    expires_at=None,
) -> ExpertInvitationLink:
    if expires_at is None:
        expires_at = utcnow() + timedelta(days=settings.INVITATION_LINK_EXPIRY_DAYS)
    link = crud.invitation_link.create(db, obj_in={
        "token": generate_invitation_token(),
        "invite_type": invite_type,
        "project_id": project_id,
        "ra_id": ra_id,
        "expert_id": expert_id,
        "recruited_by": recruited_by,
        "created_by_id": created_by_id,
        "expires_at": expires_at,
    })
    logger.info(f"Created {invite_type} invitation link {link.id} for project {project_id}")
    return link


def check_link(link: Optional[ExpertInvitationLink]) -> ExpertInvitationLink:
    """Raise InvitationLinkError unless the link can still be used."""
    if link is None or not link.is_active:
        raise InvitationLinkError(INVALID_LINK)
    if link.used_at is not None:
        raise InvitationLinkError(USED_LINK)
    if link.expires_at is not None and link.expires_at < utcnow():
        raise InvitationLinkError(EXPIRED_LINK)
    return link


def get_valid_link(db: Session, token: str) -> ExpertInvitationLink:
    return check_link(crud.invitation_link.get_by_token(db, token=token))


def get_valid_onboarding_link(db: Session, project_id: int, invite_type: str, token: str) -> ExpertInvitationLink:
    """Registration links are only valid on the URL they were issued for."""
    link = crud.invitation_link.get_by_token(db, token=token)
    if link is not None and (link.project_id != project_id or link.invite_type != invite_type):
        raise InvitationLinkError(INVALID_LINK)
    return check_link(link)


def consume_link(db: Session, link: ExpertInvitationLink) -> None:
    """Mark the link used. Loses to any request that consumed it first."""
    if not crud.invitation_link.mark_used(db, token=link.token):
        logger.warning(f"Invitation link {link.id} was already consumed")
        raise InvitationLinkError(USED_LINK)


def get_invited_assignment(db: Session, token: str) -> ProjectExpert:
    """Resolve a per-assignment invitation token to its open assignment."""
    link = crud.invitation_link.get_by_token(db, token=token)
    if link is None:
        # Tokens issued before links were recorded only live on the assignment
        assignment = crud.project_expert.get_by_token(db, token=token)
        if assignment is None:
            raise InvitationLinkError(INVALID_LINK)
    else:
        check_link(link)
        assignment = link.project_expert
        if assignment is None:
            raise InvitationLinkError(INVALID_LINK)
    if assignment.responded_at is not None or assignment.invitation_status in (
        InvitationStatus.ACCEPTED.value, InvitationStatus.DECLINED.value,
    ):
        raise InvitationLinkError(USED_LINK)
    return assignment


def claim_invitation(db: Session, token: str) -> ProjectExpert:
    """
    Consume a per-assignment token for an accept or decline.

    Both the link and the assignment are claimed with conditional updates,
    so only one of two concurrent responses gets through.
    """
    assignment = get_invited_assignment(db, token)
    link = crud.invitation_link.get_by_token(db, token=token)
    if link is not None:
        consume_link(db, link)
    if not crud.invitation_link.claim_assignment_response(db, project_expert_id=assignment.id):
        logger.warning(f"Assignment {assignment.id} already responded")
        raise InvitationLinkError(USED_LINK)
    db.refresh(assignment)
    logger.info(f"Invitation token consumed for assignment {assignment.id}")
    return assignment


def invitation_email_args(assignment: ProjectExpert, url: str) -> dict:
    """Email arguments resolved up front so a background task never touches the session."""
    project = assignment.project
    expert = assignment.expert
    return {
        "expert_name": expert.name,
        "expert_email": expert.email,
        "project_name": project.name,
        "client_name": project.client_name,
        "industry": project.industry,
        "invitation_url": url,
        "vetting_questions_count": len(project.vetting_questions),
    }


def quick_invite_url(token: str) -> str:
    return f"{settings.frontend_url}/quick-invite/{token}/decision"
