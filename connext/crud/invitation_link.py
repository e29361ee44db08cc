# File: connext/crud/invitation_link.py
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.core.utils import utcnow
from connext.models.invitation_link import ExpertInvitationLink
from connext.models.project_expert import ProjectExpert
from connext.schemas.invitation_link import InvitationLinkCreate


class CRUDInvitationLink(CRUDBase[ExpertInvitationLink, InvitationLinkCreate, InvitationLinkCreate]):

    def get_by_token(self, db: Session, *, token: str) -> Optional[ExpertInvitationLink]:
        return db.query(ExpertInvitationLink).filter(ExpertInvitationLink.token == token).first()

    def mark_used(self, db: Session, *, token: str) -> bool:
        """Set used_at only if the link is still unused. Returns False when another request got there first."""
        result = db.execute(
            update(ExpertInvitationLink)
            .where(ExpertInvitationLink.token == token, ExpertInvitationLink.used_at.is_(None))
            .values(used_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def claim_assignment_response(self, db: Session, *, project_expert_id: int) -> bool:
        """Same compare-and-set for a per-assignment token: only one response may win."""
        result = db.execute(
            update(ProjectExpert)
            .where(ProjectExpert.id == project_expert_id, ProjectExpert.responded_at.is_(None))
            .values(responded_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


invitation_link = CRUDInvitationLink(ExpertInvitationLink)
