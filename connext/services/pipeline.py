"""
Expert pipeline state machine.

Every staff or expert action on a ProjectExpert goes through here so the
status columns, transition timestamps and the project activity log stay in
step. Assignment status only moves forward along ALLOWED_TRANSITIONS.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from connext.core.config import settings
from connext.core.security import generate_invitation_token
from connext.core.utils import utcnow
from connext.models.invitation_link import ExpertInvitationLink, InviteType
from connext.models.project_activity import ProjectActivity
from connext.models.project_expert import (
    AssignmentStatus, InvitationStatus, PipelineStatus, ProjectExpert,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AssignmentStatus.ASSIGNED.value: {AssignmentStatus.INVITED.value},
    AssignmentStatus.INVITED.value: {AssignmentStatus.ACCEPTED.value, AssignmentStatus.DECLINED.value},
    AssignmentStatus.ACCEPTED.value: {AssignmentStatus.CLIENT_SELECTED.value, AssignmentStatus.DECLINED.value},
    AssignmentStatus.CLIENT_SELECTED.value: {AssignmentStatus.SCHEDULED.value},
    AssignmentStatus.SCHEDULED.value: {AssignmentStatus.COMPLETED.value},
    AssignmentStatus.DECLINED.value: set(),
    AssignmentStatus.COMPLETED.value: set(),
}


class AssignmentConflict(Exception):
    """Raised when an assignment cannot move to the requested status."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move assignment from '{current}' to '{target}'")


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def ensure_transition(assignment: ProjectExpert, target: AssignmentStatus) -> None:
    if not can_transition(assignment.status, target.value):
        logger.warning(
            f"Rejected transition for assignment {assignment.id}: {assignment.status} -> {target.value}"
        )
        raise AssignmentConflict(assignment.status, target.value)


def log_activity(
    db: Session,
    project_id: int,
    activity_type: str,
    description: str,
    user_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ProjectActivity:
    activity = ProjectActivity(
        project_id=project_id,
        user_id=user_id,
        activity_type=activity_type,
        description=description,
        details=details,
    )
    db.add(activity)
    return activity


def _expert_name(assignment: ProjectExpert) -> str:
    return assignment.expert.name if assignment.expert else f"Expert #{assignment.expert_id}"


def _save(db: Session, assignment: ProjectExpert) -> ProjectExpert:
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def invitation_url(token: str) -> str:
    return f"{settings.frontend_url}/expert-invite/{token}"


def invite(db: Session, assignment: ProjectExpert, user_id: Optional[int] = None) -> ProjectExpert:
    """Issue an invitation token for the assignment and record the matching link."""
    ensure_transition(assignment, AssignmentStatus.INVITED)
    now = utcnow()
    token = assignment.invitation_token or generate_invitation_token()

    assignment.status = AssignmentStatus.INVITED.value
    assignment.invitation_status = InvitationStatus.INVITED.value
    assignment.invitation_token = token
    assignment.invited_at = now

    db.add(ExpertInvitationLink(
        token=token,
        invite_type=InviteType.EXISTING.value,
        project_id=assignment.project_id,
        expert_id=assignment.expert_id,
        project_expert_id=assignment.id,
        created_by_id=user_id,
        expires_at=now + timedelta(days=settings.INVITATION_LINK_EXPIRY_DAYS),
    ))
    log_activity(
        db, assignment.project_id, "expert_invited",
        f"{_expert_name(assignment)} was invited to the project",
        user_id=user_id, details={"projectExpertId": assignment.id},
    )
    logger.info(f"Assignment {assignment.id} invited")
    return _save(db, assignment)


def mark_opened(db: Session, assignment: ProjectExpert) -> ProjectExpert:
    """First view of an invitation. Repeated views leave the timestamp alone."""
    if assignment.invitation_status != InvitationStatus.INVITED.value:
        return assignment
    assignment.invitation_status = InvitationStatus.OPENED.value
    assignment.opened_at = utcnow()
    log_activity(
        db, assignment.project_id, "invitation_opened",
        f"{_expert_name(assignment)} opened the invitation",
        details={"projectExpertId": assignment.id},
    )
    return _save(db, assignment)


def accept(
    db: Session,
    assignment: ProjectExpert,
    vq_answers: Optional[List[Dict[str, Any]]] = None,
    availability_note: Optional[str] = None,
    user_id: Optional[int] = None,
) -> ProjectExpert:
    ensure_transition(assignment, AssignmentStatus.ACCEPTED)
    assignment.status = AssignmentStatus.ACCEPTED.value
    assignment.invitation_status = InvitationStatus.ACCEPTED.value
    assignment.pipeline_status = PipelineStatus.INTERESTED.value
    assignment.responded_at = assignment.responded_at or utcnow()
    if vq_answers is not None:
        assignment.vq_answers = vq_answers
    if availability_note is not None:
        assignment.availability_note = availability_note
    log_activity(
        db, assignment.project_id, "expert_accepted",
        f"{_expert_name(assignment)} accepted the invitation",
        user_id=user_id, details={"projectExpertId": assignment.id},
    )
    logger.info(f"Assignment {assignment.id} accepted")
    return _save(db, assignment)


def decline(
    db: Session,
    assignment: ProjectExpert,
    reason: Optional[str] = None,
    user_id: Optional[int] = None,
) -> ProjectExpert:
    ensure_transition(assignment, AssignmentStatus.DECLINED)
    if assignment.status == AssignmentStatus.INVITED.value:
        assignment.invitation_status = InvitationStatus.DECLINED.value
    assignment.status = AssignmentStatus.DECLINED.value
    assignment.pipeline_status = PipelineStatus.DECLINED.value
    assignment.responded_at = assignment.responded_at or utcnow()
    if reason:
        assignment.decline_reason = reason
    log_activity(
        db, assignment.project_id, "expert_declined",
        f"{_expert_name(assignment)} declined",
        user_id=user_id, details={"projectExpertId": assignment.id, "reason": reason},
    )
    logger.info(f"Assignment {assignment.id} declined")
    return _save(db, assignment)


def select_for_client(db: Session, assignment: ProjectExpert, user_id: Optional[int] = None) -> ProjectExpert:
    ensure_transition(assignment, AssignmentStatus.CLIENT_SELECTED)
    assignment.status = AssignmentStatus.CLIENT_SELECTED.value
    assignment.pipeline_status = PipelineStatus.SHORTLISTED.value
    assignment.selected_at = utcnow()
    log_activity(
        db, assignment.project_id, "expert_selected",
        f"{_expert_name(assignment)} was selected by the client",
        user_id=user_id, details={"projectExpertId": assignment.id},
    )
    logger.info(f"Assignment {assignment.id} selected by client")
    return _save(db, assignment)


def schedule(
    db: Session,
    assignment: ProjectExpert,
    scheduled_at: Optional[datetime] = None,
    user_id: Optional[int] = None,
) -> ProjectExpert:
    ensure_transition(assignment, AssignmentStatus.SCHEDULED)
    assignment.status = AssignmentStatus.SCHEDULED.value
    assignment.pipeline_status = PipelineStatus.ACCEPTED.value
    assignment.scheduled_at = scheduled_at or utcnow()
    log_activity(
        db, assignment.project_id, "call_scheduled",
        f"Call scheduled with {_expert_name(assignment)}",
        user_id=user_id,
        details={"projectExpertId": assignment.id, "scheduledAt": assignment.scheduled_at.isoformat()},
    )
    logger.info(f"Assignment {assignment.id} scheduled")
    return _save(db, assignment)


def complete(db: Session, assignment: ProjectExpert, user_id: Optional[int] = None) -> ProjectExpert:
    ensure_transition(assignment, AssignmentStatus.COMPLETED)
    assignment.status = AssignmentStatus.COMPLETED.value
    assignment.pipeline_status = PipelineStatus.COMPLETED.value
    assignment.completed_at = utcnow()
    log_activity(
        db, assignment.project_id, "call_completed",
        f"Call with {_expert_name(assignment)} completed",
        user_id=user_id, details={"projectExpertId": assignment.id},
    )
    logger.info(f"Assignment {assignment.id} completed")
    return _save(db, assignment)


def apply_status(
    db: Session,
    assignment: ProjectExpert,
    target: AssignmentStatus,
    user_id: Optional[int] = None,
) -> ProjectExpert:
    """Dispatch a generic status change (e.g. from a PATCH) to the matching transition."""
    target = AssignmentStatus(target)
    if target == AssignmentStatus.INVITED:
        return invite(db, assignment, user_id=user_id)
    if target == AssignmentStatus.ACCEPTED:
        return accept(db, assignment, user_id=user_id)
    if target == AssignmentStatus.DECLINED:
        return decline(db, assignment, user_id=user_id)
    if target == AssignmentStatus.CLIENT_SELECTED:
        return select_for_client(db, assignment, user_id=user_id)
    if target == AssignmentStatus.SCHEDULED:
        return schedule(db, assignment, user_id=user_id)
    if target == AssignmentStatus.COMPLETED:
        return complete(db, assignment, user_id=user_id)
    # Nothing moves back to "assigned"
    raise AssignmentConflict(assignment.status, target.value)


def missing_required_answers(questions, answers) -> List[int]:
    """Ids of required vetting questions left unanswered."""
    answered = set()
    for item in answers or []:
        question_id = getattr(item, "question_id", None)
        answer = getattr(item, "answer", None)
        if isinstance(item, dict):
            question_id = item.get("questionId", item.get("question_id"))
            answer = item.get("answer")
        if answer and str(answer).strip():
            answered.add(question_id)
    return [q.id for q in questions if q.is_required and q.id not in answered]
