# File: connext/api/v1/endpoints/expert_invite.py
"""
Public, token-authenticated pages where an invited expert answers.

Each token can be answered exactly once; a second answer gets 409 usedLink.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from connext import schemas
from connext.db.database import get_db
from connext.models.project_expert import ProjectExpert
from connext.services import pipeline
from connext.services import invitation_links as links

logger = logging.getLogger(__name__)

router = APIRouter()
quick_invite_router = APIRouter()


def _invitation_view(assignment: ProjectExpert) -> dict:
    return {
        "project_expert_id": assignment.id,
        "project": assignment.project,
        "expert": assignment.expert,
        "vetting_questions": assignment.project.vetting_questions,
        "invited_at": assignment.invited_at,
        "invitation_status": assignment.invitation_status,
    }


def _accept(db: Session, token: str, answers, availability_note) -> ProjectExpert:
    assignment = links.claim_invitation(db, token)
    return pipeline.accept(
        db, assignment,
        vq_answers=[a.model_dump(by_alias=True) for a in answers],
        availability_note=availability_note,
    )


def _decline(db: Session, token: str, reason) -> ProjectExpert:
    assignment = links.claim_invitation(db, token)
    return pipeline.decline(db, assignment, reason=reason)


# ---------------------------
# Full invitation page
# ---------------------------

@router.get("/{token}", response_model=schemas.ExpertInvitation)
def read_expert_invitation(token: str, db: Session = Depends(get_db)) -> Any:
    """Invitation details. The first view marks the invitation as opened."""
    assignment = links.get_invited_assignment(db, token)
    assignment = pipeline.mark_opened(db, assignment)
    return _invitation_view(assignment)


@router.post("/{token}/accept", response_model=schemas.InvitationResponseResult)
def accept_expert_invitation(
    token: str,
    payload: schemas.AcceptInvitationRequest,
    db: Session = Depends(get_db),
) -> Any:
    assignment = links.get_invited_assignment(db, token)
    missing = pipeline.missing_required_answers(assignment.project.vetting_questions, payload.vq_answers)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Answers are required for vetting questions {missing}"
        )
    return _as_result(_accept(db, token, payload.vq_answers, payload.availability_note))


@router.post("/{token}/decline", response_model=schemas.InvitationResponseResult)
def decline_expert_invitation(
    token: str,
    payload: schemas.DeclineInvitationRequest,
    db: Session = Depends(get_db),
) -> Any:
    return _as_result(_decline(db, token, payload.reason))


# ---------------------------
# One-click quick invite
# ---------------------------

@quick_invite_router.get("/{token}/decision", response_model=schemas.ExpertInvitation)
def read_quick_invite(token: str, db: Session = Depends(get_db)) -> Any:
    assignment = links.get_invited_assignment(db, token)
    assignment = pipeline.mark_opened(db, assignment)
    return _invitation_view(assignment)


@quick_invite_router.post("/{token}/decide", response_model=schemas.InvitationResponseResult)
def decide_quick_invite(
    token: str,
    payload: schemas.QuickInviteDecisionRequest,
    db: Session = Depends(get_db),
) -> Any:
    """Accept (with optional sample answers) or decline in one request"""
    if payload.decision == "declined":
        return _as_result(_decline(db, token, None))
    answers = [
        schemas.VQAnswer(question_id=question_id, answer=answer)
        for question_id, answer in payload.sample_answers.items()
        if answer and answer.strip()
    ]
    return _as_result(_accept(db, token, answers, None))


def _as_result(assignment: ProjectExpert) -> dict:
    logger.info(f"Expert responded to assignment {assignment.id}: {assignment.status}")
    return {
        "project_expert_id": assignment.id,
        "status": assignment.status,
        "invitation_status": assignment.invitation_status,
        "pipeline_status": assignment.pipeline_status,
        "responded_at": assignment.responded_at,
    }
