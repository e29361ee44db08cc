# File: connext/api/v1/endpoints/project_experts.py
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.email_service import email_service
from connext.db.database import get_db
from connext.models.project_expert import AssignmentStatus, ProjectExpert
from connext.models.user import User
from connext.services import pipeline
from connext.services import invitation_links as links

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_assignment_or_404(db: Session, assignment_id: int) -> ProjectExpert:
    assignment = crud.project_expert.get(db, id=assignment_id)
    if not assignment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
    return assignment


@router.get("", response_model=List[schemas.ProjectExpert])
def list_assignments(
    project_id: Optional[int] = Query(None, alias="projectId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if project_id is not None:
        return crud.project_expert.get_by_project(db, project_id=project_id)
    return crud.project_expert.get_multi(db)


@router.post("", response_model=schemas.ProjectExpert, status_code=status.HTTP_201_CREATED)
def create_assignment(
    assignment_in: schemas.ProjectExpertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Assign an expert to a project"""
    if not crud.project.get(db, id=assignment_in.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    expert = crud.expert.get(db, id=assignment_in.expert_id)
    if not expert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")
    if crud.project_expert.get_by_project_and_expert(
        db, project_id=assignment_in.project_id, expert_id=assignment_in.expert_id
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Expert is already assigned to this project"
        )
    assignment = crud.project_expert.create(db, obj_in=assignment_in)
    pipeline.log_activity(
        db, assignment.project_id, "expert_assigned",
        f"{expert.name} assigned to the project",
        user_id=current_user.id, details={"projectExpertId": assignment.id},
    )
    db.commit()
    db.refresh(assignment)
    return assignment


@router.get("/{assignment_id}", response_model=schemas.ProjectExpert)
def read_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    return _get_assignment_or_404(db, assignment_id)


@router.patch("/{assignment_id}", response_model=schemas.ProjectExpert)
def update_assignment(
    assignment_id: int,
    assignment_in: schemas.ProjectExpertUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Edit notes and angles. A status change goes through the pipeline rules."""
    assignment = _get_assignment_or_404(db, assignment_id)
    data = assignment_in.model_dump(exclude_unset=True)
    new_status = data.pop("status", None)
    if new_status is not None:
        # Reject an illegal move before any field is written
        pipeline.ensure_transition(assignment, AssignmentStatus(new_status))
    if data:
        assignment = crud.project_expert.update(db, db_obj=assignment, obj_in=data)
    if new_status is not None:
        assignment = pipeline.apply_status(db, assignment, new_status, user_id=current_user.id)
    return assignment


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> None:
    assignment = _get_assignment_or_404(db, assignment_id)
    project_id = assignment.project_id
    expert_name = assignment.expert.name
    crud.project_expert.remove(db, id=assignment_id)
    pipeline.log_activity(
        db, project_id, "expert_removed",
        f"{expert_name} removed from the project",
        user_id=current_user.id, details={"projectExpertId": assignment_id},
    )
    db.commit()


@router.post("/{assignment_id}/invite", response_model=schemas.InviteResponse)
def invite_assignment(
    assignment_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Invite the expert and email them their response link"""
    assignment = _get_assignment_or_404(db, assignment_id)
    assignment = pipeline.invite(db, assignment, user_id=current_user.id)
    url = pipeline.invitation_url(assignment.invitation_token)
    background_tasks.add_task(
        email_service.send_expert_invitation_email,
        **links.invitation_email_args(assignment, url),
    )
    return {"assignment": assignment, "invitation_url": url}


@router.post("/{assignment_id}/accept", response_model=schemas.ProjectExpert)
def accept_assignment(
    assignment_id: int,
    payload: schemas.AcceptInvitationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Record an acceptance the expert gave outside their invitation link"""
    assignment = _get_assignment_or_404(db, assignment_id)
    return pipeline.accept(
        db, assignment,
        vq_answers=[a.model_dump(by_alias=True) for a in payload.vq_answers],
        availability_note=payload.availability_note,
        user_id=current_user.id,
    )


@router.post("/{assignment_id}/decline", response_model=schemas.ProjectExpert)
def decline_assignment(
    assignment_id: int,
    payload: schemas.DeclineInvitationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    assignment = _get_assignment_or_404(db, assignment_id)
    return pipeline.decline(db, assignment, reason=payload.reason, user_id=current_user.id)


@router.post("/{assignment_id}/select", response_model=schemas.ProjectExpert)
def select_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Client picked this expert"""
    assignment = _get_assignment_or_404(db, assignment_id)
    return pipeline.select_for_client(db, assignment, user_id=current_user.id)


@router.post("/{assignment_id}/schedule", response_model=schemas.ProjectExpert)
def schedule_assignment(
    assignment_id: int,
    payload: schemas.ScheduleAssignmentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    assignment = _get_assignment_or_404(db, assignment_id)
    return pipeline.schedule(db, assignment, scheduled_at=payload.scheduled_at, user_id=current_user.id)


@router.post("/{assignment_id}/complete", response_model=schemas.ProjectExpert)
def complete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    assignment = _get_assignment_or_404(db, assignment_id)
    return pipeline.complete(db, assignment, user_id=current_user.id)
