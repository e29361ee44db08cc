# File: connext/api/v1/endpoints/call_records.py
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.utils import utcnow
from connext.db.database import get_db
from connext.models.call_record import CallRecord, CallStatus
from connext.models.project_expert import AssignmentStatus
from connext.models.user import User
from connext.services import pipeline
from connext.services.credit_units import calculate_cu

logger = logging.getLogger(__name__)
router = APIRouter()

OPEN_CALL_STATUSES = (CallStatus.PENDING.value, CallStatus.SCHEDULED.value)


def _get_call_or_404(db: Session, call_id: int) -> CallRecord:
    call = crud.call_record.get(db, id=call_id)
    if not call:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Call record not found")
    return call


def _ensure_open(call: CallRecord) -> None:
    if call.status not in OPEN_CALL_STATUSES:
        logger.warning(f"Call {call.id} is already {call.status}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Call is already {call.status}"
        )


@router.get("", response_model=List[schemas.CallRecord])
def list_call_records(
    project_id: Optional[int] = Query(None, alias="projectId"),
    expert_id: Optional[int] = Query(None, alias="expertId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    query = db.query(CallRecord)
    if project_id is not None:
        query = query.filter(CallRecord.project_id == project_id)
    if expert_id is not None:
        query = query.filter(CallRecord.expert_id == expert_id)
    return query.order_by(CallRecord.created_at.desc(), CallRecord.id.desc()).all()


@router.post("", response_model=schemas.CallRecord, status_code=status.HTTP_201_CREATED)
def create_call_record(
    call_in: schemas.CallRecordCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if not crud.project.get(db, id=call_in.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if not crud.expert.get(db, id=call_in.expert_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")
    if call_in.project_expert_id is not None:
        assignment = crud.project_expert.get(db, id=call_in.project_expert_id)
        if not assignment or assignment.project_id != call_in.project_id or assignment.expert_id != call_in.expert_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Assignment does not match the project and expert"
            )
    call = crud.call_record.create(db, obj_in=call_in)
    logger.info(f"Call record {call.id} created for project {call.project_id}")
    return call


@router.get("/{call_id}", response_model=schemas.CallRecord)
def read_call_record(
    call_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return _get_call_or_404(db, call_id)


@router.patch("/{call_id}", response_model=schemas.CallRecord)
def update_call_record(
    call_id: int,
    call_in: schemas.CallRecordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    call = _get_call_or_404(db, call_id)
    return crud.call_record.update(db, db_obj=call, obj_in=call_in)


@router.delete("/{call_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_call_record(
    call_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> None:
    _get_call_or_404(db, call_id)
    crud.call_record.remove(db, id=call_id)


@router.post("/{call_id}/schedule", response_model=schemas.CallRecord)
def schedule_call(
    call_id: int,
    payload: schemas.ScheduleCallRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Book the consultation slot"""
    call = _get_call_or_404(db, call_id)
    _ensure_open(call)
    if payload.scheduled_end_time <= payload.scheduled_start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Scheduled end time must be after the start time"
        )
    call.status = CallStatus.SCHEDULED.value
    call.scheduled_start_time = payload.scheduled_start_time
    call.scheduled_end_time = payload.scheduled_end_time
    call.call_date = call.call_date or payload.scheduled_start_time
    if payload.zoom_link is not None:
        call.zoom_link = payload.zoom_link
    db.commit()

    assignment = call.project_expert
    if assignment is not None and assignment.status == AssignmentStatus.CLIENT_SELECTED.value:
        pipeline.schedule(db, assignment, scheduled_at=payload.scheduled_start_time, user_id=current_user.id)

    db.refresh(call)
    logger.info(f"Call {call.id} scheduled for {call.scheduled_start_time}")
    return call


@router.post("/{call_id}/complete", response_model=schemas.CallRecord)
def complete_call(
    call_id: int,
    payload: schemas.CompleteCallRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Record the actual duration and bill the credit units"""
    call = _get_call_or_404(db, call_id)
    _ensure_open(call)
    cu = calculate_cu(payload.actual_duration_minutes)

    call.status = CallStatus.COMPLETED.value
    call.actual_duration_minutes = payload.actual_duration_minutes
    call.duration_minutes = payload.actual_duration_minutes
    call.cu_used = cu
    call.completed_at = utcnow()
    if payload.recording_url is not None:
        call.recording_url = payload.recording_url
    if payload.notes is not None:
        call.notes = payload.notes

    project = call.project
    project.total_cu_used = float(project.total_cu_used or 0) + cu
    if project.client_organization is not None:
        organization = project.client_organization
        organization.total_cu_used = float(organization.total_cu_used or 0) + cu
    db.commit()

    assignment = call.project_expert
    if assignment is not None and assignment.status == AssignmentStatus.SCHEDULED.value:
        pipeline.complete(db, assignment, user_id=current_user.id)

    db.refresh(call)
    logger.info(f"Call {call.id} completed: {call.actual_duration_minutes} min, {cu} CU")
    return call


@router.post("/{call_id}/cancel", response_model=schemas.CallRecord)
def cancel_call(
    call_id: int,
    payload: schemas.CancelCallRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    call = _get_call_or_404(db, call_id)
    _ensure_open(call)
    call.status = CallStatus.CANCELLED.value
    if payload.reason:
        call.notes = payload.reason
    db.commit()
    db.refresh(call)
    logger.info(f"Call {call.id} cancelled")
    return call


@router.post("/{call_id}/no-show", response_model=schemas.CallRecord)
def mark_call_no_show(
    call_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    call = _get_call_or_404(db, call_id)
    _ensure_open(call)
    call.status = CallStatus.NO_SHOW.value
    db.commit()
    db.refresh(call)
    logger.info(f"Call {call.id} marked as no-show")
    return call
