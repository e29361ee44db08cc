from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from connext import crud, schemas
from connext.core import deps
from connext.core.utils import utcnow
from connext.db.database import get_db
from connext.models.expert import Expert
from connext.models.user import User, UserRole
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_expert_or_404(db: Session, expert_id: int) -> Expert:
    expert = crud.expert.get(db, id=expert_id)
    if not expert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")
    return expert


@router.get("", response_model=List[schemas.Expert])
def list_experts(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    if search:
        return crud.expert.search(db, query=search)
    return crud.expert.get_multi(db)


@router.get("/search", response_model=List[schemas.Expert])
def search_experts(
    q: Optional[str] = None,
    industry: Optional[str] = None,
    expert_status: Optional[str] = Query(None, alias="status"),
    country: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Free-text search with optional industry, status and country filters"""
    return crud.expert.search(db, query=q, industry=industry, status=expert_status, country=country)


@router.post("", response_model=schemas.Expert, status_code=status.HTTP_201_CREATED)
def create_expert(
    expert_in: schemas.ExpertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    """Add an expert. Experts added by an RA are credited to that RA."""
    if crud.expert.get_by_email(db, email=expert_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An expert with this email already exists"
        )
    data = expert_in.model_dump()
    if data.get("sourced_by_ra_id") is None and current_user.role == UserRole.RA:
        data["sourced_by_ra_id"] = current_user.id
        data["recruited_by"] = data.get("recruited_by") or current_user.email
    if data.get("sourced_by_ra_id") is not None and data.get("sourced_at") is None:
        data["sourced_at"] = utcnow()
    expert = crud.expert.create(db, obj_in=data)
    logger.info(f"Expert {expert.id} created by user {current_user.id}")
    return expert


@router.get("/{expert_id}", response_model=schemas.Expert)
def read_expert(
    expert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    return _get_expert_or_404(db, expert_id)


@router.patch("/{expert_id}", response_model=schemas.Expert)
def update_expert(
    expert_id: int,
    expert_in: schemas.ExpertUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    expert = _get_expert_or_404(db, expert_id)
    if expert_in.email and expert_in.email.lower() != expert.email.lower():
        if crud.expert.get_by_email(db, email=expert_in.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An expert with this email already exists"
            )
    return crud.expert.update(db, db_obj=expert, obj_in=expert_in)


@router.delete("/{expert_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expert(
    expert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(UserRole.ADMIN, UserRole.PM)),
) -> None:
    _get_expert_or_404(db, expert_id)
    crud.expert.remove(db, id=expert_id)
    logger.info(f"Expert {expert_id} deleted by user {current_user.id}")


@router.get("/{expert_id}/consultations", response_model=List[schemas.CallRecord])
def list_expert_consultations(
    expert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    _get_expert_or_404(db, expert_id)
    return crud.call_record.get_by_expert(db, expert_id=expert_id)


@router.get("/{expert_id}/assignments", response_model=List[schemas.ProjectExpert])
def list_expert_assignments(
    expert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_staff),
) -> Any:
    _get_expert_or_404(db, expert_id)
    return crud.project_expert.get_by_expert(db, expert_id=expert_id)
