# File: connext/api/v1/endpoints/usage.py
import io
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.utils import utcnow
from connext.db.database import get_db
from connext.models.user import User
from connext.services import exports

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[schemas.UsageRecord])
def list_usage_records(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_billing),
) -> Any:
    return crud.usage_record.get_multi(db)


@router.post("", response_model=schemas.UsageRecord, status_code=status.HTTP_201_CREATED)
def create_usage_record(
    record_in: schemas.UsageRecordCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_billing),
) -> Any:
    if not crud.project.get(db, id=record_in.project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if not crud.expert.get(db, id=record_in.expert_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expert not found")
    record = crud.usage_record.create(db, obj_in=record_in)
    logger.info(f"Usage record {record.id} added by {current_user.email}")
    return record


@router.get("/export")
def export_usage_records(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_billing),
) -> StreamingResponse:
    """Download every usage record as CSV"""
    records = crud.usage_record.get_multi(db, limit=None)
    filename = f"usage-report-{utcnow():%Y-%m-%d}.csv"
    return StreamingResponse(
        io.BytesIO(exports.usage_csv(records)),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_usage_record(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_billing),
) -> None:
    if not crud.usage_record.get(db, id=record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usage record not found")
    crud.usage_record.remove(db, id=record_id)
