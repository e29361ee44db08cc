# File: connext/api/v1/endpoints/ra_incentives.py
"""
RA incentive reports.

Managers and finance see every RA; an RA may only open their own detail.
A toDate at exactly midnight is read as "through the end of that day".
"""

import logging
from dataclasses import asdict
from datetime import datetime, time, timedelta
from typing import Any, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from connext import crud, schemas
from connext.core import deps
from connext.core.config import settings
from connext.core.permissions import normalize_role
from connext.core.utils import as_naive_utc
from connext.db.database import get_db
from connext.models.user import User, UserRole
from connext.services import ra_incentives

logger = logging.getLogger(__name__)
router = APIRouter()

INCENTIVE_VIEWER_ROLES = (UserRole.ADMIN.value, UserRole.PM.value, UserRole.FINANCE.value)


def _period(
    from_date: Optional[datetime], to_date: Optional[datetime]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    from_date = as_naive_utc(from_date)
    to_date = as_naive_utc(to_date)
    if to_date is not None and to_date.time() == time.min:
        to_date = to_date + timedelta(days=1) - timedelta(microseconds=1)
    if from_date and to_date and from_date > to_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="fromDate must not be after toDate"
        )
    return from_date, to_date


def _report_settings() -> dict:
    return {
        "incentive_per_call_brl": settings.INCENTIVE_PER_CALL_BRL,
        "eligibility_window_days": settings.ELIGIBILITY_WINDOW_DAYS,
    }


@router.get("", response_model=schemas.AllRaIncentives)
def list_ra_incentives(
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_roles(*INCENTIVE_VIEWER_ROLES)),
) -> Any:
    from_date, to_date = _period(from_date, to_date)
    summaries = [
        schemas.RaIncentiveSummary.model_validate(asdict(result))
        for result in ra_incentives.get_all_ra_incentives(db, from_date, to_date)
    ]
    return schemas.AllRaIncentives(
        period={"from_date": from_date, "to_date": to_date},
        summaries=summaries,
        **_report_settings(),
    )


@router.get("/{ra_id}", response_model=schemas.RaIncentiveDetail)
def read_ra_incentive(
    ra_id: int,
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    role = normalize_role(current_user.role)
    if role not in INCENTIVE_VIEWER_ROLES and not (role == UserRole.RA.value and current_user.id == ra_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to perform this action",
        )
    ra = crud.user.get(db, id=ra_id)
    if not ra or normalize_role(ra.role) != UserRole.RA.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="RA not found")

    from_date, to_date = _period(from_date, to_date)
    result = ra_incentives.get_ra_incentive(db, ra, from_date, to_date)
    return schemas.RaIncentiveDetail.model_validate({
        **asdict(result),
        "period": {"from_date": from_date, "to_date": to_date},
        **_report_settings(),
    })
