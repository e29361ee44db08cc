"""
Recruiter (RA) incentive reporting.

An RA earns a flat amount for every completed call by an expert they sourced,
as long as the call happens within the eligibility window after sourcing.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from connext.core.config import settings
from connext.models.call_record import CallRecord, CallStatus
from connext.models.expert import Expert
from connext.models.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class ExpertIncentive:
    expert_id: int
    expert_name: str
    recruited_at: Optional[datetime]
    eligible_calls: int
    incentive_brl: float


@dataclass
class RaIncentive:
    ra_id: int
    ra_name: str
    ra_email: str
    total_recruited_experts: int
    experts_with_completed_calls: int
    total_eligible_calls: int
    total_incentive_brl: float
    eligible_experts: List[ExpertIncentive] = field(default_factory=list)


def effective_call_date(call: CallRecord) -> Optional[datetime]:
    return call.call_date or call.completed_at


def is_eligible_call(
    call: CallRecord,
    sourced_at: Optional[datetime],
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> bool:
    if call.status != CallStatus.COMPLETED.value or sourced_at is None:
        return False
    call_date = effective_call_date(call)
    if call_date is None:
        return False
    if window_days is None:
        window_days = settings.ELIGIBILITY_WINDOW_DAYS
    elapsed = call_date - sourced_at
    if elapsed < timedelta(0) or elapsed > timedelta(days=window_days):
        return False
    if from_date is not None and call_date < from_date:
        return False
    if to_date is not None and call_date > to_date:
        return False
    return True


def compute_ra_incentive(
    ra: User,
    experts: List[Expert],
    calls_by_expert: Dict[int, List[CallRecord]],
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    per_call_brl: Optional[float] = None,
    window_days: Optional[int] = None,
) -> RaIncentive:
    if per_call_brl is None:
        per_call_brl = settings.INCENTIVE_PER_CALL_BRL

    eligible_experts = []
    for expert in experts:
        calls = calls_by_expert.get(expert.id, [])
        count = sum(
            1 for c in calls
            if is_eligible_call(c, expert.sourced_at, from_date, to_date, window_days)
        )
        if count:
            eligible_experts.append(ExpertIncentive(
                expert_id=expert.id,
                expert_name=expert.name,
                recruited_at=expert.sourced_at,
                eligible_calls=count,
                incentive_brl=count * per_call_brl,
            ))

    total_calls = sum(e.eligible_calls for e in eligible_experts)
    return RaIncentive(
        ra_id=ra.id,
        ra_name=ra.full_name,
        ra_email=ra.email,
        total_recruited_experts=len(experts),
        experts_with_completed_calls=len(eligible_experts),
        total_eligible_calls=total_calls,
        total_incentive_brl=total_calls * per_call_brl,
        eligible_experts=eligible_experts,
    )


def _load_sourcing(db: Session, ra: User):
    experts = db.query(Expert).filter(Expert.sourced_by_ra_id == ra.id).order_by(Expert.id).all()
    calls_by_expert: Dict[int, List[CallRecord]] = {}
    if experts:
        calls = db.query(CallRecord).filter(CallRecord.expert_id.in_([e.id for e in experts])).all()
        for call in calls:
            calls_by_expert.setdefault(call.expert_id, []).append(call)
    return experts, calls_by_expert


def get_ra_incentive(
    db: Session,
    ra: User,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
) -> RaIncentive:
    experts, calls_by_expert = _load_sourcing(db, ra)
    return compute_ra_incentive(ra, experts, calls_by_expert, from_date, to_date)


def get_all_ra_incentives(
    db: Session,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
) -> List[RaIncentive]:
    ras = db.query(User).filter(User.role == UserRole.RA).order_by(User.full_name).all()
    results = [get_ra_incentive(db, ra, from_date, to_date) for ra in ras]
    logger.info(f"Computed incentives for {len(results)} RAs")
    return results
