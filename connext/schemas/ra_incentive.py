from typing import List, Optional
from datetime import datetime
from pydantic import Field
from connext.schemas.base import CamelModel


class IncentivePeriod(CamelModel):
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None


class RaIncentiveSummary(CamelModel):
    ra_id: int
    ra_name: str
    ra_email: str
    total_recruited_experts: int
    experts_with_completed_calls: int
    total_eligible_calls: int
    total_incentive_brl: float = Field(alias="totalIncentiveBRL")


class EligibleExpert(CamelModel):
    expert_id: int
    expert_name: str
    recruited_at: Optional[datetime] = None
    eligible_calls: int
    incentive_brl: float = Field(alias="incentiveBRL")


class RaIncentiveDetail(RaIncentiveSummary):
    eligible_experts: List[EligibleExpert]
    period: IncentivePeriod
    incentive_per_call_brl: float = Field(alias="incentivePerCallBRL")
    eligibility_window_days: int


class AllRaIncentives(CamelModel):
    period: IncentivePeriod
    incentive_per_call_brl: float = Field(alias="incentivePerCallBRL")
    eligibility_window_days: int
    summaries: List[RaIncentiveSummary]
