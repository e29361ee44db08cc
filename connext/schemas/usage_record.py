from typing import Optional
from datetime import datetime
from pydantic import Field
from connext.schemas.base import CamelModel, UTCDateTime


class UsageRecordBase(CamelModel):
    project_id: int
    expert_id: int
    duration_minutes: int = Field(ge=0)
    credits_used: float = Field(ge=0)
    notes: Optional[str] = None


class UsageRecordCreate(UsageRecordBase):
    call_date: UTCDateTime


class UsageRecord(UsageRecordBase):
    id: int
    call_date: datetime
    created_at: datetime
