from typing import Optional
from datetime import datetime
from pydantic import Field
from connext.models.call_record import CallStatus
from connext.schemas.base import CamelModel, UTCDateTime


class CallRecordBase(CamelModel):
    project_id: int
    expert_id: int
    project_expert_id: Optional[int] = None
    call_date: Optional[UTCDateTime] = None
    scheduled_start_time: Optional[UTCDateTime] = None
    scheduled_end_time: Optional[UTCDateTime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    zoom_link: Optional[str] = None
    notes: Optional[str] = None


class CallRecordCreate(CallRecordBase):
    status: CallStatus = CallStatus.PENDING


class CallRecordUpdate(CamelModel):
    call_date: Optional[UTCDateTime] = None
    scheduled_start_time: Optional[UTCDateTime] = None
    scheduled_end_time: Optional[UTCDateTime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    zoom_link: Optional[str] = None
    recording_url: Optional[str] = None
    notes: Optional[str] = None


class CallRecord(CallRecordBase):
    id: int
    status: str
    actual_duration_minutes: Optional[int] = None
    cu_used: float = 0
    recording_url: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime


class ScheduleCallRequest(CamelModel):
    scheduled_start_time: UTCDateTime
    scheduled_end_time: UTCDateTime
    zoom_link: Optional[str] = None


class CompleteCallRequest(CamelModel):
    actual_duration_minutes: int = Field(ge=0)
    recording_url: Optional[str] = None
    notes: Optional[str] = None


class CancelCallRequest(CamelModel):
    reason: Optional[str] = None


class CUCalculation(CamelModel):
    minutes: int
    cu: float
