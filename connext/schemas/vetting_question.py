from typing import Optional
from datetime import datetime
from connext.schemas.base import CamelModel


class VettingQuestionBase(CamelModel):
    project_id: int
    question: str
    order_index: int = 0
    is_required: bool = True


class VettingQuestionCreate(VettingQuestionBase):
    pass


class VettingQuestionUpdate(CamelModel):
    question: Optional[str] = None
    order_index: Optional[int] = None
    is_required: Optional[bool] = None


class VettingQuestion(VettingQuestionBase):
    id: int
    created_at: datetime
