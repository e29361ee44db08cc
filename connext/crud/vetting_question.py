from typing import List
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.vetting_question import VettingQuestion
from connext.schemas.vetting_question import VettingQuestionCreate, VettingQuestionUpdate


class CRUDVettingQuestion(CRUDBase[VettingQuestion, VettingQuestionCreate, VettingQuestionUpdate]):

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 500) -> List[VettingQuestion]:
        return (
            db.query(VettingQuestion)
            .order_by(VettingQuestion.order_index, VettingQuestion.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_project(self, db: Session, *, project_id: int) -> List[VettingQuestion]:
        return (
            db.query(VettingQuestion)
            .filter(VettingQuestion.project_id == project_id)
            .order_by(VettingQuestion.order_index, VettingQuestion.id)
            .all()
        )


vetting_question = CRUDVettingQuestion(VettingQuestion)
