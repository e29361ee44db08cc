from typing import List
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.call_record import CallRecord
from connext.schemas.call_record import CallRecordCreate, CallRecordUpdate


class CRUDCallRecord(CRUDBase[CallRecord, CallRecordCreate, CallRecordUpdate]):

    def get_by_project(self, db: Session, *, project_id: int) -> List[CallRecord]:
        return (
            db.query(CallRecord)
            .filter(CallRecord.project_id == project_id)
            .order_by(CallRecord.call_date.desc(), CallRecord.id.desc())
            .all()
        )

    def get_by_expert(self, db: Session, *, expert_id: int) -> List[CallRecord]:
        return (
            db.query(CallRecord)
            .filter(CallRecord.expert_id == expert_id)
            .order_by(CallRecord.call_date.desc(), CallRecord.id.desc())
            .all()
        )


call_record = CRUDCallRecord(CallRecord)
