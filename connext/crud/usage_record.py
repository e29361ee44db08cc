from typing import List, Optional
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.usage_record import UsageRecord
from connext.schemas.usage_record import UsageRecordCreate


class CRUDUsageRecord(CRUDBase[UsageRecord, UsageRecordCreate, UsageRecordCreate]):

    def get_multi(self, db: Session, *, skip: int = 0, limit: Optional[int] = 1000) -> List[UsageRecord]:
        return (
            db.query(UsageRecord)
            .order_by(UsageRecord.call_date.desc(), UsageRecord.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


usage_record = CRUDUsageRecord(UsageRecord)
