from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.expert import Expert
from connext.schemas.expert import ExpertCreate, ExpertUpdate


class CRUDExpert(CRUDBase[Expert, ExpertCreate, ExpertUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[Expert]:
        return db.query(Expert).filter(func.lower(Expert.email) == email.lower()).first()

    def search(
        self,
        db: Session,
        *,
        query: Optional[str] = None,
        industry: Optional[str] = None,
        status: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = 200,
    ) -> List[Expert]:
        q = db.query(Expert)
        if query:
            pattern = f"%{query.lower()}%"
            q = q.filter(
                or_(
                    func.lower(Expert.name).like(pattern),
                    func.lower(Expert.expertise).like(pattern),
                    func.lower(Expert.industry).like(pattern),
                    func.lower(func.coalesce(Expert.company, "")).like(pattern),
                    func.lower(func.coalesce(Expert.job_title, "")).like(pattern),
                    func.lower(func.coalesce(Expert.bio, "")).like(pattern),
                )
            )
        if industry:
            q = q.filter(func.lower(Expert.industry) == industry.lower())
        if status:
            q = q.filter(Expert.status == status)
        if country:
            q = q.filter(func.lower(Expert.country) == country.lower())
        return q.order_by(Expert.created_at.desc(), Expert.id.desc()).limit(limit).all()


expert = CRUDExpert(Expert)
