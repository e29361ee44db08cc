from typing import List, Optional
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.project_expert import ProjectExpert
from connext.schemas.project_expert import ProjectExpertCreate, ProjectExpertUpdate


class CRUDProjectExpert(CRUDBase[ProjectExpert, ProjectExpertCreate, ProjectExpertUpdate]):

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 500) -> List[ProjectExpert]:
        return (
            db.query(ProjectExpert)
            .order_by(ProjectExpert.assigned_at.desc(), ProjectExpert.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_project(self, db: Session, *, project_id: int) -> List[ProjectExpert]:
        return (
            db.query(ProjectExpert)
            .filter(ProjectExpert.project_id == project_id)
            .order_by(ProjectExpert.id)
            .all()
        )

    def get_by_expert(self, db: Session, *, expert_id: int) -> List[ProjectExpert]:
        return (
            db.query(ProjectExpert)
            .filter(ProjectExpert.expert_id == expert_id)
            .order_by(ProjectExpert.assigned_at.desc())
            .all()
        )

    def get_by_project_and_expert(self, db: Session, *, project_id: int, expert_id: int) -> Optional[ProjectExpert]:
        return (
            db.query(ProjectExpert)
            .filter(ProjectExpert.project_id == project_id, ProjectExpert.expert_id == expert_id)
            .first()
        )

    def get_by_token(self, db: Session, *, token: str) -> Optional[ProjectExpert]:
        return db.query(ProjectExpert).filter(ProjectExpert.invitation_token == token).first()


project_expert = CRUDProjectExpert(ProjectExpert)
