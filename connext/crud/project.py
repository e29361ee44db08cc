from typing import List
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.project import Project
from connext.models.project_activity import ProjectActivity
from connext.schemas.project import ProjectCreate, ProjectUpdate


class CRUDProject(CRUDBase[Project, ProjectCreate, ProjectUpdate]):

    def get_by_organization(self, db: Session, *, organization_id: int) -> List[Project]:
        return (
            db.query(Project)
            .filter(Project.client_organization_id == organization_id)
            .order_by(Project.created_at.desc())
            .all()
        )

    def get_activities(self, db: Session, *, project_id: int, limit: int = 200) -> List[ProjectActivity]:
        return (
            db.query(ProjectActivity)
            .filter(ProjectActivity.project_id == project_id)
            .order_by(ProjectActivity.created_at.desc(), ProjectActivity.id.desc())
            .limit(limit)
            .all()
        )


project = CRUDProject(Project)
