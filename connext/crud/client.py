from typing import List
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.models.client import ClientOrganization, ClientPoc
from connext.schemas.client import (
    ClientOrganizationCreate, ClientOrganizationUpdate, ClientPocCreate, ClientPocUpdate,
)


class CRUDClientOrganization(CRUDBase[ClientOrganization, ClientOrganizationCreate, ClientOrganizationUpdate]):
    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 500) -> List[ClientOrganization]:
        return db.query(ClientOrganization).order_by(ClientOrganization.name).offset(skip).limit(limit).all()


class CRUDClientPoc(CRUDBase[ClientPoc, ClientPocCreate, ClientPocUpdate]):
    def get_by_organization(self, db: Session, *, organization_id: int) -> List[ClientPoc]:
        return (
            db.query(ClientPoc)
            .filter(ClientPoc.organization_id == organization_id)
            .order_by(ClientPoc.name)
            .all()
        )


client_organization = CRUDClientOrganization(ClientOrganization)
client_poc = CRUDClientPoc(ClientPoc)
