from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from connext import crud, schemas
from connext.core import deps
from connext.db.database import get_db
from connext.models.client import ClientOrganization, ClientPoc
from connext.models.user import User, UserRole
import logging

logger = logging.getLogger(__name__)

organizations_router = APIRouter()
pocs_router = APIRouter()

require_client_manager = deps.require_roles(UserRole.ADMIN, UserRole.PM)


def _get_organization_or_404(db: Session, organization_id: int) -> ClientOrganization:
    organization = crud.client_organization.get(db, id=organization_id)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client organization not found")
    return organization


def _get_poc_or_404(db: Session, poc_id: int) -> ClientPoc:
    poc = crud.client_poc.get(db, id=poc_id)
    if not poc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client POC not found")
    return poc


# ---------------------------
# Client organizations
# ---------------------------

@organizations_router.get("", response_model=List[schemas.ClientOrganization])
def list_organizations(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.client_organization.get_multi(db)


@organizations_router.post("", response_model=schemas.ClientOrganization, status_code=status.HTTP_201_CREATED)
def create_organization(
    organization_in: schemas.ClientOrganizationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> Any:
    organization = crud.client_organization.create(db, obj_in=organization_in)
    logger.info(f"Client organization {organization.id} created by user {current_user.id}")
    return organization


@organizations_router.get("/{organization_id}", response_model=schemas.ClientOrganization)
def read_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return _get_organization_or_404(db, organization_id)


@organizations_router.patch("/{organization_id}", response_model=schemas.ClientOrganization)
def update_organization(
    organization_id: int,
    organization_in: schemas.ClientOrganizationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> Any:
    organization = _get_organization_or_404(db, organization_id)
    return crud.client_organization.update(db, db_obj=organization, obj_in=organization_in)


@organizations_router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> None:
    _get_organization_or_404(db, organization_id)
    crud.client_organization.remove(db, id=organization_id)
    logger.info(f"Client organization {organization_id} deleted by user {current_user.id}")


@organizations_router.get("/{organization_id}/projects", response_model=List[schemas.Project])
def list_organization_projects(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    _get_organization_or_404(db, organization_id)
    return crud.project.get_by_organization(db, organization_id=organization_id)


@organizations_router.get("/{organization_id}/pocs", response_model=List[schemas.ClientPoc])
def list_organization_pocs(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    _get_organization_or_404(db, organization_id)
    return crud.client_poc.get_by_organization(db, organization_id=organization_id)


# ---------------------------
# Client points of contact
# ---------------------------

@pocs_router.get("", response_model=List[schemas.ClientPoc])
def list_pocs(
    organization_id: Optional[int] = Query(None, alias="organizationId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    if organization_id is not None:
        return crud.client_poc.get_by_organization(db, organization_id=organization_id)
    return crud.client_poc.get_multi(db)


@pocs_router.post("", response_model=schemas.ClientPoc, status_code=status.HTTP_201_CREATED)
def create_poc(
    poc_in: schemas.ClientPocCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> Any:
    _get_organization_or_404(db, poc_in.organization_id)
    return crud.client_poc.create(db, obj_in=poc_in)


@pocs_router.patch("/{poc_id}", response_model=schemas.ClientPoc)
def update_poc(
    poc_id: int,
    poc_in: schemas.ClientPocUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> Any:
    poc = _get_poc_or_404(db, poc_id)
    return crud.client_poc.update(db, db_obj=poc, obj_in=poc_in)


@pocs_router.delete("/{poc_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_poc(
    poc_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_client_manager),
) -> None:
    _get_poc_or_404(db, poc_id)
    crud.client_poc.remove(db, id=poc_id)
