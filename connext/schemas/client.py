from typing import Optional
from datetime import datetime
from connext.schemas.base import CamelModel


class ClientOrganizationBase(CamelModel):
    name: str
    industry: Optional[str] = None
    main_pm_id: Optional[int] = None
    notes: Optional[str] = None


class ClientOrganizationCreate(ClientOrganizationBase):
    total_cu_used: float = 0


class ClientOrganizationUpdate(CamelModel):
    name: Optional[str] = None
    industry: Optional[str] = None
    main_pm_id: Optional[int] = None
    notes: Optional[str] = None
    total_cu_used: Optional[float] = None


class ClientOrganization(ClientOrganizationBase):
    id: int
    total_cu_used: float
    created_at: datetime


class ClientPocBase(CamelModel):
    organization_id: int
    name: str
    email: Optional[str] = None
    job_title: Optional[str] = None
    phone: Optional[str] = None


class ClientPocCreate(ClientPocBase):
    pass


class ClientPocUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    job_title: Optional[str] = None
    phone: Optional[str] = None


class ClientPoc(ClientPocBase):
    id: int
    created_at: datetime
