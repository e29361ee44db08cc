# File: connext/schemas/user.py
from typing import List, Optional
from datetime import datetime
from pydantic import EmailStr, Field
from connext.models.user import UserRole
from connext.schemas.base import CamelModel


class UserBase(CamelModel):
    email: EmailStr
    full_name: str
    role: UserRole = UserRole.RA
    is_active: bool = True


class UserCreate(UserBase):
    password: Optional[str] = Field(default=None, min_length=8)


class UserUpdate(CamelModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class User(UserBase):
    id: int
    must_change_password: bool = False
    last_login: Optional[datetime] = None
    created_at: datetime


class UserWithPermissions(User):
    allowed_pages: List[str] = []


class EmployeeCreated(User):
    """Returned once on creation so the admin can hand over the temporary password."""

    temp_password: Optional[str] = None


class PasswordChangeRequest(CamelModel):
    current_password: str
    new_password: str = Field(min_length=8)


class PasswordResetRequest(CamelModel):
    temp_password: Optional[str] = Field(default=None, min_length=8)
