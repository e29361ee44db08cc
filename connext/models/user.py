# File: connext/models/user.py
from sqlalchemy import Column, String, Boolean, Enum, DateTime
from connext.models.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    PM = "pm"
    RA = "ra"
    FINANCE = "finance"


class User(BaseModel):
    """Internal employee account (admin, PM, RA or finance)."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=True)
    role = Column(
        Enum(UserRole, values_callable=lambda obj: [e.value for e in obj], name="user_role"),
        nullable=False,
        default=UserRole.RA,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    must_change_password = Column(Boolean, default=False, nullable=False)
    last_login = Column(DateTime, nullable=True)
