from pydantic import BaseModel
from typing import List, Optional
from connext.schemas.base import CamelModel
from connext.schemas.user import User


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenData(BaseModel):
    email: Optional[str] = None
    user_id: Optional[int] = None
    role: Optional[str] = None


class LoginResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: User
    must_change_password: bool = False


class PermissionsResponse(CamelModel):
    role: str
    allowed_pages: List[str]
    routes: List[str]
