from typing import Callable
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from connext.db.database import get_db
from connext.core.permissions import normalize_role
from connext.core.security import decode_token
from connext.models.user import User, UserRole
from connext.schemas.auth import TokenData

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    email = payload.get("sub")
    if email is None:
        raise credentials_exception

    token_data = TokenData(email=email, user_id=payload.get("id"), role=payload.get("role"))

    query = db.query(User).filter(User.email == token_data.email)
    if token_data.user_id is not None:
        # The id and email must still belong to the same user
        query = query.filter(User.id == token_data.user_id)
    user = query.first()
    if user is None:
        raise credentials_exception

    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return current_user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory allowing only the given roles through."""
    allowed = {getattr(r, "value", r) for r in roles}

    def checker(current_user: User = Depends(get_current_active_user)) -> User:
        if normalize_role(current_user.role) not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return current_user

    return checker


# Common role groups
require_admin = require_roles(UserRole.ADMIN)
require_staff = require_roles(UserRole.ADMIN, UserRole.PM, UserRole.RA)
require_billing = require_roles(UserRole.ADMIN, UserRole.PM, UserRole.FINANCE)
