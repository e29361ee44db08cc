# File: connext/api/v1/endpoints/auth.py
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from connext import crud, schemas
from connext.core import deps
from connext.core import security
from connext.core.permissions import PAGE_TO_ROUTE, get_allowed_pages, normalize_role
from connext.db.database import get_db
from connext.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _user_with_permissions(user: User) -> schemas.UserWithPermissions:
    data = schemas.User.model_validate(user).model_dump()
    return schemas.UserWithPermissions(**data, allowed_pages=get_allowed_pages(user.role))


@router.post("/login", response_model=schemas.LoginResponse)
def login(login_data: schemas.LoginRequest, db: Session = Depends(get_db)) -> Any:
    """Email/password login returning a bearer token"""
    user = crud.user.authenticate(db, email=login_data.email, password=login_data.password)
    if not user:
        logger.warning(f"Failed login attempt for {login_data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    user = crud.user.record_login(db, user=user)
    token = security.create_access_token(
        subject=user.email,
        user_id=user.id,
        role=normalize_role(user.role),
        full_name=user.full_name,
    )
    logger.info(f"User {user.id} logged in")
    return {
        "token": token,
        "token_type": "bearer",
        "user": user,
        "must_change_password": user.must_change_password,
    }


@router.get("/me", response_model=schemas.UserWithPermissions)
def read_current_user(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    """Current user with the pages their role can open"""
    return _user_with_permissions(current_user)


@router.get("/permissions", response_model=schemas.PermissionsResponse)
def read_permissions(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    pages = get_allowed_pages(current_user.role)
    return {
        "role": normalize_role(current_user.role),
        "allowed_pages": pages,
        "routes": [PAGE_TO_ROUTE[p] for p in pages],
    }


@router.post("/change-password")
def change_password(
    payload: schemas.PasswordChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """Change own password and clear the must-change flag"""
    if not security.verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )
    if payload.current_password == payload.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from the current password"
        )
    crud.user.set_password(db, user=current_user, password=payload.new_password, must_change=False)
    logger.info(f"User {current_user.id} changed password")
    return {"message": "Password changed successfully"}
