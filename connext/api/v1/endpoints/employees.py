from typing import Any, List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session
from connext import crud, schemas
from connext.core import deps
from connext.core.email_service import email_service
from connext.core.security import generate_temp_password
from connext.db.database import get_db
from connext.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_employee_or_404(db: Session, employee_id: int) -> User:
    employee = crud.user.get(db, id=employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


@router.get("", response_model=List[schemas.User])
def list_employees(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    return crud.user.get_multi(db)


@router.post("", response_model=schemas.EmployeeCreated, status_code=status.HTTP_201_CREATED)
def create_employee(
    employee_in: schemas.UserCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    """Create an employee. Without a password a temporary one is generated and returned once."""
    if crud.user.get_by_email(db, email=employee_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists"
        )

    temp_password = None
    if not employee_in.password:
        temp_password = generate_temp_password()
        employee_in = employee_in.model_copy(update={"password": temp_password})

    employee = crud.user.create(db, obj_in=employee_in, must_change_password=temp_password is not None)
    logger.info(f"Employee {employee.id} created by user {current_user.id}")

    if temp_password:
        background_tasks.add_task(
            email_service.send_employee_welcome_email,
            email=employee.email,
            full_name=employee.full_name,
            temp_password=temp_password,
        )

    data = schemas.User.model_validate(employee).model_dump()
    return schemas.EmployeeCreated(**data, temp_password=temp_password)


@router.get("/{employee_id}", response_model=schemas.User)
def read_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    return _get_employee_or_404(db, employee_id)


@router.put("/{employee_id}", response_model=schemas.User)
def update_employee(
    employee_id: int,
    employee_in: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    employee = _get_employee_or_404(db, employee_id)
    if employee_in.email and employee_in.email.lower() != employee.email.lower():
        if crud.user.get_by_email(db, email=employee_in.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A user with this email already exists"
            )
    return crud.user.update(db, db_obj=employee, obj_in=employee_in)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> None:
    if employee_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account"
        )
    _get_employee_or_404(db, employee_id)
    crud.user.remove(db, id=employee_id)
    logger.info(f"Employee {employee_id} deleted by user {current_user.id}")


@router.post("/{employee_id}/reset-password", response_model=schemas.EmployeeCreated)
def reset_employee_password(
    employee_id: int,
    payload: schemas.PasswordResetRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    """Set a new temporary password that must be changed at next login"""
    employee = _get_employee_or_404(db, employee_id)
    temp_password = payload.temp_password or generate_temp_password()
    employee = crud.user.set_password(db, user=employee, password=temp_password, must_change=True)
    background_tasks.add_task(
        email_service.send_employee_welcome_email,
        email=employee.email,
        full_name=employee.full_name,
        temp_password=temp_password,
    )
    logger.info(f"Password reset for employee {employee.id} by user {current_user.id}")
    data = schemas.User.model_validate(employee).model_dump()
    return schemas.EmployeeCreated(**data, temp_password=temp_password)
