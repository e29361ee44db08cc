from typing import Any, Dict, Optional, Union
from sqlalchemy import func
from sqlalchemy.orm import Session
from connext.crud.base import CRUDBase
from connext.core.security import get_password_hash, verify_password
from connext.core.utils import utcnow
from connext.models.user import User
from connext.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def create(self, db: Session, *, obj_in: UserCreate, must_change_password: bool = False) -> User:
        db_obj = User(
            email=obj_in.email,
            full_name=obj_in.full_name,
            role=obj_in.role,
            is_active=obj_in.is_active,
            hashed_password=get_password_hash(obj_in.password) if obj_in.password else None,
            must_change_password=must_change_password,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: User, obj_in: Union[UserUpdate, Dict[str, Any]]) -> User:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        if "password" in update_data:
            update_data["hashed_password"] = get_password_hash(update_data.pop("password"))
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def set_password(self, db: Session, *, user: User, password: str, must_change: bool) -> User:
        return self.update(db, db_obj=user, obj_in={"password": password, "must_change_password": must_change})

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def record_login(self, db: Session, *, user: User) -> User:
        return super().update(db, db_obj=user, obj_in={"last_login": utcnow()})


user = CRUDUser(User)
