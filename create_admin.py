#!/usr/bin/env python3
"""Bootstrap (or repair) the first admin account.

    python create_admin.py admin@example.com "Admin Name" [password]

Without a password a temporary one is generated, printed once, and must be
changed at first login.
"""

import os
import sys
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from connext import crud
from connext.core.security import generate_temp_password
from connext.db.database import SessionLocal
from connext.models.user import UserRole
from connext.schemas.user import UserCreate


def create_admin(email: str, full_name: str, password: str = None):
    """Create an admin user, or promote and reset an existing one"""
    db = SessionLocal()
    must_change = password is None
    password = password or generate_temp_password()

    try:
        existing_user = crud.user.get_by_email(db, email=email)
        if existing_user:
            print(f"User already exists: {email} (role: {existing_user.role.value})")
            existing_user.role = UserRole.ADMIN
            existing_user.is_active = True
            crud.user.set_password(db, user=existing_user, password=password, must_change=must_change)
            print("Promoted to admin and password reset")
        else:
            user = crud.user.create(
                db,
                obj_in=UserCreate(email=email, full_name=full_name, role=UserRole.ADMIN, password=password),
                must_change_password=must_change,
            )
            print(f"Admin created: {user.email} (id {user.id})")

        if must_change:
            print(f"Temporary password: {password}")

    except Exception as e:
        print(f"Error creating admin: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    create_admin(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)
