import secrets
import string
from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from connext.core.config import settings
from connext.core.utils import utcnow


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash stored in the database
        return False


def create_access_token(
    subject: str,
    user_id: int,
    role: str,
    full_name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = utcnow() + expires_delta
    to_encode = {
        "sub": subject,
        "id": user_id,
        "role": role,
        "fullName": full_name,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def generate_temp_password(length: Optional[int] = None) -> str:
    length = length or settings.TEMP_PASSWORD_LENGTH
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_invitation_token() -> str:
    # 32 random bytes as hex, 64 characters
    return secrets.token_hex(32)
