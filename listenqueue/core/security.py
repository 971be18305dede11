# ============================================================================
# FILE: listenqueue/core/security.py
# JWT session tokens and password hashing
# ============================================================================
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from listenqueue.config import settings
from listenqueue.core.errors import TokenError

password_hasher = PasswordHasher()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign a JWT carrying `data`; `sub` holds the user id"""
    to_encode = dict(data)
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify a JWT and return its payload, raising TokenError when rejected"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        raise TokenError("Invalid token")
    if not payload:
        raise TokenError("Empty token")
    return payload


def get_password_hash(password: str) -> str:
    """Hash a password with Argon2id"""
    return password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    if not password or not hashed_password:
        return False
    try:
        return password_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False
