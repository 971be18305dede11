# ============================================================================
# FILE: listenqueue/api/dependencies.py
# ============================================================================
from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from listenqueue.config import settings
from listenqueue.core.errors import GenericError, TokenError
from listenqueue.core.pagination import page_params
from listenqueue.core.security import decode_access_token
from listenqueue.db.session import get_db
from listenqueue.db.models.user import User
from typing import Callable, Optional, Tuple


def get_query_token(request: Request) -> Optional[str]:
    return request.query_params.get("token") or None


def get_header_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("authorization")
    if authorization:
        parts = authorization.split(" ")
        if len(parts) == 2 and parts[0].lower() == "jwt":
            return parts[1]
    return None


def get_cookie_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def extract_token(request: Request) -> Optional[str]:
    """Find the session token: query parameter, then JWT header, then cookie"""
    return get_query_token(request) or get_header_token(request) or get_cookie_token(request)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get current authenticated user from the JWT session token
    Returns None if no token was sent (anonymous access); a token that can't
    be accepted is an error rather than anonymous access
    """
    token = extract_token(request)
    if not token:
        return None

    payload = decode_access_token(token)
    subject = payload.get("sub")
    if subject is None:
        raise TokenError("Empty token")

    try:
        user = db.get(User, int(subject))
    except (TypeError, ValueError):
        raise TokenError("Invalid token")
    if user is None:
        raise TokenError("User not found")

    if user.is_banned():
        raise GenericError(403, "You have been banned")

    return user


def require_current_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "JWT"},
        )
    return current_user


def require_role(role: int) -> Callable[..., User]:
    """Build a dependency that requires at least `role`"""
    def dependency(current_user: User = Depends(require_current_user)) -> User:
        if current_user.role < role:
            raise GenericError(403, "you need a higher role to do this")
        return current_user
    return dependency


def pagination(default_limit: int, max_limit: int) -> Callable[..., Tuple[int, int]]:
    """Build a dependency reading clamped `page` and `limit` query values"""
    def dependency(
        page: Optional[int] = Query(None, description="Zero-based page number"),
        limit: Optional[int] = Query(None, description="Items per page")
    ) -> Tuple[int, int]:
        return page_params(page, limit, default_limit, max_limit)
    return dependency
