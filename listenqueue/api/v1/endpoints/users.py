# ============================================================================
# FILE: listenqueue/api/v1/endpoints/users.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Tuple
from listenqueue.db.session import get_db
from listenqueue.api.dependencies import pagination, require_current_user, require_role
from listenqueue.core.errors import GenericError
from listenqueue.schemas.common import Page
from listenqueue.schemas.history import HistoryResponse
from listenqueue.schemas.user import (
    BanRequest,
    MuteRequest,
    MuteResponse,
    RoleChange,
    StatusChange,
    StatusResponse,
    UserResponse,
    UsernameChange,
)
from listenqueue.services.user_service import user_service
from listenqueue.db.models.user import User, ROLE_MODERATOR, ROLE_MANAGER
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=Page[UserResponse])
async def get_users(
    paging: Tuple[int, int] = Depends(pagination(50, 50)),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    page, limit = paging
    return user_service.get_users(db, page, limit)

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return user_service.get_user(db, user_id)

@router.put("/{user_id}/ban", response_model=UserResponse)
async def ban_user(
    user_id: int,
    body: BanRequest,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_role(ROLE_MODERATOR))
):
    """
    Ban a user for `time` milliseconds; a time of 0 lifts the ban
    Requires moderator role
    """
    return user_service.ban_user(db, moderator.id, user_id, body.time, body.exiled)

@router.put("/{user_id}/mute", response_model=MuteResponse)
async def mute_user(
    user_id: int,
    body: MuteRequest,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_role(ROLE_MODERATOR))
):
    """
    Mute a user in chat for `time` milliseconds; a time of 0 unmutes
    Requires moderator role
    """
    muted = user_service.mute_user(db, moderator.id, user_id, body.time)
    return {"muted": muted}

@router.put("/{user_id}/roles", response_model=UserResponse)
async def change_role(
    user_id: int,
    body: RoleChange,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_role(ROLE_MANAGER))
):
    """
    Change a user's role; out of range roles are clamped
    Roles above the moderator's own are refused
    Requires manager role
    """
    return user_service.change_role(db, moderator, user_id, body.role)

@router.put("/{user_id}/username", response_model=UserResponse)
async def change_username(
    user_id: int,
    body: UsernameChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return user_service.change_username(db, current_user, user_id, body.username)

@router.put("/{user_id}/status", response_model=StatusResponse)
async def set_status(
    user_id: int,
    body: StatusChange,
    current_user: User = Depends(require_current_user)
):
    if current_user.id != user_id:
        raise GenericError(403, "you can't change the status of another user")
    status = user_service.set_status(user_id, body.status)
    return {"user_id": user_id, "status": status}

@router.post("/{user_id}/disconnect")
async def disconnect_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Remove a user from the booth and the waitlist
    Requires moderator role unless disconnecting yourself
    """
    if current_user.id != user_id and current_user.role < ROLE_MODERATOR:
        raise GenericError(403, "you need a higher role to do this")
    user_service.get_user(db, user_id)
    user_service.disconnect_user(user_id)
    return {"message": "User disconnected"}

@router.get("/{user_id}/history", response_model=Page[HistoryResponse])
async def get_history(
    user_id: int,
    paging: Tuple[int, int] = Depends(pagination(25, 100)),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    page, limit = paging
    return user_service.get_history(db, user_id, page, limit)
