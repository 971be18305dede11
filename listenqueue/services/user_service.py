# ============================================================================
# FILE: listenqueue/services/user_service.py
# ============================================================================
from datetime import datetime, timedelta
from typing import Dict, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from listenqueue.core import events
from listenqueue.core.cache import cache
from listenqueue.core.errors import GenericError, PaginateError
from listenqueue.core.pagination import clamp, paginate
from listenqueue.core.security import get_password_hash, verify_password
from listenqueue.db.models.history import History
from listenqueue.db.models.user import User, ROLE_DEFAULT, ROLE_ADMIN
from listenqueue.schemas.user import UserCreate
from listenqueue.services.booth_service import booth_service
import logging

logger = logging.getLogger(__name__)

STATUS_MIN = 0
STATUS_MAX = 3


def mute_key(user_id: int) -> str:
    return f"mute:{user_id}"


def presence_key(user_id: int) -> str:
    return f"users:{user_id}"


class UserService:
    """Service layer for user operations"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        try:
            hashed_password = get_password_hash(user_data.password)
            user = User(
                username=user_data.username,
                slug=user_data.username.lower(),
                email=user_data.email,
                hashed_password=hashed_password,
                role=ROLE_DEFAULT
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username, case-insensitively"""
        return db.query(User).filter(
            or_(User.username == username, User.slug == username.lower())
        ).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    def authenticate_user(self, db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = self.get_user_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def get_users(self, db: Session, page: int, limit: int) -> Dict:
        try:
            total = db.query(func.count(User.id)).scalar()
            users = db.query(User).order_by(User.id).offset(page * limit).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing users: {e}")
            raise PaginateError(e)
        return paginate(page, limit, users, total)

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise GenericError(404, f"user with ID {user_id} not found")
        return user

    def _save(self, db: Session, user: User, action: str) -> User:
        try:
            db.commit()
            db.refresh(user)
            return user
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error {action} user {user.id}: {e}")
            raise

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    def ban_user(self, db: Session, moderator_id: int, user_id: int, time: int, exiled: bool) -> User:
        """
        Ban a user for `time` milliseconds, or lift the ban when `time` is 0
        Exiled users keep their account but are banned from the booth
        """
        user = self.get_user(db, user_id)
        user.banned_until = datetime.utcnow() + timedelta(milliseconds=time) if time > 0 else None
        user.exiled = exiled
        user = self._save(db, user, "banning")

        events.publish("ban" if time > 0 else "unban", {
            "moderatorID": moderator_id,
            "userID": user.id,
            "banned": user.banned_until.isoformat() if user.banned_until else None,
            "exiled": user.exiled
        })
        logger.info(f"User {user.id} {'banned' if time > 0 else 'unbanned'} by {moderator_id}")
        return user

    def mute_user(self, db: Session, moderator_id: int, user_id: int, time: int) -> bool:
        """Mute a user for `time` milliseconds; 0 unmutes. Returns whether the user is muted"""
        user = self.get_user(db, user_id)

        if time > 0:
            expires = datetime.utcnow() + timedelta(milliseconds=time)
            cache.set_value(mute_key(user.id), expires.isoformat(), expire_ms=time)
        else:
            cache.delete_cache(mute_key(user.id))

        events.publish("mute" if time > 0 else "unmute", {
            "moderatorID": moderator_id,
            "userID": user.id,
            "expires": time
        })
        return self.is_muted(user.id)

    def is_muted(self, user_id: int) -> bool:
        return cache.get_value(mute_key(user_id)) is not None

    def change_role(self, db: Session, moderator: User, user_id: int, role: int) -> User:
        """Set a user's role, clamped to the known roles and capped at the moderator's own"""
        user = self.get_user(db, user_id)
        role = clamp(role, ROLE_DEFAULT, ROLE_ADMIN)
        if role > moderator.role:
            raise GenericError(403, "you can't give a role higher than your own")
        user.role = role
        user = self._save(db, user, "changing role of")

        events.publish("roleChange", {
            "moderatorID": moderator.id,
            "userID": user.id,
            "role": user.role
        })
        return user

    def change_username(self, db: Session, moderator: User, user_id: int, name: str) -> User:
        """Rename a user; only admins may rename someone else"""
        user = self.get_user(db, user_id)
        if user.id != moderator.id and moderator.role < ROLE_ADMIN:
            raise GenericError(403, "you need to be an admin to do this")

        existing = self.get_user_by_username(db, name)
        if existing and existing.id != user.id:
            raise GenericError(400, "username is already taken")

        user.username = name
        user.slug = name.lower()
        user = self._save(db, user, "renaming")

        events.publish("nameChange", {
            "moderatorID": moderator.id,
            "userID": user.id,
            "username": user.username
        })
        return user

    def set_status(self, user_id: int, status: int) -> int:
        status = clamp(status, STATUS_MIN, STATUS_MAX)
        events.publish("statusChange", {
            "userID": user_id,
            "status": status
        })
        return status

    def disconnect_user(self, user_id: int):
        """Take a user out of the booth and the waitlist and drop their presence"""
        booth_service.skip_if_current_dj(user_id)

        try:
            booth_service.leave_waitlist(user_id)
        except GenericError:
            # Not in the waitlist
            pass

        cache.delete_cache(presence_key(user_id))
        events.publish("user:leave", {"userID": user_id})
        logger.info(f"User {user_id} disconnected")

    def get_history(self, db: Session, user_id: int, page: int, limit: int) -> Dict:
        """Get a page of the tracks a user played, newest first"""
        self.get_user(db, user_id)
        try:
            query = db.query(History).filter(History.user_id == user_id)
            total = query.with_entities(func.count(History.id)).scalar()
            history = query.order_by(History.played_at.desc(), History.id.desc()) \
                .offset(page * limit).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing history for user {user_id}: {e}")
            raise PaginateError(e)
        return paginate(page, limit, history, total)

# Create singleton instance
user_service = UserService()
