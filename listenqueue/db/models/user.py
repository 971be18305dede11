# ============================================================================
# FILE: listenqueue/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from listenqueue.db.base import Base

ROLE_DEFAULT = 0
ROLE_SPECIAL = 1
ROLE_MODERATOR = 2
ROLE_MANAGER = 3
ROLE_ADMIN = 4

class User(Base):
    """User model for authentication, playlists and moderation state"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Integer, default=ROLE_DEFAULT, nullable=False)
    banned_until = Column(DateTime, nullable=True)
    exiled = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlists = relationship("Playlist", back_populates="author", cascade="all, delete-orphan")
    history = relationship("History", back_populates="user", cascade="all, delete-orphan")

    def is_banned(self) -> bool:
        return self.banned_until is not None and self.banned_until > datetime.utcnow()
