# ============================================================================
# FILE: listenqueue/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from datetime import datetime
from listenqueue.db.base import Base

class Playlist(Base):
    """Playlist model: a named, ordered list of media owned by a user"""
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    shared = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    author = relationship("User", back_populates="playlists")
    media = relationship(
        "Media",
        back_populates="playlist",
        order_by="Media.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    @property
    def size(self) -> int:
        return len(self.media)
