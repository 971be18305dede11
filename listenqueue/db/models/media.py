# ============================================================================
# FILE: listenqueue/db/models/media.py
# ============================================================================
from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, Boolean, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from listenqueue.db.base import Base

class GlobalMedia(Base):
    """A track as known by its source, shared by every playlist that holds it"""
    __tablename__ = "global_media"
    __table_args__ = (UniqueConstraint("source_type", "source_id", name="uq_global_media_source"),)

    id = Column(Integer, primary_key=True, index=True)
    source_type = Column(String, nullable=False)  # youtube, soundcloud
    source_id = Column(String, nullable=False)
    artist = Column(String, nullable=False, default="")
    title = Column(String, nullable=False, default="")
    duration = Column(Integer, nullable=False, default=0)  # seconds
    thumbnail = Column(String, nullable=True)
    nsfw = Column(Boolean, default=False, nullable=False)
    restricted = Column(JSON, default=list, nullable=False)  # blocked region codes
    created_at = Column(DateTime, default=datetime.utcnow)

class Media(Base):
    """A playlist's own copy of a track, with editable metadata"""
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    global_media_id = Column(Integer, ForeignKey("global_media.id"), nullable=False)
    artist = Column(String, nullable=False, default="")
    title = Column(String, nullable=False, default="")
    start = Column(Float, nullable=False, default=0)  # seconds
    end = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="media")
    global_media = relationship("GlobalMedia", lazy="joined")
