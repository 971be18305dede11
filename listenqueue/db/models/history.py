# ============================================================================
# FILE: listenqueue/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from listenqueue.db.base import Base

class History(Base):
    """History model to track media played by a user in the booth"""
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    media_id = Column(Integer, ForeignKey("global_media.id"), nullable=False)
    artist = Column(String, nullable=False, default="")
    title = Column(String, nullable=False, default="")
    played_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="history")
    media = relationship("GlobalMedia", lazy="joined")
