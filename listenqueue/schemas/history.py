# ============================================================================
# FILE: listenqueue/schemas/history.py
# ============================================================================
from pydantic import BaseModel
from datetime import datetime
from listenqueue.schemas.media import GlobalMediaResponse

class HistoryResponse(BaseModel):
    """Schema for a played track"""
    id: int
    user_id: int
    artist: str
    title: str
    played_at: datetime
    media: GlobalMediaResponse

    class Config:
        from_attributes = True
