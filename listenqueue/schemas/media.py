# ============================================================================
# FILE: listenqueue/schemas/media.py
# ============================================================================
from pydantic import BaseModel, Field, StrictStr, model_validator
from typing import List, Optional
from datetime import datetime

class GlobalMediaResponse(BaseModel):
    """Schema for a track as known by its source"""
    id: int
    source_type: str
    source_id: str
    artist: str
    title: str
    duration: int
    thumbnail: Optional[str] = None
    nsfw: bool = False
    restricted: List[str] = []

    class Config:
        from_attributes = True

class MediaResponse(BaseModel):
    """Schema for a playlist item"""
    id: int
    playlist_id: int
    artist: str
    title: str
    start: float
    end: float
    created_at: datetime
    global_media: GlobalMediaResponse

    class Config:
        from_attributes = True

class SearchResult(BaseModel):
    """Schema for a media source search hit"""
    source_type: str
    source_id: str
    artist: str
    title: str
    duration: int = 0
    thumbnail: Optional[str] = None
    nsfw: bool = False
    restricted: List[str] = []

class SearchResponse(BaseModel):
    youtube: List[SearchResult] = []
    soundcloud: List[SearchResult] = []

class MediaMetadata(BaseModel):
    """Schema for editing a playlist item"""
    artist: StrictStr
    title: StrictStr
    start: float = Field(..., ge=0)
    end: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_range(self):
        if self.end < self.start:
            raise ValueError("end has to be after start")
        return self
