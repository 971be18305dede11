# ============================================================================
# FILE: listenqueue/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, model_validator
from typing import Optional, List
from datetime import datetime
from listenqueue.schemas.media import MediaResponse

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: StrictStr = Field(..., min_length=1)
    description: StrictStr = ""
    shared: StrictBool = False

class PlaylistRename(BaseModel):
    name: StrictStr = Field(..., min_length=1)

class PlaylistShare(BaseModel):
    share: StrictBool

class PlaylistItemAdd(BaseModel):
    """Schema for one media item to add to a playlist"""
    source_type: StrictStr
    source_id: StrictStr
    artist: Optional[StrictStr] = None
    title: Optional[StrictStr] = None
    start: Optional[float] = Field(None, ge=0)
    end: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_range(self):
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError("end has to be after start")
        return self

class PlaylistItemsAdd(BaseModel):
    """Items are inserted after the item `after`; None or -1 means the top"""
    items: List[PlaylistItemAdd]
    after: Optional[StrictInt] = None

class PlaylistItemsMove(BaseModel):
    items: List[StrictInt]
    after: Optional[StrictInt] = None

class PlaylistItemsDelete(BaseModel):
    items: List[StrictInt]

class PlaylistItemCopy(BaseModel):
    to_playlist_id: StrictInt

class PlaylistResponse(BaseModel):
    """Schema for playlist response"""
    id: int
    author_id: int
    name: str
    description: Optional[str] = None
    shared: bool
    size: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class PlaylistDetailResponse(PlaylistResponse):
    """Schema for playlist response including its media"""
    media: List[MediaResponse] = []

class ActivePlaylistResponse(BaseModel):
    playlist_id: int
