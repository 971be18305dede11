# ============================================================================
# FILE: listenqueue/api/v1/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Tuple
from listenqueue.db.session import get_db
from listenqueue.api.dependencies import pagination, require_current_user
from listenqueue.schemas.common import Page
from listenqueue.schemas.media import MediaMetadata, MediaResponse
from listenqueue.schemas.playlist import (
    ActivePlaylistResponse,
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistItemCopy,
    PlaylistItemsAdd,
    PlaylistItemsDelete,
    PlaylistItemsMove,
    PlaylistRename,
    PlaylistResponse,
    PlaylistShare,
)
from listenqueue.services.playlist_service import playlist_service
from listenqueue.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=Page[PlaylistResponse])
async def get_playlists(
    paging: Tuple[int, int] = Depends(pagination(50, 50)),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get a page of the current user's playlists
    Requires authentication
    """
    page, limit = paging
    return playlist_service.get_playlists(db, current_user.id, page, limit)

@router.post("", response_model=PlaylistDetailResponse)
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Create a new, empty playlist
    Requires authentication
    """
    return playlist_service.create_playlist(db, current_user.id, playlist_data)

@router.get("/{playlist_id}", response_model=PlaylistDetailResponse)
async def get_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get a playlist with its media
    Requires ownership, or the playlist to be shared
    """
    return playlist_service.get_playlist(db, current_user.id, playlist_id)

@router.delete("/{playlist_id}", response_model=PlaylistResponse)
async def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Delete a playlist
    Requires ownership; the active playlist can't be deleted
    """
    return playlist_service.delete_playlist(db, current_user.id, playlist_id)

@router.put("/{playlist_id}/rename", response_model=PlaylistResponse)
async def rename_playlist(
    playlist_id: int,
    body: PlaylistRename,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return playlist_service.rename_playlist(db, current_user.id, playlist_id, body.name)

@router.put("/{playlist_id}/share", response_model=PlaylistResponse)
async def share_playlist(
    playlist_id: int,
    body: PlaylistShare,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return playlist_service.share_playlist(db, current_user.id, playlist_id, body.share)

@router.put("/{playlist_id}/move", response_model=PlaylistDetailResponse)
async def move_playlist_items(
    playlist_id: int,
    body: PlaylistItemsMove,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Move media behind the item `after` (the top when it is null or -1)
    Requires ownership
    """
    return playlist_service.move_playlist_items(
        db, current_user.id, playlist_id, body.after, body.items
    )

@router.put("/{playlist_id}/activate", response_model=ActivePlaylistResponse)
async def activate_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Make this the playlist the booth plays from for the current user
    Requires ownership, or the playlist to be shared
    """
    active_id = playlist_service.activate_playlist(db, current_user.id, playlist_id)
    return {"playlist_id": active_id}

@router.get("/{playlist_id}/media", response_model=Page[MediaResponse])
async def get_playlist_items(
    playlist_id: int,
    paging: Tuple[int, int] = Depends(pagination(50, 100)),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    page, limit = paging
    return playlist_service.get_playlist_items(db, current_user.id, playlist_id, page, limit)

@router.post("/{playlist_id}/media", response_model=List[MediaResponse])
async def create_playlist_items(
    playlist_id: int,
    body: PlaylistItemsAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Add media from a source (youtube, soundcloud) to a playlist
    Requires ownership
    """
    return playlist_service.create_playlist_items(
        db, current_user.id, playlist_id, body.after, body.items
    )

@router.delete("/{playlist_id}/media", response_model=PlaylistDetailResponse)
async def delete_playlist_items(
    playlist_id: int,
    body: PlaylistItemsDelete,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return playlist_service.delete_playlist_items(db, current_user.id, playlist_id, body.items)

@router.get("/{playlist_id}/media/{media_id}", response_model=MediaResponse)
async def get_playlist_item(
    playlist_id: int,
    media_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return playlist_service.get_playlist_item(db, current_user.id, playlist_id, media_id)

@router.put("/{playlist_id}/media/{media_id}", response_model=MediaResponse)
async def update_playlist_item(
    playlist_id: int,
    media_id: int,
    metadata: MediaMetadata,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Edit artist, title and start/end of a playlist item
    Requires ownership
    """
    return playlist_service.update_playlist_item(
        db, current_user.id, playlist_id, media_id, metadata
    )

@router.delete("/{playlist_id}/media/{media_id}", response_model=PlaylistDetailResponse)
async def delete_playlist_item(
    playlist_id: int,
    media_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    return playlist_service.delete_playlist_items(db, current_user.id, playlist_id, [media_id])

@router.post("/{playlist_id}/media/{media_id}/copy", response_model=PlaylistDetailResponse)
async def copy_playlist_item(
    playlist_id: int,
    media_id: int,
    body: PlaylistItemCopy,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Append a copy of a playlist item to another playlist of the current user
    """
    return playlist_service.copy_playlist_item(
        db, current_user.id, playlist_id, media_id, body.to_playlist_id
    )
