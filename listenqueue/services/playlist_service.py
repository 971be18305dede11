# ============================================================================
# FILE: listenqueue/services/playlist_service.py
# ============================================================================
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from listenqueue.core.cache import cache
from listenqueue.core.errors import GenericError, PaginateError
from listenqueue.core.pagination import paginate
from listenqueue.db.models.media import GlobalMedia, Media
from listenqueue.db.models.playlist import Playlist
from listenqueue.schemas.media import MediaMetadata
from listenqueue.schemas.playlist import PlaylistCreate, PlaylistItemAdd, PlaylistResponse
from listenqueue.services.search_service import search_service
import logging

logger = logging.getLogger(__name__)


def active_playlist_key(user_id: int) -> str:
    return f"playlist:{user_id}"


class PlaylistService:
    """Service layer for playlist operations"""

    # ------------------------------------------------------------------
    # Lookups and access checks
    # ------------------------------------------------------------------

    def _find_playlist(self, db: Session, playlist_id: int) -> Playlist:
        playlist = db.get(Playlist, playlist_id)
        if not playlist:
            raise GenericError(404, f"playlist with ID {playlist_id} not found")
        return playlist

    def _check_readable(self, playlist: Playlist, user_id: int, message: str = "this playlist is private"):
        if playlist.author_id != user_id and not playlist.shared:
            raise GenericError(403, message)

    def _check_owner(self, playlist: Playlist, user_id: int, message: str):
        if playlist.author_id != user_id:
            raise GenericError(403, message)

    def _find_item(self, playlist: Playlist, media_id: int) -> Media:
        for media in playlist.media:
            if media.id == media_id:
                return media
        raise GenericError(404, "media not found")

    def _insert_index(self, items: List[Media], after: Optional[int], original: List[Media]) -> int:
        """
        Index in `items` right behind the item `after`
        `after` may be an item that is itself being moved, in which case the
        anchor is the last remaining item in front of it
        """
        if after is None or after == -1:
            return 0
        remaining = {media.id for media in items}
        index = 0
        for media in original:
            if media.id in remaining:
                index += 1
            if media.id == after:
                return index
        raise GenericError(404, f"media with ID {after} not found")

    def _find_or_fetch_global_media(self, db: Session, source_type: str, source_id: str) -> GlobalMedia:
        source_type = source_type.lower()
        global_media = db.query(GlobalMedia).filter(
            GlobalMedia.source_type == source_type,
            GlobalMedia.source_id == source_id
        ).first()
        if global_media:
            return global_media

        data = search_service.fetch_media(source_type, source_id)
        global_media = GlobalMedia(
            source_type=source_type,
            source_id=str(data.get("source_id", source_id)),
            artist=data.get("artist") or "",
            title=data.get("title") or "",
            duration=int(data.get("duration") or 0),
            thumbnail=data.get("thumbnail"),
            nsfw=bool(data.get("nsfw")),
            restricted=list(data.get("restricted") or []),
        )
        db.add(global_media)
        db.flush()
        logger.info(f"Global media added: {source_type}:{source_id}")
        return global_media

    def _build_media(self, db: Session, item: PlaylistItemAdd) -> Media:
        global_media = self._find_or_fetch_global_media(db, item.source_type, item.source_id)
        start = item.start if item.start is not None else 0
        end = item.end if item.end is not None else global_media.duration
        if end < start:
            raise GenericError(400, "end has to be after start")
        return Media(
            global_media=global_media,
            artist=item.artist if item.artist is not None else global_media.artist,
            title=item.title if item.title is not None else global_media.title,
            start=start,
            end=end,
        )

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    def get_playlists(self, db: Session, user_id: int, page: int, limit: int) -> Dict:
        """Get a page of the playlists owned by a user"""
        try:
            query = db.query(Playlist).filter(Playlist.author_id == user_id)
            total = query.with_entities(func.count(Playlist.id)).scalar()
            playlists = query.order_by(Playlist.id).offset(page * limit).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing playlists for user {user_id}: {e}")
            raise PaginateError(e)
        return paginate(page, limit, playlists, total)

    def create_playlist(
        self,
        db: Session,
        user_id: int,
        playlist_data: PlaylistCreate,
        media_array: Optional[List[PlaylistItemAdd]] = None
    ) -> Playlist:
        """Create a new playlist for a user, optionally with initial media"""
        try:
            playlist = Playlist(
                author_id=user_id,
                name=playlist_data.name,
                description=playlist_data.description,
                shared=playlist_data.shared
            )
            for item in media_array or []:
                playlist.media.append(self._build_media(db, item))
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
            logger.info(f"Playlist created: {playlist.id} for user {user_id}")
            return playlist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise

    def get_playlist(self, db: Session, user_id: int, playlist_id: int) -> Playlist:
        """Get a playlist the user owns, or one that has been shared"""
        playlist = self._find_playlist(db, playlist_id)
        self._check_readable(playlist, user_id)
        return playlist

    def delete_playlist(self, db: Session, user_id: int, playlist_id: int) -> PlaylistResponse:
        """Delete a playlist, unless it is the user's active playlist"""
        active = self.get_active_playlist_id(user_id)
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't delete the playlist of another user")
        if active == playlist.id:
            raise GenericError(403, "you can't delete an active playlist")

        deleted = PlaylistResponse.model_validate(playlist)
        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
            return deleted
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise

    def rename_playlist(self, db: Session, user_id: int, playlist_id: int, name: str) -> Playlist:
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't rename the playlist of another user")
        playlist.name = name
        return self._save(db, playlist, "renaming")

    def share_playlist(self, db: Session, user_id: int, playlist_id: int, shared: bool) -> Playlist:
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't share the playlist of another user")
        playlist.shared = shared
        return self._save(db, playlist, "sharing")

    def activate_playlist(self, db: Session, user_id: int, playlist_id: int) -> int:
        """Mark a playlist as the one the booth plays from for this user"""
        playlist = self._find_playlist(db, playlist_id)
        self._check_readable(
            playlist, user_id,
            f"{playlist.author.username} has made {playlist.name} private"
        )
        if not cache.set_value(active_playlist_key(user_id), str(playlist.id)):
            raise GenericError(500, "couldn't activate playlist")
        logger.info(f"Playlist {playlist.id} activated for user {user_id}")
        return playlist.id

    def get_active_playlist_id(self, user_id: int) -> Optional[int]:
        active = cache.get_value(active_playlist_key(user_id))
        return int(active) if active else None

    def _save(self, db: Session, playlist: Playlist, action: str) -> Playlist:
        try:
            db.commit()
            db.refresh(playlist)
            return playlist
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error {action} playlist {playlist.id}: {e}")
            raise

    # ------------------------------------------------------------------
    # Playlist items
    # ------------------------------------------------------------------

    def get_playlist_items(self, db: Session, user_id: int, playlist_id: int, page: int, limit: int) -> Dict:
        playlist = self.get_playlist(db, user_id, playlist_id)
        try:
            query = db.query(Media).filter(Media.playlist_id == playlist.id)
            total = query.with_entities(func.count(Media.id)).scalar()
            items = query.order_by(Media.position).offset(page * limit).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing items of playlist {playlist_id}: {e}")
            raise PaginateError(e)
        return paginate(page, limit, items, total)

    def get_playlist_item(self, db: Session, user_id: int, playlist_id: int, media_id: int) -> Media:
        playlist = self.get_playlist(db, user_id, playlist_id)
        return self._find_item(playlist, media_id)

    def create_playlist_items(
        self,
        db: Session,
        user_id: int,
        playlist_id: int,
        after: Optional[int],
        items: List[PlaylistItemAdd]
    ) -> List[Media]:
        """
        Add media to a playlist behind the item `after`
        Unknown tracks are fetched from their source first
        """
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't edit the playlist of another user")
        index = self._insert_index(playlist.media, after, playlist.media)

        try:
            added = [self._build_media(db, item) for item in items]
            for offset, media in enumerate(added):
                playlist.media.insert(index + offset, media)
            db.commit()
        except GenericError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding media to playlist {playlist_id}: {e}")
            raise GenericError(500, "couldn't save media")

        for media in added:
            db.refresh(media)
        logger.info(f"{len(added)} media added to playlist {playlist_id}")
        return added

    def move_playlist_items(
        self,
        db: Session,
        user_id: int,
        playlist_id: int,
        after: Optional[int],
        items: List[int]
    ) -> Playlist:
        """Move the given items behind `after`, in the order they were given"""
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't edit the playlist of another user")

        original = list(playlist.media)
        by_id = {media.id: media for media in original}
        moving = []
        for media_id in items:
            media = by_id.get(media_id)
            if media is not None and media not in moving:
                moving.append(media)

        remaining = [media for media in original if media not in moving]
        index = self._insert_index(remaining, after, original)
        for position, media in enumerate(remaining[:index] + moving + remaining[index:]):
            media.position = position

        return self._save(db, playlist, "reordering")

    def update_playlist_item(
        self,
        db: Session,
        user_id: int,
        playlist_id: int,
        media_id: int,
        metadata: MediaMetadata
    ) -> Media:
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't edit the playlist of another user")
        media = self._find_item(playlist, media_id)

        media.artist = metadata.artist
        media.title = metadata.title
        media.start = metadata.start
        media.end = metadata.end
        try:
            db.commit()
            db.refresh(media)
            return media
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating media {media_id}: {e}")
            raise

    def delete_playlist_items(self, db: Session, user_id: int, playlist_id: int, items: List[int]) -> Playlist:
        """Remove items from a playlist; ids that aren't in it are ignored"""
        playlist = self._find_playlist(db, playlist_id)
        self._check_owner(playlist, user_id, "you can't edit the playlist of another user")

        ids = set(items)
        for media in [media for media in playlist.media if media.id in ids]:
            playlist.media.remove(media)
        return self._save(db, playlist, "removing media from")

    def copy_playlist_item(
        self,
        db: Session,
        user_id: int,
        playlist_id: int,
        media_id: int,
        to_playlist_id: int
    ) -> Playlist:
        """Append a copy of an item to another playlist owned by the user"""
        media = self.get_playlist_item(db, user_id, playlist_id, media_id)
        target = self._find_playlist(db, to_playlist_id)
        self._check_owner(target, user_id, "you can't edit the playlist of another user")

        target.media.append(Media(
            global_media_id=media.global_media_id,
            artist=media.artist,
            title=media.title,
            start=media.start,
            end=media.end,
        ))
        return self._save(db, target, "copying media to")

# Create singleton instance
playlist_service = PlaylistService()
