# ============================================================================
# FILE: listenqueue/services/booth_service.py
# The parts of the booth and waitlist this service touches: their Redis keys
# and the play history
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from listenqueue.core import events
from listenqueue.core.cache import cache
from listenqueue.core.errors import GenericError
from listenqueue.db.models.history import History
from listenqueue.db.models.media import GlobalMedia
import logging

logger = logging.getLogger(__name__)

CURRENT_DJ_KEY = "booth:currentDJ"
CURRENT_MEDIA_KEY = "booth:media"
WAITLIST_KEY = "waitlist"

class BoothService:
    """Service layer for the booth and waitlist keys"""

    def get_current_dj(self) -> Optional[int]:
        current = cache.get_value(CURRENT_DJ_KEY)
        return int(current) if current else None

    def get_waitlist(self) -> List[int]:
        return [int(user_id) for user_id in cache.list_range(WAITLIST_KEY)]

    def skip_if_current_dj(self, user_id: int) -> bool:
        """Clear the booth when `user_id` is playing, so the next DJ can take over"""
        if self.get_current_dj() != user_id:
            return False

        cache.delete_cache(CURRENT_DJ_KEY)
        cache.delete_cache(CURRENT_MEDIA_KEY)
        events.publish("advance", {"userID": user_id, "skipped": True})
        logger.info(f"Skipped current DJ {user_id}")
        return True

    def leave_waitlist(self, user_id: int) -> List[int]:
        """Remove a user from the waitlist and return the remaining waitlist"""
        if not cache.list_remove(WAITLIST_KEY, str(user_id)):
            raise GenericError(404, "you are not in the waitlist")

        waitlist = self.get_waitlist()
        events.publish("waitlistLeave", {"userID": user_id, "waitlist": waitlist})
        return waitlist

    def record_play(self, db: Session, user_id: int, global_media: GlobalMedia) -> History:
        """Append a finished track to a user's play history"""
        try:
            entry = History(
                user_id=user_id,
                media_id=global_media.id,
                artist=global_media.artist,
                title=global_media.title
            )
            db.add(entry)
            db.commit()
            db.refresh(entry)
            logger.info(f"Playback tracked for user {user_id}: {global_media.id}")
            return entry
        except Exception as e:
            db.rollback()
            logger.error(f"Error tracking playback: {e}")
            raise

# Create singleton instance
booth_service = BoothService()
