# ============================================================================
# FILE: listenqueue/core/soundcloud_client.py
# SoundCloud API client for media lookups and search
# ============================================================================
import httpx
from typing import Dict, List, Optional
from listenqueue.config import settings
from listenqueue.core.errors import GenericError
import logging

logger = logging.getLogger(__name__)


def convert_soundcloud_media(track: Dict) -> Dict:
    return {
        "source_type": "soundcloud",
        "source_id": str(track["id"]),
        "artist": (track.get("user") or {}).get("username", ""),
        "title": track.get("title", ""),
        "duration": int(track.get("duration") or 0) // 1000,
        "thumbnail": track.get("artwork_url") or track.get("waveform_url"),
        "nsfw": False,
        "restricted": [],
    }


class SoundCloudClient:
    """Thin wrapper over the public SoundCloud tracks API"""

    def __init__(self, client_id: str = None, base_url: str = None, timeout: float = 10.0):
        self.client_id = client_id if client_id is not None else settings.SOUNDCLOUD_CLIENT_ID
        self.base_url = base_url or settings.SOUNDCLOUD_API_URL
        self.timeout = timeout
        if not self.client_id:
            logger.warning("SoundCloud client ID not configured")

    def _get(self, path: str, params: Optional[Dict] = None):
        query = {"client_id": self.client_id}
        query.update(params or {})
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout) as client:
                response = client.get(path, params=query)
                if response.status_code == 404:
                    raise GenericError(404, "media not found")
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"SoundCloud API error for {path}: {e}")
            raise GenericError(500, "couldn't fetch data from soundcloud")
        except ValueError as e:
            logger.error(f"SoundCloud returned invalid JSON for {path}: {e}")
            raise GenericError(500, "couldn't fetch data from soundcloud")

    def get_track(self, track_id: str) -> Dict:
        track = self._get(f"/tracks/{track_id}")
        if not track:
            raise GenericError(404, "media not found")
        return convert_soundcloud_media(track)

    def search(self, query: str, limit: int = None) -> List[Dict]:
        body = self._get("/tracks", {"q": query, "limit": limit or settings.SEARCH_RESULTS})
        if not isinstance(body, list):
            return []
        return [convert_soundcloud_media(track) for track in body]


# Singleton instance
soundcloud_client = SoundCloudClient()
