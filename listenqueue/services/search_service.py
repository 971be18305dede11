# ============================================================================
# FILE: listenqueue/services/search_service.py
# ============================================================================
from typing import Dict, List
from listenqueue.core.cache import cache
from listenqueue.core.errors import GenericError
from listenqueue.core.soundcloud_client import soundcloud_client
from listenqueue.core.youtube_client import youtube_client
from listenqueue.config import settings
import logging

logger = logging.getLogger(__name__)

SOURCES = ("youtube", "soundcloud")

class SearchService:
    """Service layer for media source lookups"""

    def fetch_media(self, source_type: str, source_id: str) -> Dict:
        """
        Look up a single track at its source
        Raises GenericError(404) for unknown sources and missing media
        """
        source = source_type.lower()
        if source == "youtube":
            return youtube_client.get_video(source_id)
        if source == "soundcloud":
            return soundcloud_client.get_track(source_id)
        raise GenericError(404, "unknown provider")

    def search_source(self, source_type: str, query: str) -> List[Dict]:
        """
        Search a single source
        Results are cached in Redis for performance
        """
        source = source_type.lower()
        if source not in SOURCES:
            raise GenericError(404, "unknown provider")

        cache_key = f"search:{source}:{query}"
        cached_results = cache.get_cache(cache_key)
        if cached_results is not None:
            logger.info(f"Cache hit for {source} search: {query}")
            return cached_results

        if source == "youtube":
            results = youtube_client.search(query)
        else:
            results = soundcloud_client.search(query)

        cache.set_cache(cache_key, results, settings.CACHE_EXPIRE_SECONDS)
        return results

    def search(self, query: str) -> Dict[str, List[Dict]]:
        """Search every source"""
        return {source: self.search_source(source, query) for source in SOURCES}

# Create singleton instance
search_service = SearchService()
