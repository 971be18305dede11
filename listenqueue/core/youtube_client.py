# ============================================================================
# FILE: listenqueue/core/youtube_client.py
# YouTube Data API v3 client for media lookups and search
# ============================================================================
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Dict, List, Optional, Tuple
from listenqueue.config import settings
from listenqueue.core.errors import GenericError
import logging
import re

logger = logging.getLogger(__name__)

ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)
TITLE_SEPARATORS = (" - ", " – ", " — ", " -- ", " ~ ")
TITLE_NOISE = re.compile(
    r"\s*[\(\[](?:official\s*)?(?:music\s*)?(?:video|audio|lyrics?|lyric video|hd|hq)[\)\]]\s*",
    re.IGNORECASE,
)


def parse_iso_duration(duration: Optional[str]) -> int:
    """Convert an ISO 8601 duration (PT4M13S) to seconds"""
    if not duration:
        return 0
    match = ISO_DURATION.match(duration)
    if not match:
        return 0
    parts = {k: int(v) if v else 0 for k, v in match.groupdict().items()}
    return parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]


def split_artist_title(video_title: str) -> Optional[Tuple[str, str]]:
    """Guess (artist, title) from "Artist - Title" style video titles"""
    cleaned = TITLE_NOISE.sub(" ", video_title).strip()
    for separator in TITLE_SEPARATORS:
        if separator in cleaned:
            artist, title = cleaned.split(separator, 1)
            if artist.strip() and title.strip():
                return artist.strip(), title.strip()
    return None


def select_thumbnail(thumbnails) -> str:
    if not isinstance(thumbnails, dict):
        return ""
    for size in ("high", "medium", "default"):
        if isinstance(thumbnails.get(size), dict):
            return thumbnails[size].get("url", "")
    return ""


def get_region_restriction(content_details: Dict) -> List[str]:
    restriction = content_details.get("regionRestriction")
    if restriction:
        return restriction.get("blocked") or []
    return []


def convert_youtube_media(item: Dict) -> Dict:
    snippet = item["snippet"]
    content_details = item["contentDetails"]
    artist, title = split_artist_title(snippet.get("title", "")) or (
        snippet.get("channelTitle", ""),
        snippet.get("title", ""),
    )
    return {
        "source_type": "youtube",
        "source_id": item["id"],
        "artist": artist,
        "title": title,
        "duration": parse_iso_duration(content_details.get("duration")),
        "thumbnail": select_thumbnail(snippet.get("thumbnails")),
        "nsfw": isinstance(content_details.get("contentRating"), dict),
        "restricted": get_region_restriction(content_details),
    }


class YouTubeClient:
    """
    YouTube Data API v3 client
    Normalizes videos into the media dicts used by the playlists
    """

    def __init__(self, api_key: str = None):
        """Initialize YouTube API client"""
        self.api_key = api_key if api_key is not None else settings.YOUTUBE_API_KEY
        self.youtube = None

        if self.api_key:
            try:
                self.youtube = build(
                    settings.YOUTUBE_API_SERVICE_NAME,
                    settings.YOUTUBE_API_VERSION,
                    developerKey=self.api_key,
                    cache_discovery=False,
                )
                logger.info("YouTube API client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize YouTube API client: {e}")
        else:
            logger.warning("YouTube API key not configured")

    def _require_client(self):
        if not self.youtube:
            raise GenericError(500, "youtube is not configured")
        return self.youtube

    def get_videos(self, video_ids: List[str]) -> List[Dict]:
        """
        Fetch and convert videos by ID
        Items lacking a snippet or content details are skipped
        """
        if not video_ids:
            return []

        try:
            response = self._require_client().videos().list(
                part="snippet,contentDetails",
                id=",".join(video_ids),
            ).execute()
        except HttpError as e:
            logger.error(f"YouTube API error for videos {video_ids}: {e}")
            raise GenericError(500, "couldn't fetch data from youtube")

        media = []
        for item in response.get("items") or []:
            if not item.get("snippet") or not item.get("contentDetails"):
                continue
            media.append(convert_youtube_media(item))
        return media

    def get_video(self, video_id: str) -> Dict:
        media = self.get_videos([video_id])
        if not media:
            raise GenericError(404, "media not found")
        return media[0]

    def search(self, query: str, max_results: int = None) -> List[Dict]:
        """Search videos and return them converted, in relevance order"""
        try:
            response = self._require_client().search().list(
                q=query,
                part="snippet",
                type="video",
                order="relevance",
                safeSearch="none",
                videoSyndicated="true",
                maxResults=max_results or settings.SEARCH_RESULTS,
            ).execute()
        except HttpError as e:
            logger.error(f"YouTube API search error for {query!r}: {e}")
            raise GenericError(500, "couldn't fetch data from youtube")

        ids = [
            item["id"]["videoId"]
            for item in response.get("items") or []
            if item.get("id", {}).get("videoId")
        ]
        return self.get_videos(ids)


# Singleton instance
youtube_client = YouTubeClient()
