# ============================================================================
# FILE: listenqueue/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any, List
from listenqueue.config import settings
import logging

logger = logging.getLogger(__name__)

class RedisCache:
    """
    Redis helper class
    Holds JSON cache entries, the raw keys shared with the booth
    (active playlists, mutes, waitlist) and the publish side of the message bus
    """

    def __init__(self, url: str = None):
        try:
            self.redis_client = redis.from_url(url or settings.REDIS_URL, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self.redis_client = None

    def set_cache(self, key: str, value: Any, expire: int = None) -> bool:
        """Set a cache value with optional expiration"""
        if not self.redis_client:
            return False

        try:
            serialized = json.dumps(value)
            if expire:
                self.redis_client.setex(key, expire, serialized)
            else:
                self.redis_client.set(key, serialized)
            return True
        except Exception as e:
            logger.error(f"Cache set error: {e}")
            return False

    def get_cache(self, key: str) -> Optional[Any]:
        """Get a cache value"""
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                return json.loads(value)
            return None
        except Exception as e:
            logger.error(f"Cache get error: {e}")
            return None

    def delete_cache(self, key: str) -> bool:
        """Delete a cache value"""
        if not self.redis_client:
            return False

        try:
            self.redis_client.delete(key)
            return True
        except Exception as e:
            logger.error(f"Cache delete error: {e}")
            return False

    def set_value(self, key: str, value: str, expire_ms: int = None) -> bool:
        """Set a plain string key, optionally expiring after `expire_ms` milliseconds"""
        if not self.redis_client:
            return False

        try:
            if expire_ms:
                self.redis_client.set(key, value, px=expire_ms)
            else:
                self.redis_client.set(key, value)
            return True
        except Exception as e:
            logger.error(f"Redis set error for {key}: {e}")
            return False

    def get_value(self, key: str) -> Optional[str]:
        """Get a plain string key"""
        if not self.redis_client:
            return None

        try:
            return self.redis_client.get(key)
        except Exception as e:
            logger.error(f"Redis get error for {key}: {e}")
            return None

    def list_range(self, key: str) -> List[str]:
        """Return a whole Redis list"""
        if not self.redis_client:
            return []

        try:
            return self.redis_client.lrange(key, 0, -1)
        except Exception as e:
            logger.error(f"Redis lrange error for {key}: {e}")
            return []

    def list_remove(self, key: str, value: str) -> int:
        """Remove every occurrence of `value` from a list, returning how many went"""
        if not self.redis_client:
            return 0

        try:
            return self.redis_client.lrem(key, 0, value)
        except Exception as e:
            logger.error(f"Redis lrem error for {key}: {e}")
            return 0

    def publish(self, channel: str, message: str) -> bool:
        """Publish a message on a channel"""
        if not self.redis_client:
            logger.warning(f"Redis unavailable, dropped message on {channel}")
            return False

        try:
            self.redis_client.publish(channel, message)
            return True
        except Exception as e:
            logger.error(f"Redis publish error on {channel}: {e}")
            return False

# Singleton instance
cache = RedisCache()
