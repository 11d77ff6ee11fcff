# ============================================================================
# FILE: app/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any
from app.config import settings
import logging

logger = logging.getLogger(__name__)

GENRES_KEY = "genres:all"
SONG_SEARCH_PREFIX = "songs:search:"

class RedisCache:
    """
    JSON cache on top of Redis
    Every operation degrades to a miss when Redis is unavailable
    """

    def __init__(self, url: str):
        try:
            self.redis_client = redis.from_url(url, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self.redis_client = None

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for key, or None on miss"""
        if not self.enabled:
            return None

        try:
            value = self.redis_client.get(key)
            return json.loads(value) if value else None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, expire: Optional[int] = None) -> bool:
        """Store a JSON-serializable value, optionally with a TTL in seconds"""
        if not self.enabled:
            return False

        try:
            serialized = json.dumps(value, default=str)
            if expire:
                self.redis_client.setex(key, expire, serialized)
            else:
                self.redis_client.set(key, serialized)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        if not self.enabled:
            return False

        try:
            self.redis_client.delete(key)
            return True
        except redis.RedisError as e:
            logger.error(f"Cache delete error for {key}: {e}")
            return False

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every key starting with prefix, returns how many were removed"""
        if not self.enabled:
            return 0

        removed = 0
        try:
            for key in self.redis_client.scan_iter(match=f"{prefix}*"):
                removed += self.redis_client.delete(key)
        except redis.RedisError as e:
            logger.error(f"Cache invalidation error for {prefix}: {e}")
        return removed

# Singleton instance
cache = RedisCache(settings.REDIS_URL)
