"""Redis cache for ingested job text"""

import os
import logging
import hashlib
from typing import Optional
from datetime import datetime
import redis


KEY_PREFIX = "draft:platform:"
DEFAULT_TTL_SECONDS = 24 * 60 * 60


def text_fingerprint(text: str) -> str:
    """
    SHA256 of the normalized text

    Whitespace and case differences don't make a new posting.
    """
    normalized = " ".join(text.lower().split())
    return hashlib.sha256(normalized.encode('utf-8')).hexdigest()


class DraftCache:
    """
    Remembers which posting texts were already turned into drafts

    The same posting is often shared or pasted more than once. Each platform
    gets one Redis hash mapping text fingerprints to the time they were seen:

        draft:platform:instacart -> {"a1b2c3...": "2026-10-19T10:30:00", ...}

    The hash expires default_ttl seconds after its last write, so a posting
    becomes new again after a quiet day on that platform.

    Lookups never raise: when Redis errors, a text counts as not cached and
    gets parsed again (the drafts CSV still dedupes on the fingerprint).
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        db: Optional[int] = None,
        default_ttl: int = DEFAULT_TTL_SECONDS
    ):
        """
        Connect and ping Redis

        Args:
            host: Redis host (env REDIS_HOST, else 'localhost')
            port: Redis port (env REDIS_PORT, else 6379)
            db: Redis database (env REDIS_DB, else 0)
            default_ttl: Expiry of a platform hash in seconds

        Raises:
            redis.ConnectionError: If Redis is not reachable
        """
        self.logger = logging.getLogger("gigroute.utils.redis")
        self.default_ttl = default_ttl

        self.client = redis.Redis(
            host=host or os.getenv('REDIS_HOST', 'localhost'),
            port=int(port if port is not None else os.getenv('REDIS_PORT', 6379)),
            db=int(db if db is not None else os.getenv('REDIS_DB', 0)),
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )

        try:
            self.client.ping()
        except redis.ConnectionError as e:
            self.logger.error(f"Redis is not reachable: {e}")
            raise

        self.logger.info("Connected to Redis draft cache")

    @staticmethod
    def platform_key(platform: Optional[str]) -> str:
        normalized = (platform or "manual").strip().lower().replace(' ', '_')
        return f"{KEY_PREFIX}{normalized}"

    def is_cached(self, platform: str, text: str) -> bool:
        """True if this text was already ingested for the platform"""
        try:
            return bool(self.client.hexists(self.platform_key(platform), text_fingerprint(text)))
        except redis.RedisError as e:
            self.logger.error(f"Draft cache lookup failed for {platform}: {e}")
            return False

    def cache_text(self, platform: str, text: str, ttl: Optional[int] = None) -> bool:
        """
        Record the text as ingested and refresh the platform hash expiry

        Returns:
            True if the write succeeded
        """
        key = self.platform_key(platform)
        try:
            with self.client.pipeline() as pipe:
                pipe.hset(key, text_fingerprint(text), datetime.now().isoformat())
                pipe.expire(key, ttl or self.default_ttl)
                pipe.execute()
            return True
        except redis.RedisError as e:
            self.logger.error(f"Draft cache write failed for {platform}: {e}")
            return False

    def check_and_cache(self, platform: str, text: str, ttl: Optional[int] = None) -> bool:
        """
        Record the text unless it is already cached

        Returns:
            True if the text was a duplicate
        """
        if self.is_cached(platform, text):
            return True
        self.cache_text(platform, text, ttl)
        return False

    def close(self) -> None:
        try:
            self.client.close()
        except redis.RedisError as e:
            self.logger.error(f"Error closing Redis connection: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
