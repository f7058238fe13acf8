"""
Optional Redis client for the menu read cache. If redis_url is empty or connection fails, returns None.
No startup sync; the cache is written on every successful menu read.
"""
import logging
from typing import Any

from tablemaster.config import get_settings

logger = logging.getLogger(__name__)

_redis_client: Any = None


def get_redis_client() -> Any:
    """Lazy singleton: one Redis client or None if disabled/unavailable."""
    global _redis_client
    if _redis_client is not None:
        return _redis_client
    url = (get_settings().redis_url or "").strip()
    if not url:
        return None
    try:
        from redis import Redis
        client = Redis.from_url(url, decode_responses=True)
        client.ping()
        _redis_client = client
        logger.info("Redis menu cache connected: %s", url.split("@")[-1] if "@" in url else url)
        return _redis_client
    except Exception as e:
        logger.warning("Redis unavailable (menu cache disabled): %s", e, exc_info=False)
        return None


def close_redis() -> None:
    """Graceful shutdown: close Redis connection."""
    global _redis_client
    if _redis_client is not None:
        try:
            _redis_client.close()
        except Exception as e:
            logger.warning("Redis close error: %s", e)
        _redis_client = None
