"""
Read-through cache for menu reads. Redis holds the last good JSON of each list; a read that
fails at the database falls back to it. All Redis errors are handled internally and never
raised to the caller. The change request workflow never reads from here.
Keys: tablemaster:menu_items, tablemaster:prefixed_menus.
"""
import json
import logging
from typing import Any, Callable

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from tablemaster.config import get_settings
from tablemaster.core.redis import get_redis_client

logger = logging.getLogger(__name__)

MENU_ITEMS_KEY = "tablemaster:menu_items"
PREFIXED_MENUS_KEY = "tablemaster:prefixed_menus"


class MenuCache:
    """read(key) / write(key, value) over Redis. Both are no-ops without a client."""

    def __init__(self, redis_client: Any, ttl_seconds: int | None = None):
        self._redis = redis_client
        self._ttl = ttl_seconds or get_settings().menu_cache_ttl_seconds

    def read(self, key: str) -> Any | None:
        if not self._redis:
            return None
        try:
            raw = self._redis.get(key)
            if raw is None:
                return None
            return json.loads(raw.decode() if isinstance(raw, bytes) else raw)
        except Exception as e:
            logger.warning("Menu cache read failed for %s: %s", key, e, exc_info=False)
            return None

    def write(self, key: str, value: Any) -> None:
        if not self._redis:
            return
        try:
            self._redis.set(key, json.dumps(jsonable_encoder(value)), ex=self._ttl)
        except Exception as e:
            logger.warning("Menu cache write failed for %s: %s", key, e, exc_info=False)


def get_menu_cache() -> MenuCache:
    """FastAPI dependency."""
    return MenuCache(get_redis_client())


def read_through(cache: MenuCache, key: str, load: Callable[[], list]) -> list:
    """
    load() from the database and cache the result; if the database read fails, serve the
    cached copy. With nothing cached, the database error propagates.
    """
    try:
        rows = load()
    except SQLAlchemyError as e:
        logger.error("Menu read failed (%s): %s", key, e)
        cached = cache.read(key)
        if cached is not None:
            logger.warning("Using cached %s due to fetch error", key)
            return cached
        raise
    cache.write(key, rows)
    return rows
