# ruff: noqa: S101
from __future__ import annotations

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

from tablemaster.services.menu_cache import MENU_ITEMS_KEY, MenuCache, read_through


class FakeRedis:
    def __init__(self, fail: bool = False):
        self.store: dict[str, str] = {}
        self.ttl: dict[str, int] = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise RedisConnectionError("redis down")
        return self.store.get(key)

    def set(self, key, value, ex=None):
        if self.fail:
            raise RedisConnectionError("redis down")
        self.store[key] = value
        self.ttl[key] = ex


def _db_down():
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_write_then_read() -> None:
    redis = FakeRedis()
    cache = MenuCache(redis, ttl_seconds=30)
    cache.write(MENU_ITEMS_KEY, [{"id": "1", "name": "Oysters"}])
    assert cache.read(MENU_ITEMS_KEY) == [{"id": "1", "name": "Oysters"}]
    assert redis.ttl[MENU_ITEMS_KEY] == 30
    assert cache.read("other") is None


def test_redis_errors_are_swallowed() -> None:
    cache = MenuCache(FakeRedis(fail=True), ttl_seconds=30)
    cache.write(MENU_ITEMS_KEY, [1])
    assert cache.read(MENU_ITEMS_KEY) is None


def test_no_client_is_a_noop() -> None:
    cache = MenuCache(None, ttl_seconds=30)
    cache.write(MENU_ITEMS_KEY, [1])
    assert cache.read(MENU_ITEMS_KEY) is None


def test_read_through_caches_and_falls_back() -> None:
    cache = MenuCache(FakeRedis(), ttl_seconds=30)
    rows = read_through(cache, MENU_ITEMS_KEY, lambda: [{"id": "1"}])
    assert rows == [{"id": "1"}]
    assert read_through(cache, MENU_ITEMS_KEY, _db_down) == [{"id": "1"}]


def test_read_through_without_cached_copy_raises() -> None:
    cache = MenuCache(FakeRedis(), ttl_seconds=30)
    with pytest.raises(OperationalError):
        read_through(cache, MENU_ITEMS_KEY, _db_down)
