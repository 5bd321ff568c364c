"""Shared fixtures: an in-memory key-value store honoring the store adapter contract."""

import pytest

from myurls.dao.base import KeyValueStoreBaseDAO
from myurls.dao.base.store_base_dao import TTL_NO_EXPIRY, TTL_MISSING
from myurls.dao.redis import RedisKeySchema


class InMemoryStore(KeyValueStoreBaseDAO):
    """Dict-backed store. Time never passes; tests call force_expire() instead."""

    def __init__(self, prefix: str | None = None):
        self.keys = RedisKeySchema(prefix=prefix)
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key, **kwargs):
        return self.values.get(key)

    def set(self, key, value, **kwargs):
        self.values[key] = value
        self.ttls.pop(key, None)
        return True

    def mset(self, mapping, **kwargs):
        for key, value in mapping.items():
            self.set(key, value)
        return True

    def expire(self, key, seconds, **kwargs):
        if key not in self.values:
            return False
        self.ttls[key] = seconds
        return True

    def ttl(self, key, **kwargs):
        if key not in self.values:
            return TTL_MISSING
        return self.ttls.get(key, TTL_NO_EXPIRY)

    def setnx(self, key, value, **kwargs):
        if key in self.values:
            return False
        self.values[key] = value
        return True

    def force_expire(self, key):
        self.values.pop(key, None)
        self.ttls.pop(key, None)


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def store(app_prefix) -> InMemoryStore:
    return InMemoryStore(prefix=app_prefix)
