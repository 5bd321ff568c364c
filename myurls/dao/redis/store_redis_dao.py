"""Data Access Object (DAO) implementation of the key-value store contract in Redis

This module provides a Redis-based implementation of KeyValueStoreBaseDAO. Each
method issues exactly one Redis command; nothing is pipelined or wrapped in
MULTI/EXEC, so callers get per-command atomicity and nothing more.

Responsibilities:
    - Read and write string values (GET, SET, MSET);
    - Manage per-key expiration (EXPIRE, TTL);
    - Provide the test-and-set primitive used for renewal locks (SETNX);
    - Translate Redis failures into DataStoreError.

Classes:
    StoreRedisDAO:
        DAO exposing single-key Redis string commands.

Example:
    >>> from myurls.dao.redis import StoreRedisDAO

    >>> store = StoreRedisDAO(prefix="myurls:dev")
    >>> key = store.keys.link_url_key("abc123")
    >>> store.set(key, "https://example.com/page")
    True
    >>> store.get(key)
    'https://example.com/page'
    >>> store.ttl(key)
    -1
"""

from beartype import beartype

from myurls.dao.base import KeyValueStoreBaseDAO
from myurls.dao.redis.mixins import RedisClientMixin
from myurls.dao.redis.helpers import handle_redis_errors


def _as_text(value: str | bytes | None) -> str | None:
    # Clients built with decode_responses=False hand back bytes
    return value.decode('utf-8') if isinstance(value, bytes) else value


class StoreRedisDAO(RedisClientMixin, KeyValueStoreBaseDAO):
    """Redis-based Data Access Object (DAO) for single-key string commands

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(key) -> str | None             GET
        set(key, value) -> bool            SET
        mset(mapping) -> bool              MSET
        expire(key, seconds) -> bool       EXPIRE
        ttl(key) -> int                    TTL
        setnx(key, value) -> bool          SETNX

    All methods raise DataStoreError on connectivity or command failures.
    """

    @handle_redis_errors
    @beartype
    def get(self, key: str, **kwargs) -> str | None:
        return _as_text(self.redis.get(key))

    @handle_redis_errors
    @beartype
    def set(self, key: str, value: str, **kwargs) -> bool:
        return bool(self.redis.set(key, value))

    @handle_redis_errors
    @beartype
    def mset(self, mapping: dict[str, str], **kwargs) -> bool:
        """Store multiple key/value pairs via a single MSET

        NOTE: MSET never sets expirations. Callers follow up with expire()
              per key, which leaves a window where the keys have no TTL.
        """
        return bool(self.redis.mset(mapping))

    @handle_redis_errors
    @beartype
    def expire(self, key: str, seconds: int, **kwargs) -> bool:
        return bool(self.redis.expire(key, seconds))

    @handle_redis_errors
    @beartype
    def ttl(self, key: str, **kwargs) -> int:
        return int(self.redis.ttl(key))

    @handle_redis_errors
    @beartype
    def setnx(self, key: str, value: str, **kwargs) -> bool:
        return bool(self.redis.setnx(key, value))
