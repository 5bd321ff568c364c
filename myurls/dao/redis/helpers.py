import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from myurls.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors(method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Connection losses and timeouts are reported with the connection target,
    any other Redis command failure (e.g. WRONGTYPE, OOM) with its reason.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_errors
        ... def get_url(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed: {e}') from e

    return wrapper
