from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client which answers PING."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    return client
