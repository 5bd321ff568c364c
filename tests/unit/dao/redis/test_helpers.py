"""Unit tests for handle_redis_errors decorator.

This test suite verifies that the decorator properly translates Redis
failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
    2. Connection error and timeout handling
    3. Generic Redis command error handling
    4. Function metadata preservation
"""

import pytest
import redis
from unittest.mock import MagicMock

from myurls.dao.redis.helpers import handle_redis_errors
from myurls.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error=None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }

    @handle_redis_errors
    def ping(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().ping() == 'OK'


# -------------------------------
# 2. Connection error handling
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Cannot connect'),
        redis.exceptions.TimeoutError('Timeout'),
    ],
)
def test_decorator_transforms_connection_errors(error):
    """Ensure Redis ConnectionError/TimeoutError are re-raised as DataStoreError."""
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error=error).ping()

    assert exc_info.value.__cause__ is error


# -------------------------------
# 3. Generic Redis errors
# -------------------------------


def test_decorator_transforms_command_errors():
    """Ensure any other RedisError is re-raised as DataStoreError."""
    error = redis.exceptions.ResponseError('OOM command not allowed')
    with pytest.raises(DataStoreError, match='Redis command failed: OOM command not allowed'):
        DummyDAO(error=error).ping()


def test_decorator_leaves_other_errors_alone():
    """Non-Redis exceptions propagate untouched."""
    with pytest.raises(ValueError):
        DummyDAO(error=ValueError('boom')).ping()


# -------------------------------
# 4. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_errors
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
