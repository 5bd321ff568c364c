"""Unit tests for the StoreRedisDAO

Test coverage includes:

1. Command mapping
   - Ensures every method issues exactly one matching Redis command.
   - Ensures no pipeline / transaction is ever opened.

2. Return value normalization
   - Ensures missing keys map to None and bytes responses are decoded.
   - Ensures EXPIRE/SETNX results are booleans and TTL sentinels pass through.

3. Type checking
   - Ensures invalid argument types raise TypeError or BeartypeCallHintParamViolation.

4. Error translation
   - Ensures connection errors and timeouts raise DataStoreError naming the target.
   - Ensures other Redis command failures raise DataStoreError.
"""

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from myurls.dao.exceptions import DataStoreError
from myurls.dao.redis import StoreRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    return StoreRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Command mapping
# -------------------------------


def test_get(dao, redis_client):
    redis_client.get.return_value = 'https://example.com/test'

    assert dao.get('testapp:test:links:abc123:url') == 'https://example.com/test'
    redis_client.get.assert_called_once_with('testapp:test:links:abc123:url')


def test_set(dao, redis_client):
    redis_client.set.return_value = True

    assert dao.set('testapp:test:links:abc123:url', 'https://example.com/test') is True
    redis_client.set.assert_called_once_with('testapp:test:links:abc123:url', 'https://example.com/test')


def test_mset(dao, redis_client):
    redis_client.mset.return_value = True
    mapping = {
        'testapp:test:links:abc123:url': 'https://example.com/test',
        'testapp:test:fingerprints:0123abcd': 'abc123',
    }

    assert dao.mset(mapping) is True
    redis_client.mset.assert_called_once_with(mapping)
    redis_client.pipeline.assert_not_called()


def test_expire(dao, redis_client):
    redis_client.expire.return_value = True

    assert dao.expire('testapp:test:links:abc123:url', 3600) is True
    redis_client.expire.assert_called_once_with('testapp:test:links:abc123:url', 3600)


def test_ttl(dao, redis_client):
    redis_client.ttl.return_value = 3600

    assert dao.ttl('testapp:test:links:abc123:url') == 3600
    redis_client.ttl.assert_called_once_with('testapp:test:links:abc123:url')


def test_setnx(dao, redis_client):
    redis_client.setnx.return_value = True

    assert dao.setnx('testapp:test:links:abc123:renewal_lock', '1') is True
    redis_client.setnx.assert_called_once_with('testapp:test:links:abc123:renewal_lock', '1')


# -------------------------------
# 2. Return value normalization
# -------------------------------


def test_get_missing_key(dao, redis_client):
    redis_client.get.return_value = None
    assert dao.get('testapp:test:links:missing:url') is None


def test_get_decodes_bytes(dao, redis_client):
    redis_client.get.return_value = b'https://example.com/test'
    assert dao.get('testapp:test:links:abc123:url') == 'https://example.com/test'


def test_expire_missing_key(dao, redis_client):
    redis_client.expire.return_value = 0
    assert dao.expire('testapp:test:links:missing:url', 3600) is False


def test_setnx_existing_key(dao, redis_client):
    redis_client.setnx.return_value = 0
    assert dao.setnx('testapp:test:links:abc123:renewal_lock', '1') is False


@pytest.mark.parametrize('redis_ttl', [-1, -2])
def test_ttl_sentinels(dao, redis_client, redis_ttl):
    redis_client.ttl.return_value = redis_ttl
    assert dao.ttl('testapp:test:links:abc123:url') == redis_ttl


# -------------------------------
# 3. Type checking
# -------------------------------


@pytest.mark.parametrize(
    'method, args',
    [
        ('get', (12345,)),
        ('set', ('key', 12345)),
        ('mset', (['key', 'value'],)),
        ('expire', ('key', '3600')),
        ('ttl', (None,)),
        ('setnx', ('key', None)),
    ],
)
def test_invalid_argument_types(dao, method, args):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        getattr(dao, method)(*args)


# -------------------------------
# 4. Error translation
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection error'),
        redis.exceptions.TimeoutError('Timeout reading from socket'),
    ],
)
def test_connection_errors_raise_data_store_error(dao, redis_client, error):
    redis_client.get.side_effect = error

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.get('testapp:test:links:abc123:url')


def test_command_errors_raise_data_store_error(dao, redis_client):
    redis_client.expire.side_effect = redis.exceptions.ResponseError('WRONGTYPE Operation against a key')

    with pytest.raises(DataStoreError, match='Redis command failed: WRONGTYPE'):
        dao.expire('testapp:test:links:abc123:url', 3600)
