from concurrent.futures import Executor
from unittest.mock import MagicMock

import pytest

from myurls.exceptions import BadConfigurationError
from myurls.models import ShortenerSettings
from myurls.services import ShortLinkService, factory


@pytest.fixture
def store_cls(monkeypatch):
    mock_store = MagicMock()
    mock_store.keys = None
    cls = MagicMock(return_value=mock_store)
    monkeypatch.setattr(factory, 'StoreRedisDAO', cls)
    return cls


def test_build_short_link_service(store_cls):
    app_config = {
        'redis': {'host': 'redis.test', 'port': 6379, 'db': 0, 'socket_timeout': 5.0},
        'shortener': {'default_length': 8, 'ttl_days': 30, 'strict_collisions': True},
    }

    service = factory.build_short_link_service(app_config, prefix='testapp:test')

    assert isinstance(service, ShortLinkService)
    assert service.store is store_cls.return_value
    assert service.settings == ShortenerSettings(default_length=8, ttl_days=30, strict_collisions=True)
    assert service.executor is None
    store_cls.assert_called_once_with(
        redis_host='redis.test',
        redis_port=6379,
        redis_db=0,
        redis_socket_timeout=5.0,
        prefix='testapp:test',
    )


def test_build_short_link_service_without_shortener_section(store_cls):
    service = factory.build_short_link_service({'redis': {'host': 'redis.test'}})

    assert service.settings == ShortenerSettings()
    store_cls.assert_called_once_with(redis_host='redis.test', prefix=None)


def test_build_short_link_service_with_bad_settings(store_cls):
    with pytest.raises(BadConfigurationError):
        factory.build_short_link_service({'redis': {}, 'shortener': {'min_length': 10, 'max_length': 5}})

    store_cls.assert_not_called()


def test_build_short_link_service_with_executor(store_cls):
    executor = MagicMock(spec=Executor)
    service = factory.build_short_link_service({'redis': {'host': 'redis.test'}}, executor=executor)

    store_cls.return_value.get.return_value = 'https://example.com'
    store_cls.return_value.setnx.return_value = True

    assert service.executor is executor
    assert service.resolve('abc123') == 'https://example.com'
    executor.submit.assert_called_once_with(service._renew_quietly, 'abc123')
    store_cls.return_value.setnx.assert_not_called()
