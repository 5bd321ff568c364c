"""Build the process-wide ShortLinkService

Lambda containers are reused between invocations, so the Redis client (and
its connection pool) is created once per container and shared by every
request handled there.
"""

import logging
from concurrent.futures import Executor

from myurls.types import LambdaConfiguration
from myurls.dao.redis import StoreRedisDAO
from myurls.models import ShortenerSettings
from myurls.services.short_link_service import ShortLinkService


logger = logging.getLogger(__name__)


def build_short_link_service(
    app_config: LambdaConfiguration,
    prefix: str | None = None,
    executor: Executor | None = None,
) -> ShortLinkService:
    """Create a ShortLinkService from a lambda's app config

    Args:
        app_config (dict):
            Output of load_config(): {'redis': {...}, 'shortener': {...}}.
        prefix (str | None):
            Redis key namespace, usually app_prefix().
        executor (Executor | None):
            Where renewals run. The Lambda handlers leave it unset, so renewal
            runs inline: a frozen container would stall background work.

    Raises:
        BadConfigurationError: invalid 'shortener' section.
        DataStoreError: Redis is unreachable.
    """
    logger.debug('Assuming Redis as the backend database for short links')
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    settings = ShortenerSettings.from_config(app_config.get('shortener'))
    store = StoreRedisDAO(**redis_config, prefix=prefix)
    return ShortLinkService(store, settings=settings, executor=executor)
