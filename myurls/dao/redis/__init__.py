from myurls.dao.redis.redis_key_schema import RedisKeySchema
from myurls.dao.redis.mixins import RedisClientMixin
from myurls.dao.redis.store_redis_dao import StoreRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'StoreRedisDAO',
]
