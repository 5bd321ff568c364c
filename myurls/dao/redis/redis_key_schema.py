import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for short links, dedup index entries and renewal locks.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "myurls:prod" or "myurls:dev".

    Dedup index entries live under the top-level 'fingerprints:' namespace, apart
    from every 'links:<shortcode>:*' key.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:url'

    @prefix_key
    def fingerprint_key(self, fingerprint: str) -> str:
        return f'fingerprints:{fingerprint}'

    @prefix_key
    def renewal_lock_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:renewal_lock'
