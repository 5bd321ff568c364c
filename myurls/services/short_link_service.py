"""Short link lifecycle engine

This module orchestrates shortcode generation, deduplication of repeated long
URLs, storage with independent expirations, and rate-limited renewal on access.
All coordination is delegated to the key-value store's per-command atomicity;
the engine holds no locks of its own and is safe to share between threads.

Records (see RedisKeySchema):
    links:<shortcode>:url                -> long URL        (TTL: link TTL, none for explicit shortcodes)
    fingerprints:<fingerprint>           -> shortcode       (TTL: 1 day)
    links:<shortcode>:renewal_lock       -> '1'             (TTL: 1 renewal window)

Classes:
    ShortLinkService:
        create() / resolve() / renew() over an injected KeyValueStoreBaseDAO.

Example:
    >>> from myurls.dao.redis import StoreRedisDAO
    >>> from myurls.services import ShortLinkService

    >>> store = StoreRedisDAO(prefix='myurls:dev')
    >>> service = ShortLinkService(store)
    >>> link = service.create('https://example.com/page')
    >>> link.shortcode
    'aZ3k9Q'
    >>> service.resolve('aZ3k9Q')
    'https://example.com/page'

NOTE:
    The create path (dedup lookup -> generate -> write) spans several independent
    store commands and is not atomic. Two concurrent requests for the same new long
    URL may both miss the dedup index and persist two distinct shortcodes. This is
    accepted: both shortcodes resolve correctly and the later MSET wins the index.
"""

import logging
from concurrent.futures import Executor
from typing import Optional

from myurls.constants import TTL, Renewal
from myurls.dao.base import KeyValueStoreBaseDAO
from myurls.dao.base.store_base_dao import TTL_NO_EXPIRY, TTL_MISSING
from myurls.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from myurls.dao.redis.redis_key_schema import RedisKeySchema
from myurls.exceptions import (
    EmptyLongURLError,
    InvalidLengthError,
    InvalidTTLError,
    KeyConflictError,
    MalformedShortcodeError,
    ShortcodeExhaustedError,
)
from myurls.models import ShortLinkModel, ShortenerSettings
from myurls.utils.shortener import generate_shortcode, fingerprint, is_valid_shortcode


logger = logging.getLogger(__name__)


class ShortLinkService:
    """Short link lifecycle engine

    Attributes:
        store (KeyValueStoreBaseDAO):
            Long-lived store adapter shared by all requests.
        keys (RedisKeySchema):
            Key naming. Defaults to the store's own schema (if it has one).
        settings (ShortenerSettings):
            Length bounds, default TTL and collision policy.
        executor (Optional[Executor]):
            If given, renewals run there and resolve() never waits on them.
            Otherwise renewals run inline but never fail resolve().
        renewal_window (int):
            Renewal window in seconds. One renewal per window per shortcode.
    """

    def __init__(
        self,
        store: KeyValueStoreBaseDAO,
        settings: Optional[ShortenerSettings] = None,
        keys: Optional[RedisKeySchema] = None,
        executor: Optional[Executor] = None,
    ):
        self.store = store
        self.keys = keys or getattr(store, 'keys', None) or RedisKeySchema()
        self.settings = settings or ShortenerSettings()
        self.executor = executor
        self.renewal_window = Renewal.WINDOW_DAYS * TTL.ONE_DAY

    # -------------------------------
    # Create path
    # -------------------------------

    def create(
        self,
        long_url: str,
        ttl: Optional[int] = None,
        length: Optional[int] = None,
        shortcode: Optional[str] = None,
    ) -> ShortLinkModel:
        """Shorten a long URL

        With an explicit shortcode the mapping is written as-is: no TTL and no
        dedup index entry. Otherwise a recently issued shortcode for the same
        long URL is reused (and its TTL refreshed), or a new one is generated.

        Args:
            long_url (str):
                URL to shorten. Not validated beyond being non-empty.
            ttl (Optional[int]):
                Link TTL in seconds. Defaults to settings.ttl_seconds.
            length (Optional[int]):
                Generated shortcode length. Defaults to settings.default_length.
            shortcode (Optional[str]):
                Explicit shortcode requested by the caller. Empty means generate.

        Returns:
            ShortLinkModel: the shortcode now mapped to long_url.

        Raises:
            EmptyLongURLError: long_url is empty.
            InvalidLengthError: length is outside [min_length, max_length].
            InvalidTTLError: ttl is not a positive integer.
            MalformedShortcodeError: explicit shortcode is not 1..max_length Base62 characters.
            KeyConflictError: explicit shortcode already maps to a different long URL.
            ShortcodeExhaustedError: strict mode only, every candidate was taken.
            DataStoreError: any store failure. Partial writes are not repaired.
        """
        if not long_url:
            raise EmptyLongURLError('Long URL must be a non-empty string.')

        length = self.settings.default_length if length is None else length
        if isinstance(length, bool) or not isinstance(length, int) or not self.settings.min_length <= length <= self.settings.max_length:
            raise InvalidLengthError(
                f'Shortcode length must be between {self.settings.min_length} and {self.settings.max_length} (given value: {length}).'
            )

        ttl = self.settings.ttl_seconds if ttl is None else ttl
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
            raise InvalidTTLError(f'TTL must be a positive number of seconds (given value: {ttl}).')

        if shortcode:
            return self._create_explicit(long_url, shortcode)

        return self._create_generated(long_url, ttl, length)

    def _create_explicit(self, long_url: str, shortcode: str) -> ShortLinkModel:
        if not is_valid_shortcode(shortcode, self.settings.max_length):
            raise MalformedShortcodeError(
                f"Shortcode '{shortcode}' must be 1-{self.settings.max_length} characters of [0-9a-zA-Z]."
            )

        link_url_key = self.keys.link_url_key(shortcode)
        existing = self.store.get(link_url_key)
        if existing and existing != long_url:
            raise KeyConflictError(f"Shortcode '{shortcode}' is already taken.")

        # NOTE: explicit shortcodes never expire and never enter the dedup index.
        #       SET also clears any TTL a generated link under the same shortcode had.
        self.store.set(link_url_key, long_url)
        logger.info(
            'Stored link under explicit shortcode.',
            extra={'shortcode': shortcode, 'reused': bool(existing)},
        )
        return ShortLinkModel(target=long_url, shortcode=shortcode, ttl=None, reused=bool(existing))

    def _create_generated(self, long_url: str, ttl: int, length: int) -> ShortLinkModel:
        fingerprint_key = self.keys.fingerprint_key(fingerprint(long_url))

        # 1- Dedup index hit: extend the existing link instead of issuing a new one
        existing_shortcode = self.store.get(fingerprint_key)
        if existing_shortcode:
            # EXPIRE fails on a missing key: the link died before its index entry
            # (link TTL shorter than a day). The indexed shortcode is still returned
            # unless reissue_expired_dedup is set.
            link_alive = self.store.expire(self.keys.link_url_key(existing_shortcode), ttl)
            if link_alive or not self.settings.reissue_expired_dedup:
                self.store.expire(fingerprint_key, TTL.ONE_DAY)
                logger.info(
                    'Dedup index hit, reusing shortcode.',
                    extra={'shortcode': existing_shortcode, 'linkAlive': link_alive},
                )
                return ShortLinkModel(target=long_url, shortcode=existing_shortcode, ttl=ttl, reused=True)
            logger.debug('Dedup index entry points to an expired link.', extra={'shortcode': existing_shortcode})

        # 2- Find a free shortcode
        shortcode = self._find_free_shortcode(length)

        # 3- Store link and dedup index entry with independent TTLs
        # NOTE: MSET + 2x EXPIRE are separate commands. A failure in between
        #       leaves keys without TTL; nothing here repairs that.
        link_url_key = self.keys.link_url_key(shortcode)
        self.store.mset({link_url_key: long_url, fingerprint_key: shortcode})
        self.store.expire(link_url_key, ttl)
        self.store.expire(fingerprint_key, TTL.ONE_DAY)

        logger.info('Created short link.', extra={'shortcode': shortcode, 'ttl': ttl})
        return ShortLinkModel(target=long_url, shortcode=shortcode, ttl=ttl, reused=False)

    def _find_free_shortcode(self, length: int) -> str:
        """Return the first generated candidate with no link stored under it

        After max_attempts collisions the last candidate is returned anyway and
        the existing link gets overwritten, unless strict_collisions is set.
        """
        for attempt in range(1, self.settings.max_attempts + 1):
            shortcode = generate_shortcode(length)
            if not self.store.get(self.keys.link_url_key(shortcode)):
                return shortcode
            logger.debug('Shortcode collision.', extra={'shortcode': shortcode, 'attempt': attempt})

        if self.settings.strict_collisions:
            raise ShortcodeExhaustedError(
                f'No free shortcode of length {length} found after {self.settings.max_attempts} attempts.'
            )

        logger.warning(
            'Shortcode collisions exhausted all attempts, overwriting existing link.',
            extra={'shortcode': shortcode, 'attempts': self.settings.max_attempts},
        )
        return shortcode

    # -------------------------------
    # Resolve path
    # -------------------------------

    def resolve(self, shortcode: str) -> str:
        """Return the long URL behind a shortcode and renew the link

        Raises:
            ShortLinkNotFoundError:
                If the shortcode was never created or has expired (indistinguishable).
            DataStoreError:
                If the lookup itself fails. Renewal failures are never raised here.
        """
        long_url = self.store.get(self.keys.link_url_key(shortcode)) if shortcode else None
        if not long_url:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")

        if self.executor is not None:
            self.executor.submit(self._renew_quietly, shortcode)
        else:
            self._renew_quietly(shortcode)

        return long_url

    # -------------------------------
    # Renewal
    # -------------------------------

    def renew(self, shortcode: str) -> bool:
        """Extend a link's TTL by one renewal window, at most once per window

        Returns:
            bool: True if the link's TTL was extended.

        Raises:
            DataStoreError: if any store command fails. No retries.
        """
        lock_key = self.keys.renewal_lock_key(shortcode)
        if not self.store.setnx(lock_key, Renewal.LOCK_VALUE):
            return False

        # NOTE: if this EXPIRE fails the lock stays without TTL and blocks all
        #       future renewals of this shortcode. Accepted: the link then simply
        #       expires on its current schedule.
        self.store.expire(lock_key, self.renewal_window)

        link_url_key = self.keys.link_url_key(shortcode)
        remaining = self.store.ttl(link_url_key)
        if remaining in (TTL_NO_EXPIRY, TTL_MISSING):
            return False

        self.store.expire(link_url_key, remaining + self.renewal_window)
        logger.info('Renewed short link.', extra={'shortcode': shortcode, 'ttl': remaining + self.renewal_window})
        return True

    def _renew_quietly(self, shortcode: str) -> bool:
        try:
            return self.renew(shortcode)
        except DataStoreError:
            logger.warning('Failed to renew short link.', exc_info=True, extra={'shortcode': shortcode})
            return False
