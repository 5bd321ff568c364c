"""Abstract base class for key-value store data access objects (DAOs).

This class establishes the command surface the short link lifecycle engine
relies on, regardless of the underlying storage mechanism (e.g., Redis, Valkey,
an in-memory fake for tests).

Responsibilities:
    - Provide single-key string commands with per-key expiration.
    - Provide an atomic "set if absent" primitive for time-windowed locks.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from myurls.dao.redis import StoreRedisDAO

        >>> store = StoreRedisDAO(...)
        >>> store.set('links:abc123:url', 'https://example.com/blog/article-123')
        True
        >>> store.expire('links:abc123:url', 3600)
        True
        >>> store.ttl('links:abc123:url')
        3600
        >>> store.setnx('links:abc123:renewal_lock', '1')
        True
        >>> store.setnx('links:abc123:renewal_lock', '1')
        False

NOTE:
    Every command is individually atomic. Implementations must NOT compose
    commands into transactions: MSET is the only multi-key command and it gives
    no cross-key guarantee beyond what the backend itself offers.
"""

from abc import ABC, abstractmethod


# Values returned by ttl() for keys without expiration / missing keys
TTL_NO_EXPIRY = -1
TTL_MISSING = -2


class KeyValueStoreBaseDAO(ABC):
    """Interface for key-value store data access objects (DAOs).

    Methods:
        get(key: str) -> str | None:
            Return the value stored at key, None if missing.

        set(key: str, value: str) -> bool:
            Store value at key without expiration.

        mset(mapping: dict[str, str]) -> bool:
            Store several key/value pairs at once (not transactional).

        expire(key: str, seconds: int) -> bool:
            Set key's TTL. Returns False if key is missing.

        ttl(key: str) -> int:
            Remaining TTL in seconds, TTL_NO_EXPIRY (-1) or TTL_MISSING (-2).

        setnx(key: str, value: str) -> bool:
            Store value only if key is absent. True if newly set.

    All methods raise DataStoreError on connection, timeout or command failure.

    Subclassing:
        Datastore-specific implementations (e.g., StoreRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def get(self, key: str, **kwargs) -> str | None:
        """Retrieve the string value stored at key.

        Args:
            key (str):
                Fully qualified key name.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The stored value, None if the key doesn't exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str, **kwargs) -> bool:
        """Store value at key, overwriting any previous value and TTL.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def mset(self, mapping: dict[str, str], **kwargs) -> bool:
        """Store multiple key/value pairs with a single command.

        NOTE: partial application is possible on an underlying failure.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def expire(self, key: str, seconds: int, **kwargs) -> bool:
        """Set a key's time to live in seconds.

        Returns:
            bool: True if the TTL was set, False if the key doesn't exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def ttl(self, key: str, **kwargs) -> int:
        """Return the remaining time to live of a key.

        Returns:
            int:
                Seconds left, TTL_NO_EXPIRY (-1) if the key has no expiration,
                TTL_MISSING (-2) if the key doesn't exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def setnx(self, key: str, value: str, **kwargs) -> bool:
        """Store value at key only if key doesn't exist yet.

        Returns:
            bool: True if the key was newly set, False if it was already present.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
