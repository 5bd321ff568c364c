"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a short link is missing from the data store (never created or expired).

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from myurls.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    myurls.dao.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link is not found in the data store.

    NOTE: a link which never existed and a link which already expired are
          indistinguishable, since the data store keeps no tombstones.
    """

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
