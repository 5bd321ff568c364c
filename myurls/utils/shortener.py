"""Shortcode generation and long URL fingerprinting utilities

Functions:
    generate_shortcode(length=6):
        Generate a random Base62 shortcode of an exact length.
    fingerprint(long_url):
        Compute a 128-bit content hash of a long URL for the dedup index.
    is_valid_shortcode(shortcode, max_length=20):
        Check an explicitly requested shortcode against the alphabet and length bound.

Example:
    >>> from myurls.utils import generate_shortcode, fingerprint
    >>> generate_shortcode(6)
    'q3ZxT0'
    >>> len(fingerprint('https://example.com'))
    32
"""

import secrets

import xxhash

from myurls.constants import Shortcode


ALPHABET = Shortcode.ALPHABET
BASE = len(ALPHABET)  # 10 digits + 26 lowercase + 26 uppercase
_ALPHABET_SET = frozenset(ALPHABET)


def generate_shortcode(length: int = Shortcode.DEFAULT_LENGTH) -> str:
    """Generate a random shortcode of exactly `length` Base62 characters.

    Each character is drawn independently and uniformly from ALPHABET. The
    randomness comes from the OS CSPRNG, so calls made in quick succession
    (or from concurrent threads) are never correlated.

    Args:
        length (int, optional):
            Exact length of the resulting shortcode. Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is smaller than 1.

    NOTE:
        - Uniqueness is NOT guaranteed. Callers check the data store and retry.
        - With length 6 the keyspace holds 62**6 (~5.7e10) shortcodes.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def fingerprint(long_url: str) -> str:
    """Compute the dedup index fingerprint of a long URL

    Uses the 128-bit XXH3 hash, hex-encoded (32 characters).
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    return xxhash.xxh3_128_hexdigest(long_url.encode('utf-8'))


def is_valid_shortcode(shortcode: str, max_length: int = Shortcode.MAX_LENGTH) -> bool:
    """Return True if shortcode is 1..max_length characters of ALPHABET."""
    return isinstance(shortcode, str) and 1 <= len(shortcode) <= max_length and set(shortcode) <= _ALPHABET_SET
