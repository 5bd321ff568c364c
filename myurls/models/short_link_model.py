from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a short link mapping as produced by the lifecycle engine.

    Attributes:
        target (str):
            The original long URL that the shortcode redirects to.
        shortcode (str):
            The short identifier representing the long URL.
        ttl (Optional[int]):
            TTL in seconds assigned to the link record. None for explicitly
            keyed links, which never expire.
        reused (bool):
            True if an existing link was handed back (dedup hit or idempotent
            explicit shortcode write) instead of a new one being generated.

    Example:
        >>> link = ShortLinkModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aZ3k9Q",
        ...     ttl=15552000,
        ... )
        >>> link.shortcode
        'aZ3k9Q'
        >>> link.reused
        False
    """

    target: str
    shortcode: str
    ttl: Optional[int] = None
    reused: bool = False
