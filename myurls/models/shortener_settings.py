from dataclasses import dataclass, fields
from typing import Any

from myurls.constants import TTL, Shortcode
from myurls.exceptions import BadConfigurationError


# fmt: off
@dataclass(frozen=True)
class ShortenerSettings:
    default_length: int = Shortcode.DEFAULT_LENGTH  # Shortcode length when the caller doesn't pick one
    min_length: int = Shortcode.MIN_LENGTH          # Smallest accepted shortcode length
    max_length: int = Shortcode.MAX_LENGTH          # Largest accepted shortcode length (also bounds explicit shortcodes)
    ttl_days: int = TTL.DEFAULT_LINK // TTL.ONE_DAY  # Default link lifetime in days
    max_attempts: int = Shortcode.MAX_ATTEMPTS      # Candidates tried before proceeding with a possibly taken shortcode
    strict_collisions: bool = False                 # Raise instead of overwriting after max_attempts collisions
    reissue_expired_dedup: bool = False             # Issue a new shortcode when a dedup hit points to an expired link
# fmt: on

    def __post_init__(self):
        if not 1 <= self.min_length <= self.default_length <= self.max_length:
            raise BadConfigurationError(
                'Shortcode lengths must satisfy 1 <= min_length <= default_length <= max_length '
                f'(given values: {self.min_length}, {self.default_length}, {self.max_length}).'
            )
        if self.ttl_days < 1:
            raise BadConfigurationError(f'Link TTL must be at least 1 day (given value: {self.ttl_days}).')
        if self.max_attempts < 1:
            raise BadConfigurationError(f'Max attempts must be at least 1 (given value: {self.max_attempts}).')

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_days * TTL.ONE_DAY

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> 'ShortenerSettings':
        """Build settings from the 'shortener' section of the app config

        Unknown keys are ignored, missing keys fall back to defaults.

        Example:
            >>> ShortenerSettings.from_config({'ttl_days': 30}).ttl_seconds
            2592000
        """
        known = {f.name for f in fields(cls)}
        try:
            return cls(**{k: v for k, v in (config or {}).items() if k in known})
        except TypeError as e:
            raise BadConfigurationError(f'Invalid shortener configuration: {e}') from e
