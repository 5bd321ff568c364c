from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Dedup index entry lifetime and renewal window length (1 day in seconds)
    ONE_DAY = 86_400  # 60 * 60 * 24
    # Default short link TTL duration (180 days in seconds)
    DEFAULT_LINK = 15_552_000  # 60 * 60 * 24 * 180


class Shortcode:
    """Shortcode generation bounds."""

    # Base62 alphabet: digits + lowercase + uppercase
    ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'
    DEFAULT_LENGTH = 6
    MIN_LENGTH = 1
    MAX_LENGTH = 20
    # Candidates tried before giving up on finding a free shortcode
    MAX_ATTEMPTS = 3


class Renewal:
    """Renewal lock settings."""

    WINDOW_DAYS = 1
    LOCK_VALUE = '1'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        SHORT_URL_HTTPS = 'SHORT_URL_HTTPS'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
