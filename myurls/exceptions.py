class MyURLsError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:myurls_error'


class InvalidInputError(MyURLsError):
    """Base exception for rejected shortening requests."""

    error_code = 'input:invalid_input_error'


class EmptyLongURLError(InvalidInputError):
    """Raised when the long URL to shorten is empty."""

    error_code = 'input:empty_long_url_error'


class InvalidLengthError(InvalidInputError):
    """Raised when the requested shortcode length is outside the configured bounds."""

    error_code = 'input:invalid_length_error'


class InvalidTTLError(InvalidInputError):
    """Raised when the requested TTL is not a positive number of seconds."""

    error_code = 'input:invalid_ttl_error'


class MalformedShortcodeError(InvalidInputError):
    """Raised when an explicit shortcode contains characters outside the alphabet or is too long."""

    error_code = 'input:malformed_shortcode_error'


class KeyConflictError(MyURLsError):
    """Raised when an explicit shortcode is already bound to a different long URL."""

    error_code = 'link:key_conflict_error'


class ShortcodeExhaustedError(MyURLsError):
    """Raised in strict mode when every generated candidate shortcode was taken."""

    error_code = 'link:shortcode_exhausted_error'


class ConfigurationError(MyURLsError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
