# Event / error codes reported by the shorten_url lambda
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
EMPTY_LONG_URL = 'EMPTY_LONG_URL'
INVALID_BASE64 = 'INVALID_BASE64'
INVALID_LENGTH = 'INVALID_LENGTH'
INVALID_TTL = 'INVALID_TTL'
MALFORMED_SHORTCODE = 'MALFORMED_SHORTCODE'
SHORTCODE_CONFLICT = 'SHORTCODE_CONFLICT'
SHORTCODE_EXHAUSTED = 'SHORTCODE_EXHAUSTED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
