# Event / error codes reported by the redirect_url lambda
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_LINK_NOT_FOUND = 'SHORT_LINK_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
