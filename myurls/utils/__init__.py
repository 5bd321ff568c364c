from myurls.utils.config import app_env, app_name, app_prefix, load_config
from myurls.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from myurls.utils.shortener import generate_shortcode, fingerprint, is_valid_shortcode
from myurls.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'fingerprint',
    'is_valid_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
