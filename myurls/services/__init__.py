from myurls.services.short_link_service import ShortLinkService
from myurls.services.factory import build_short_link_service


__all__ = [
    'ShortLinkService',
    'build_short_link_service',
]
