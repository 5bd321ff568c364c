from myurls.models.short_link_model import ShortLinkModel
from myurls.models.shortener_settings import ShortenerSettings


__all__ = [
    'ShortLinkModel',
    'ShortenerSettings',
]
