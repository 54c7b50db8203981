from .loader import DEFAULT_CONFIG_TEMPLATE, load_site_config
from .models import DEFAULT_PERMALINK, PublishConfig, SiteConfig

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "DEFAULT_PERMALINK",
    "PublishConfig",
    "SiteConfig",
    "load_site_config",
]
