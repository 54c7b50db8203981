from .metadata import coerce_bool, coerce_date, coerce_str, coerce_str_list, extract_metadata
from .models import ROOT_SECTION, ContentUnit, PageMetadata

__all__ = [
    "ROOT_SECTION",
    "ContentUnit",
    "PageMetadata",
    "coerce_bool",
    "coerce_date",
    "coerce_str",
    "coerce_str_list",
    "extract_metadata",
]
