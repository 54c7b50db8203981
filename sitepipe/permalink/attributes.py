"""Resolver table mapping permalink :attributes to page values."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from urllib.parse import quote, urlsplit, urlunsplit

from sitepipe.content.models import PageMetadata

Resolver = Callable[[PageMetadata, str], str]

# Characters kept unescaped when re-serializing a path.
_PATH_SAFE = "/!$&'()*+,;=:@~%"
_QUERY_SAFE = "/?!$&'()*+,;=:@~%"

_MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
# indexed by date.weekday(), Monday first
_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def url_escape(raw: str) -> str:
    """Parse `raw` as a URI and re-serialize it with canonical escaping.

    Raises ValueError for malformed percent-escapes or control characters.
    """
    if _BAD_ESCAPE_RE.search(raw):
        raise ValueError(f"invalid URL escape in {raw!r}")
    if _CONTROL_RE.search(raw):
        raise ValueError(f"invalid control character in {raw!r}")
    parts = urlsplit(raw)
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=_PATH_SAFE),
        quote(parts.query, safe=_QUERY_SAFE),
        quote(parts.fragment, safe=_QUERY_SAFE),
    ))


def _date_attribute(meta: PageMetadata, attr: str) -> str:
    d = meta.date
    if attr == "year":
        return str(d.year)
    if attr == "month":
        return f"{d.month:02d}"
    if attr == "monthname":
        return _MONTH_NAMES[d.month]
    if attr == "day":
        return f"{d.day:02d}"
    if attr == "weekday":
        # Sunday is 0
        return str((d.weekday() + 1) % 7)
    if attr == "weekdayname":
        return _WEEKDAY_NAMES[d.weekday()]
    if attr == "yearday":
        return str(d.timetuple().tm_yday)
    raise ValueError(f"not a date attribute: {attr}")


def _section_attribute(meta: PageMetadata, _attr: str) -> str:
    return url_escape(meta.subdir)


def _title_attribute(meta: PageMetadata, _attr: str) -> str:
    return url_escape(meta.title)


def _slug_else_title_attribute(meta: PageMetadata, attr: str) -> str:
    """Slug with one leading/trailing hyphen trimmed, else the title."""
    if not meta.slug:
        return _title_attribute(meta, attr)
    slug = meta.slug
    if slug.startswith("-"):
        slug = slug[1:]
    if slug.endswith("-"):
        slug = slug[:-1]
    return url_escape(slug)


def _filename_attribute(meta: PageMetadata, _attr: str) -> str:
    return url_escape(meta.file_path)


DEFAULT_ATTRIBUTES: Mapping[str, Resolver] = MappingProxyType({
    "year": _date_attribute,
    "month": _date_attribute,
    "monthname": _date_attribute,
    "day": _date_attribute,
    "weekday": _date_attribute,
    "weekdayname": _date_attribute,
    "yearday": _date_attribute,
    "section": _section_attribute,
    "title": _title_attribute,
    "slug": _slug_else_title_attribute,
    "filename": _filename_attribute,
})
