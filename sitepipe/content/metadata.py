"""Total coercion from a generic front matter document to PageMetadata.

None of the helpers raise: missing or mistyped values fall back to
defaults so a sloppy header never blocks publishing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from sitepipe.content.models import PageMetadata, utcnow
from sitepipe.frontmatter import FrontMatterValue

Clock = Callable[[], datetime]

CALENDAR_DATE_LAYOUT = "%Y-%m-%d"


def coerce_str(value: FrontMatterValue) -> str:
    return value if isinstance(value, str) else ""


def coerce_bool(value: FrontMatterValue) -> bool:
    return value if isinstance(value, bool) else False


def coerce_str_list(value: FrontMatterValue) -> list[str]:
    """Coerce each element independently; non-lists become []."""
    if not isinstance(value, list):
        return []
    return [coerce_str(v) for v in value]


def _parse_timestamp(text: str) -> datetime:
    if "T" not in text and " " not in text:
        raise ValueError(f"not a timestamp: {text!r}")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_calendar_date(text: str) -> datetime:
    return datetime.strptime(text, CALENDAR_DATE_LAYOUT).replace(tzinfo=timezone.utc)


_DATE_PARSERS = (_parse_timestamp, _parse_calendar_date)


def coerce_date(value: FrontMatterValue, now: Clock = utcnow) -> datetime:
    """Parse a full timestamp, then a bare date; otherwise return now()."""
    if isinstance(value, str):
        text = value.strip()
        for parse in _DATE_PARSERS:
            try:
                return parse(text)
            except ValueError:
                continue
    return now()


def extract_metadata(doc: Mapping[str, FrontMatterValue], now: Clock = utcnow) -> PageMetadata:
    """Build PageMetadata from a decoded front matter mapping."""
    return PageMetadata(
        title=coerce_str(doc.get("title")),
        slug=coerce_str(doc.get("slug")),
        summary=coerce_str(doc.get("summary")),
        categories=coerce_str_list(doc.get("categories")),
        tags=coerce_str_list(doc.get("tags")),
        date=coerce_date(doc.get("date"), now),
        draft=coerce_bool(doc.get("draft")),
    )
