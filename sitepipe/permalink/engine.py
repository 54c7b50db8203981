"""PermalinkEngine — validates and expands `:attribute` path patterns."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

from sitepipe.content.models import PageMetadata
from sitepipe.errors import ExpansionError, PatternError
from sitepipe.permalink.attributes import DEFAULT_ATTRIBUTES, Resolver, url_escape

logger = logging.getLogger(__name__)

ATTRIBUTE_RE = re.compile(r":\w+")


class PermalinkEngine:
    """Expands path patterns such as ``/:year/:month/:title/``.

    The resolver table is fixed at construction; pass a custom mapping to
    support a different attribute set.
    """

    def __init__(self, attributes: Mapping[str, Resolver] = DEFAULT_ATTRIBUTES) -> None:
        self.attributes: Mapping[str, Resolver] = MappingProxyType(
            {k.lower(): v for k, v in attributes.items()}
        )

    def validate(self, pattern: str) -> bool:
        """True if every token is known and no segment follows an empty one."""
        return self._check(pattern) is None

    def expand(self, pattern: str, metadata: PageMetadata) -> str:
        """Substitute every token in `pattern` from `metadata`.

        Raises PatternError for invalid patterns and unknown tokens, and
        ExpansionError when a resolved value is not a valid URI component.
        """
        if problem := self._check(pattern):
            raise PatternError(pattern, problem)

        segments = pattern.split("/")
        for i, segment in enumerate(segments):
            if not segment or not ATTRIBUTE_RE.search(segment):
                continue
            segments[i] = ATTRIBUTE_RE.sub(
                lambda m: self._resolve(pattern, m.group(0)[1:], metadata), segment
            )
        return "/".join(segments)

    # -- internals ---------------------------------------------------------

    def _check(self, pattern: str) -> str | None:
        """Return a description of the first problem in `pattern`, if any."""
        fragments = (pattern[1:] if pattern.startswith("/") else pattern).split("/")
        seen_empty = False
        for fragment in fragments:
            if not fragment:
                seen_empty = True
                continue
            if seen_empty:
                return "non-empty segment after an empty one"
            for match in ATTRIBUTE_RE.findall(fragment):
                if match[1:].lower() not in self.attributes:
                    return f"unknown attribute {match}"
        return None

    def _resolve(self, pattern: str, attr: str, metadata: PageMetadata) -> str:
        key = attr.lower()
        resolver = self.attributes.get(key)
        if resolver is None:
            raise PatternError(pattern, f"unknown attribute :{attr}")
        try:
            value = resolver(metadata, key)
        except ValueError as e:
            raise ExpansionError(pattern, key, e) from e
        logger.debug("resolved :%s -> %r", key, value)
        return value


__all__ = ["ATTRIBUTE_RE", "PermalinkEngine", "url_escape"]
