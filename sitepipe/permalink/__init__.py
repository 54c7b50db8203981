"""Permalink pattern language."""

from sitepipe.permalink.attributes import DEFAULT_ATTRIBUTES, Resolver, url_escape
from sitepipe.permalink.engine import PermalinkEngine

__all__ = ["DEFAULT_ATTRIBUTES", "PermalinkEngine", "Resolver", "url_escape"]
