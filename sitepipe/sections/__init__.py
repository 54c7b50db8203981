"""Section listings."""

from sitepipe.sections.aggregator import SectionAggregator
from sitepipe.sections.models import Section, SectionEntry

__all__ = ["Section", "SectionAggregator", "SectionEntry"]
