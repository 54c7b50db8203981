"""SectionAggregator — per-directory chronological listings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath

from sitepipe.content.models import ContentUnit
from sitepipe.interfaces.store import Store
from sitepipe.output.paths import root_index_path, section_path
from sitepipe.sections.models import Section, SectionEntry

logger = logging.getLogger(__name__)


class SectionAggregator:
    """Groups published units by parent directory and writes listings.

    Listings are written sequentially, one writer per section file. When a
    page artifact already occupies a listing path in this run, its body is
    kept and the listing follows it.
    """

    def __init__(self, store: Store, ext: str, ugly_urls: bool = False) -> None:
        self.store = store
        self.ext = ext
        self.ugly_urls = ugly_urls

    def collect(self, units: Iterable[ContentUnit]) -> dict[str, Section]:
        """Group non-root units into sections keyed by parent directory."""
        sections: dict[str, Section] = {}
        for unit in units:
            if unit.is_root:
                continue
            key = unit.parent_section
            if key not in sections:
                sections[key] = Section(key=key, path=str(section_path(key, self.ext)))
            sections[key].entries.append(self._entry(unit))
        return sections

    def publish(
        self,
        units: Iterable[ContentUnit],
        root_section: str = "",
        written: Mapping[PurePosixPath, bytes] | None = None,
    ) -> dict[str, Section]:
        """Write every section listing, plus the root listing if requested."""
        written = written or {}
        sections = self.collect(units)

        for key in sorted(sections):
            section = sections[key]
            self._write(PurePosixPath(section.path), section.render(), written)
            logger.info("written section listing %s to %s", key, section.path)

        if root_section and root_section in sections:
            root_path = root_index_path(self.ext)
            self._write(root_path, sections[root_section].render(), written)
            logger.info("written section listing for root to %s", root_path)
        elif root_section:
            logger.debug("root section %r has no entries", root_section)

        return sections

    # -- internals ---------------------------------------------------------

    def _entry(self, unit: ContentUnit) -> SectionEntry:
        link = unit.destination
        if self.ugly_urls:
            link += f".{self.ext}"
        meta = unit.metadata
        return SectionEntry(link=link, title=meta.title, date=meta.date, summary=meta.summary)

    def _write(self, path: PurePosixPath, listing: str, written: Mapping[PurePosixPath, bytes]) -> None:
        self.store.remove_file(path)
        self.store.ensure_dir(path.parent)
        self.store.write_file(path, written.get(path, b"") + listing.encode("utf-8"))
