from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field

ENTRY_DATE_FORMAT = "%Y-%m-%d"


class SectionEntry(BaseModel):
    link: str
    title: str = ""
    date: datetime
    summary: str = ""

    def render(self) -> str:
        return f"\n=> {self.link} {self.date.strftime(ENTRY_DATE_FORMAT)}: {self.title}\n{self.summary}\n"


class Section(BaseModel):
    """Chronological listing of the pages in one source directory."""

    key: str
    path: str
    entries: list[SectionEntry] = Field(default_factory=list)

    def sorted_entries(self) -> list[SectionEntry]:
        """Newest first; equal dates fall back to link order."""
        by_link = sorted(self.entries, key=lambda e: e.link)
        return sorted(by_link, key=lambda e: e.date, reverse=True)

    def render(self) -> str:
        return "".join(entry.render() for entry in self.sorted_entries())
