"""Content unit and page metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

ROOT_SECTION = "."


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PageMetadata(BaseModel):
    """Typed page metadata extracted from a front matter document."""

    title: str = ""
    slug: str = ""
    summary: str = ""
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)
    draft: bool = False

    file_path: str = ""
    subdir: str = ""
    permalink: str = ""


@dataclass
class ContentUnit:
    """One source file travelling through the pipeline.

    Created by discovery, enriched in place by the pipeline and consumed by
    the store and section aggregator.
    """

    root: Path
    source_path: Path
    parent_section: str
    base_name: str
    extension: str
    destination: str = ""
    is_draft: bool = False
    raw_body: bytes = b""
    transformed_body: bytes = b""
    metadata: PageMetadata = field(default_factory=PageMetadata)
    output_path: PurePosixPath | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_section == ROOT_SECTION

    @property
    def relative_destination(self) -> str:
        """Destination without leading or trailing slashes."""
        return self.destination.strip("/")
