"""Output path shaping for pretty and ugly URL layouts."""

from __future__ import annotations

from pathlib import PurePosixPath

INDEX_NAME = "index"


def target_path(destination: str, ext: str, ugly_urls: bool) -> tuple[PurePosixPath, str]:
    """Return (directory, filename) for an artifact, relative to the output root.

    Pretty layout writes ``<dest>/index.<ext>``; ugly layout writes
    ``<parent>/<last>.<ext>``. The destination "index" always lands in the
    output root.
    """
    dest = destination.strip("/")
    if not dest or dest == INDEX_NAME:
        return PurePosixPath("."), f"{INDEX_NAME}.{ext}"

    path = PurePosixPath(dest)
    if ugly_urls:
        return path.parent, f"{path.name}.{ext}"
    return path, f"{INDEX_NAME}.{ext}"


def output_path(destination: str, ext: str, ugly_urls: bool) -> PurePosixPath:
    directory, filename = target_path(destination, ext, ugly_urls)
    return directory / filename


def section_path(section: str, ext: str) -> PurePosixPath:
    """Listing file for a source directory."""
    return PurePosixPath(section) / f"{INDEX_NAME}.{ext}"


def root_index_path(ext: str) -> PurePosixPath:
    return PurePosixPath(f"{INDEX_NAME}.{ext}")
