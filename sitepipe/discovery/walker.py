"""Discovery — walks a source tree and feeds content units to a queue."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from sitepipe.content.models import ROOT_SECTION, ContentUnit
from sitepipe.errors import DiscoveryError

logger = logging.getLogger(__name__)


def split_name(filename: str) -> tuple[str, str]:
    """Split on the last '.'; the extension carries no dot."""
    base, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return base, ext


def make_unit(root: Path, path: Path) -> ContentUnit:
    """Build the initial ContentUnit for a file under `root`."""
    rel = PurePosixPath(path.relative_to(root).as_posix())
    base_name, extension = split_name(rel.name)
    parent = str(rel.parent)
    return ContentUnit(
        root=root,
        source_path=path,
        parent_section=parent if parent else ROOT_SECTION,
        base_name=base_name,
        extension=extension,
    )


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every regular file below `root`.

    Raises DiscoveryError if any directory cannot be listed, including a
    missing root.
    """

    def _onerror(err: OSError) -> None:
        raise DiscoveryError(err.filename or str(root), err)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_onerror):
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_file():
                yield path
            else:
                logger.debug("skipping non-regular file %s", path)


async def discover(root: Path | str, queue: asyncio.Queue[ContentUnit | None]) -> int:
    """Produce one ContentUnit per file onto `queue`.

    Always puts a trailing None to close the channel, even when the walk
    fails. Returns the number of units emitted.
    """
    root = Path(root)
    count = 0
    try:
        for path in iter_files(root):
            await queue.put(make_unit(root, path))
            count += 1
    except asyncio.CancelledError:
        logger.debug("discovery under %s cancelled after %d file(s)", root, count)
        raise
    except Exception:
        await queue.put(None)
        raise
    await queue.put(None)
    logger.debug("discovered %d file(s) under %s", count, root)
    return count
