"""LocalStore — writes the output tree to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path, PurePath

from sitepipe.errors import StoreError

logger = logging.getLogger(__name__)


class LocalStore:
    """Filesystem store rooted at the output directory.

    Writes are atomic per file and never leave the root. In dry-run mode
    nothing touches the disk.
    """

    def __init__(self, root: Path | str, *, dry_run: bool = False) -> None:
        self.root = Path(root)
        self.dry_run = dry_run

    def ensure_dir(self, path: PurePath | str) -> bool:
        """Create `path` (and parents) if missing. Returns True if created."""
        target = self._resolve(path)
        if target.is_dir():
            return False
        if self.dry_run:
            logger.debug("dry-run: would mkdir %s", target)
            return True
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError("mkdir", str(target), e) from e
        logger.info("mkdir %s", target)
        return True

    def write_file(self, path: PurePath | str, data: bytes) -> int:
        """Atomically replace `path` with `data`. Returns bytes written."""
        target = self._resolve(path)
        if self.dry_run:
            logger.debug("dry-run: would write %s (%d bytes)", target, len(data))
            return len(data)

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
            os.chmod(tmp_name, 0o644)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError("write", str(target), e) from e
        logger.info("written %s (%d bytes)", target, len(data))
        return len(data)

    def remove_file(self, path: PurePath | str) -> None:
        """Best-effort removal; a missing file is not an error."""
        target = self._resolve(path)
        if self.dry_run:
            logger.debug("dry-run: would remove %s", target)
            return
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("could not remove %s: %s", target, e)

    def _resolve(self, path: PurePath | str) -> Path:
        target = self.root / path
        if not target.resolve().is_relative_to(self.root.resolve()):
            raise StoreError("resolve", str(target), ValueError("path escapes output root"))
        return target
