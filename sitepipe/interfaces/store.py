"""Store interface — the minimal output filesystem capability."""

from __future__ import annotations

from pathlib import PurePath
from typing import Protocol, runtime_checkable


@runtime_checkable
class Store(Protocol):
    """Output tree writer. Paths are relative to the store root."""

    def ensure_dir(self, path: PurePath | str) -> bool: ...

    def write_file(self, path: PurePath | str, data: bytes) -> int: ...

    def remove_file(self, path: PurePath | str) -> None: ...
