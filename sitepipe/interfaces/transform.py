"""Transform interface — the external content processor."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transform(Protocol):
    """Bytes-in, bytes-out content processor. Raises TransformError on failure."""

    def apply(self, body: bytes) -> bytes: ...
