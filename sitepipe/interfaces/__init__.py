"""Capabilities the pipeline core consumes."""

from sitepipe.interfaces.store import Store
from sitepipe.interfaces.transform import Transform

__all__ = ["Store", "Transform"]
