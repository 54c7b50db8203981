"""Output subsystem — artifact paths and the destination tree store."""

from sitepipe.output.paths import output_path, root_index_path, section_path, target_path
from sitepipe.output.store import LocalStore

__all__ = [
    "LocalStore",
    "output_path",
    "root_index_path",
    "section_path",
    "target_path",
]
