"""Source tree discovery."""

from sitepipe.discovery.walker import discover, iter_files, make_unit, split_name

__all__ = ["discover", "iter_files", "make_unit", "split_name"]
