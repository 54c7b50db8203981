"""Error taxonomy for the publish pipeline.

Unit-scoped errors (decode, pattern, transform) drop the offending content
unit and let the run continue. Fatal errors (discovery, store) abort the run.
"""

from __future__ import annotations


class SitePipeError(Exception):
    """Base class for all pipeline errors."""

    fatal: bool = False
    stage: str = "unknown"


class DiscoveryError(SitePipeError):
    """Walking or reading the source tree failed."""

    fatal = True
    stage = "discovery"

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        super().__init__(f"discovery failed at {path}: {cause}")
        self.__cause__ = cause


class DecodeError(SitePipeError):
    """Front matter in the selected dialect is malformed."""

    stage = "decode"

    def __init__(self, dialect: str, detail: str) -> None:
        self.dialect = dialect
        self.detail = detail
        super().__init__(f"{dialect} front matter: {detail}")


class PatternError(SitePipeError):
    """A permalink pattern is invalid or references an unknown attribute."""

    stage = "permalink"

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"permalink pattern {pattern!r}: {detail}")


class ExpansionError(PatternError):
    """A resolver produced a value that is not a valid URI component."""

    def __init__(self, pattern: str, attribute: str, cause: Exception) -> None:
        self.attribute = attribute
        super().__init__(pattern, f"expanding :{attribute} failed: {cause}")
        self.__cause__ = cause


class TransformError(SitePipeError):
    """The external content processor failed for one unit."""

    stage = "transform"

    def __init__(self, command: str, detail: str) -> None:
        self.command = command
        self.detail = detail
        super().__init__(f"transform {command!r} failed: {detail}")


class StoreError(SitePipeError):
    """Output directory or file I/O failed."""

    fatal = True
    stage = "store"

    def __init__(self, operation: str, path: str, cause: Exception) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"{operation} {path} failed: {cause}")
        self.__cause__ = cause
