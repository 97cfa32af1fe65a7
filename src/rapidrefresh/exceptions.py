"""Exception types raised by rapidrefresh."""

from __future__ import annotations


class RapidRefreshError(Exception):
    """Base class for all rapidrefresh errors."""


class MalformedIndexLine(RapidRefreshError, ValueError):
    """Raised when an index line cannot be turned into a band."""

    def __init__(self, position: int, line: str, reason: str) -> None:
        self.position = position
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed index line {position} ({reason}): {line!r}")


class BandNotFound(RapidRefreshError, LookupError):
    """Raised when a selected band is absent from the current index."""

    def __init__(self, line_number: int, source: str | None = None) -> None:
        self.line_number = line_number
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Band {line_number} not found{where}")


class EmptySelection(RapidRefreshError, ValueError):
    """Raised when a subset is requested without any bands."""


class UnparsableCacheFilename(RapidRefreshError, ValueError):
    """Raised when a cache filename does not match the dataset grammar."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path!r}: {reason}")
