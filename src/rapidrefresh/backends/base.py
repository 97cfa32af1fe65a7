"""Core interfaces for HTTP transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rapidrefresh.exceptions import RapidRefreshError


class BackendError(RapidRefreshError):
    """Raised when a transport cannot satisfy a request."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class Transport(ABC):
    """Abstract base class for the network primitives the cache relies on."""

    @abstractmethod
    def get_text(self, url: str) -> str:
        """Return the body of ``url`` decoded as text."""

    @abstractmethod
    def get_range(self, url: str, start: int, end: int | None) -> bytes:
        """Return bytes ``start..end`` (inclusive) of ``url``; ``end=None`` reads to EOF."""

    @abstractmethod
    def download(self, url: str, path: Path) -> Path:
        """Stream the body of ``url`` into ``path`` and return it."""

    def exists(self, url: str) -> bool:
        """Return True if the remote resource appears to be published."""

        raise BackendError(f"{type(self).__name__} cannot check availability", url=url)


def range_header(start: int, end: int | None) -> str:
    """Format an HTTP Range header value for an inclusive byte interval."""

    if start < 0:
        raise ValueError(f"Range start must be non-negative, got {start}")
    if end is None:
        return f"bytes={start}-"
    if end < start:
        raise ValueError(f"Range end {end} precedes start {start}")
    return f"bytes={start}-{end}"
