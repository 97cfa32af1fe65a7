"""Transport implementations and remote URL builders."""

from __future__ import annotations

from .base import BackendError, Transport
from .http import RequestsTransport
from .urls import build_index_url, build_url

__all__ = ["BackendError", "RequestsTransport", "Transport", "build_index_url", "build_url"]
