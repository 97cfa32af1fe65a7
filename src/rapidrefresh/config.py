"""Shared configuration helpers for rapidrefresh."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "rapidrefresh"
DEFAULT_HTTP_TIMEOUT = 120.0
DEFAULT_LOG_LEVEL = "INFO"


def _resolve_path_from_env(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    if not value:
        return default
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (Path.cwd() / candidate).resolve()
    return candidate


def get_cache_dir() -> Path:
    """Return the root directory holding downloaded datasets."""

    return _resolve_path_from_env("RAPIDREFRESH_CACHE_DIR", DEFAULT_CACHE_DIR)


def get_http_timeout() -> float:
    """Return the per-request timeout in seconds from RAPIDREFRESH_HTTP_TIMEOUT."""

    raw = os.environ.get("RAPIDREFRESH_HTTP_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT


def get_log_level() -> str:
    """Return the configured log level name."""

    level = os.environ.get("RAPIDREFRESH_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return DEFAULT_LOG_LEVEL
    return level


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists."""

    path.mkdir(parents=True, exist_ok=True)
    return path
