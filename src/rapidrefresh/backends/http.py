"""requests-backed implementation of :class:`Transport`."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from rapidrefresh.backends.base import BackendError, Transport, range_header
from rapidrefresh.config import get_http_timeout

LOGGER = logging.getLogger("rapidrefresh.backends")
CHUNK_SIZE = 1024 * 1024


class RequestsTransport(Transport):
    """Transport that talks plain HTTP(S) through ``requests``."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout if timeout is not None else get_http_timeout()

    def get_text(self, url: str) -> str:
        LOGGER.debug("GET %s", url)
        resp = self._request(url)
        return resp.text

    def get_range(self, url: str, start: int, end: int | None) -> bytes:
        header = range_header(start, end)
        LOGGER.debug("GET %s (%s)", url, header)
        resp = self._request(url, headers={"Range": header})
        if resp.status_code == 206:
            return resp.content
        # Full body returned; the server ignored the Range header.
        LOGGER.warning("Server ignored %s for %s; slicing full response", header, url)
        content = resp.content
        return content[start:] if end is None else content[start : end + 1]

    def download(self, url: str, path: Path) -> Path:
        LOGGER.info("Downloading %s", url)
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                with path.open("wb") as handle:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            handle.write(chunk)
        except requests.HTTPError as exc:
            raise _wrap_http_error(url, exc) from exc
        except requests.RequestException as exc:
            raise BackendError(f"Download of {url} failed: {exc}", url=url) from exc
        return path

    def exists(self, url: str) -> bool:
        try:
            resp = requests.head(url, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.debug("Availability check failed for %s: %s", url, exc)
            return False
        if resp.status_code == 200:
            return True
        if resp.status_code not in (403, 404):
            LOGGER.debug("Availability check returned status %s for %s", resp.status_code, url)
        return False

    def _request(self, url: str, headers: dict[str, str] | None = None) -> requests.Response:
        try:
            resp = requests.get(url, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise _wrap_http_error(url, exc) from exc
        except requests.RequestException as exc:
            raise BackendError(f"Request to {url} failed: {exc}", url=url) from exc
        return resp


def _wrap_http_error(url: str, exc: requests.HTTPError) -> BackendError:
    status = exc.response.status_code if exc.response is not None else None
    return BackendError(f"HTTP {status} for {url}", url=url, status_code=status)
