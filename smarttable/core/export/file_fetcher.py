"""Module: file_fetcher.py

Date: 2026-10-19

HTTP/local file retrieval for downloads.

RequestsFileFetcher resolves a file reference and returns its bytes:
    - http(s) URLs are fetched with a shared requests.Session
    - file:// URLs and existing local paths are read from disk
    - root-relative references ("/storage/a.pdf") are joined to base_url
Every failure is raised as FetchError.
"""

from __future__ import annotations

import threading
from pathlib import Path
from urllib.parse import unquote, urljoin, urlsplit

import requests

from smarttable.config import DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TIMEOUT, DOWNLOAD_USER_AGENT
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class FetchError(Exception):
    """A file reference could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class RequestsFileFetcher:
    """FileFetcher backed by requests.

    Args:
        base_url: Origin used to resolve root-relative references
        timeout: Socket timeout in seconds for one request
        session: Pre-configured session (a new one is created otherwise)

    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = DOWNLOAD_TIMEOUT,
        session: requests.Session | None = None,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._session = session
        self._session_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
                self._session.headers.update({"User-Agent": DOWNLOAD_USER_AGENT})
            return self._session

    def resolve(self, url: str) -> str:
        """Absolute form of url (root-relative references need base_url)."""
        if not isinstance(url, str) or not url.strip():
            raise FetchError(str(url), "Invalid URL")
        url = url.strip()
        if url.startswith("/") and not url.startswith("//") and self.base_url:
            return urljoin(self.base_url, url)
        if url.startswith("//"):
            return "https:" + url
        return url

    def fetch_blob(self, url: str) -> bytes:
        target = self.resolve(url)
        scheme = urlsplit(target).scheme.lower()

        if scheme in ("http", "https"):
            return self._fetch_http(target)
        if scheme == "file":
            return self._read_local(Path(unquote(urlsplit(target).path)), url)
        if not scheme or len(scheme) == 1:  # bare path or Windows drive letter
            return self._read_local(Path(target), url)

        raise FetchError(url, f"Unsupported scheme '{scheme}'")

    def close(self) -> None:
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def _fetch_http(self, url: str) -> bytes:
        logger.debug("[FileFetcher] GET %s", url, extra={"dev_only": True})
        try:
            response = self.session.get(url, timeout=self.timeout, stream=True)
            try:
                response.raise_for_status()
                chunks = [
                    chunk for chunk in response.iter_content(chunk_size=self.chunk_size) if chunk
                ]
            finally:
                response.close()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise FetchError(url, f"HTTP {status}") from e
        except requests.RequestException as e:
            raise FetchError(url, f"Request failed ({e.__class__.__name__})") from e

        return b"".join(chunks)

    def _read_local(self, path: Path, url: str) -> bytes:
        if not path.is_file():
            if str(path).startswith("/") and not self.base_url:
                raise FetchError(url, "Relative reference without base_url")
            raise FetchError(url, "File not found")
        try:
            return path.read_bytes()
        except OSError as e:
            raise FetchError(url, f"Cannot read file ({e.strerror or e})") from e
