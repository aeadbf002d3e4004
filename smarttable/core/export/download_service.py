"""Module: download_service.py

Date: 2026-10-19

Single-file download: fetch the bytes, save them, and if anything goes wrong
hand the URL to the external viewer instead of surfacing an error.
"""

from __future__ import annotations

from typing import Any

from smarttable.core.columns.value_formatter import file_name_from_url
from smarttable.core.export.protocols import ExternalViewer, FileFetcher, FileSaver
from smarttable.models.download_result import DownloadResult
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class DownloadService:
    """Fetch-then-save with an open-externally fallback.

    Args:
        fetcher: Retrieves bytes for a URL
        saver: Persists the bytes
        viewer: Fallback for failed fetches (None disables the fallback)

    """

    def __init__(
        self,
        fetcher: FileFetcher,
        saver: FileSaver,
        viewer: ExternalViewer | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.saver = saver
        self.viewer = viewer

    def download(self, url: Any, file_name: str | None = None) -> DownloadResult:
        """Download one file. Never raises.

        Args:
            url: File reference; non-string or blank values fail without fallback
            file_name: Target name (defaults to the URL's last path segment)

        Returns:
            DownloadResult tagged success or failure

        """
        if not isinstance(url, str) or not url.strip():
            logger.warning("[DownloadService] Invalid URL for download: %r", url)
            return DownloadResult.failure(str(url), "Invalid URL")

        try:
            data = self.fetcher.fetch_blob(url)
            saved_path = self.saver.save(file_name or file_name_from_url(url), data)
        except Exception as e:
            logger.warning("[DownloadService] Download failed for %s: %s", url, e)
            return DownloadResult.failure(url, str(e) or e.__class__.__name__, self._fallback(url))

        logger.info("[DownloadService] Downloaded %s -> %s", url, saved_path)
        return DownloadResult.success(url, saved_path)

    def _fallback(self, url: str) -> bool:
        if self.viewer is None:
            return False
        try:
            return bool(self.viewer.open(url))
        except Exception:
            logger.exception("[DownloadService] Fallback open failed for %s", url)
            return False
