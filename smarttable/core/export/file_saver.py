"""Module: file_saver.py

Date: 2026-10-19

Writes downloaded bytes into a directory without overwriting existing
files: "cv.pdf" becomes "cv (1).pdf", "cv (2).pdf", ...
"""

from __future__ import annotations

import os
import re
import threading
from pathlib import Path

from smarttable.config import DEFAULT_DOWNLOAD_DIR, DEFAULT_FILE_NAME
from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_file_name(name: str) -> str:
    """Make a URL-derived name safe for the local filesystem."""
    cleaned = _UNSAFE_CHARS.sub("_", str(name)).strip().strip(".")
    return cleaned or DEFAULT_FILE_NAME


class DirectoryFileSaver:
    """FileSaver writing into one directory.

    Name reservation is lock-protected so concurrent downloads of files with
    the same name end up in distinct files.
    """

    def __init__(self, directory: str | os.PathLike | None = None) -> None:
        self.directory = Path(directory or DEFAULT_DOWNLOAD_DIR)
        self._lock = threading.Lock()

    def save(self, file_name: str, data: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        with self._lock:
            target = self._unique_path(sanitize_file_name(file_name))
            # Reserve the name before releasing the lock
            target.touch(exist_ok=False)

        try:
            target.write_bytes(data)
        except OSError:
            # Free the reserved name
            target.unlink(missing_ok=True)
            raise
        logger.debug(
            "[FileSaver] Saved %d bytes -> %s", len(data), target, extra={"dev_only": True}
        )
        return target

    def _unique_path(self, file_name: str) -> Path:
        candidate = self.directory / file_name
        if not candidate.exists():
            return candidate

        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while True:
            candidate = self.directory / f"{stem} ({counter}){suffix}"
            if not candidate.exists():
                return candidate
            counter += 1
