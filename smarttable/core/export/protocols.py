"""Collaborator protocols for the download pipeline.

Date: 2026-10-19

The export code depends on these abstractions rather than on requests,
the filesystem or a browser, so tests can substitute fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileFetcher(Protocol):
    """Retrieves the bytes behind a file reference."""

    def fetch_blob(self, url: str) -> bytes:
        """Return the resource content. Raises on any failure."""
        ...


@runtime_checkable
class FileSaver(Protocol):
    """Persists downloaded bytes."""

    def save(self, file_name: str, data: bytes) -> Path:
        """Write data under file_name and return the final path."""
        ...


@runtime_checkable
class ExternalViewer(Protocol):
    """Opens a resource in a new external context (browser tab, viewer)."""

    def open(self, url: str) -> bool:
        """Return True if the request was accepted."""
        ...
