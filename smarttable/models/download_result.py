"""Module: download_result.py

Date: 2026-10-19

Per-item outcome of a single or bulk download.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DownloadOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class DownloadResult:
    """Outcome for one URL.

    Attributes:
        url: The requested file reference
        outcome: success or failure
        error: Failure description (None on success)
        saved_path: Where the bytes were written (None on failure)
        fallback_opened: True if the URL was handed to the external viewer
            after the fetch failed

    """

    url: str
    outcome: DownloadOutcome
    error: str | None = None
    saved_path: Path | None = None
    fallback_opened: bool = False

    @property
    def succeeded(self) -> bool:
        return self.outcome is DownloadOutcome.SUCCESS

    @classmethod
    def success(cls, url: str, saved_path: Path | None = None) -> DownloadResult:
        return cls(url=url, outcome=DownloadOutcome.SUCCESS, saved_path=saved_path)

    @classmethod
    def failure(cls, url: str, error: str, fallback_opened: bool = False) -> DownloadResult:
        return cls(
            url=url,
            outcome=DownloadOutcome.FAILURE,
            error=error,
            fallback_opened=fallback_opened,
        )
