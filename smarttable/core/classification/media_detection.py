"""Module: media_detection.py

Date: 2026-10-19

Heuristics for recognising file-like ("media") columns and values.

The column-name heuristic is a strategy object so callers can extend or
replace the vocabulary without touching ColumnClassifier:

    predicate = VocabularyMediaPredicate(extra_terms=("resume", "cv"))
    classifier = ColumnClassifier(predicate=predicate)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlsplit

from smarttable.config import (
    FILE_REFERENCE_PREFIXES,
    MEDIA_EXTENSIONS,
    MEDIA_KIND_KEYWORDS,
    MEDIA_NAME_VOCABULARY,
)
from smarttable.models.column import MediaKind


@runtime_checkable
class MediaColumnPredicate(Protocol):
    """Decides from a column key alone whether it may hold file references."""

    def matches_name(self, column_key: str) -> bool:
        """Return True if the key names a media column candidate."""
        ...

    def media_kind_for(self, column_key: str) -> MediaKind:
        """Return the kind implied by the key (GENERIC when nothing specific matches)."""
        ...


class VocabularyMediaPredicate:
    """Case-insensitive substring match against a term vocabulary."""

    def __init__(
        self,
        vocabulary: Iterable[str] | None = None,
        extra_terms: Iterable[str] = (),
        kind_keywords: Sequence[tuple[str, Sequence[str]]] | None = None,
    ) -> None:
        """Initialize the predicate.

        Args:
            vocabulary: Replacement term list (defaults to MEDIA_NAME_VOCABULARY)
            extra_terms: Terms appended to the vocabulary
            kind_keywords: Ordered (kind, terms) pairs for the kind pass

        """
        base = MEDIA_NAME_VOCABULARY if vocabulary is None else vocabulary
        self.vocabulary: tuple[str, ...] = tuple(
            dict.fromkeys(term.lower() for term in (*base, *extra_terms) if term)
        )
        pairs = MEDIA_KIND_KEYWORDS if kind_keywords is None else kind_keywords
        self.kind_keywords: tuple[tuple[MediaKind, tuple[str, ...]], ...] = tuple(
            (MediaKind.coerce(kind), tuple(term.lower() for term in terms)) for kind, terms in pairs
        )

    def matches_name(self, column_key: str) -> bool:
        lowered = str(column_key).lower()
        return any(term in lowered for term in self.vocabulary)

    def media_kind_for(self, column_key: str) -> MediaKind:
        lowered = str(column_key).lower()
        for kind, terms in self.kind_keywords:
            if any(term in lowered for term in terms):
                return kind
        return MediaKind.GENERIC

    def __repr__(self) -> str:
        return f"VocabularyMediaPredicate({len(self.vocabulary)} terms)"


def is_file_value(value: Any) -> bool:
    """True for a non-empty (after strip) string."""
    return isinstance(value, str) and value.strip() != ""


def looks_like_file_reference(value: Any) -> bool:
    """True if value is a non-empty string shaped like a URL or path.

    Qualifies when it starts with a scheme/path prefix ("http", "/") or
    contains a dot (an extension or a host name).
    """
    if not is_file_value(value):
        return False
    text = value.strip()
    return text.startswith(FILE_REFERENCE_PREFIXES) or "." in text


_EXTENSION_KINDS = {
    extension: MediaKind.coerce(kind)
    for kind, extensions in MEDIA_EXTENSIONS.items()
    for extension in extensions
}


def media_kind_from_url(url: Any) -> MediaKind:
    """Guess a kind from the file extension of url (query/fragment ignored)."""
    if not is_file_value(url):
        return MediaKind.GENERIC

    try:
        path = urlsplit(url.strip()).path or url
    except ValueError:
        path = url

    last_segment = path.rstrip("/").rsplit("/", 1)[-1]
    if "." not in last_segment:
        return MediaKind.GENERIC
    extension = last_segment.rsplit(".", 1)[-1].lower()
    return _EXTENSION_KINDS.get(extension, MediaKind.GENERIC)
