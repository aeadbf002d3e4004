"""Column classification: media column detection and descriptors."""

from smarttable.core.classification.column_classifier import (
    ColumnClassifier,
    summarize_media,
    total_media_files,
)
from smarttable.core.classification.media_detection import (
    MediaColumnPredicate,
    VocabularyMediaPredicate,
    looks_like_file_reference,
    media_kind_from_url,
)

__all__ = [
    "ColumnClassifier",
    "MediaColumnPredicate",
    "VocabularyMediaPredicate",
    "looks_like_file_reference",
    "media_kind_from_url",
    "summarize_media",
    "total_media_files",
]
