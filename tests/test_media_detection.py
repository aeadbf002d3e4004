"""Tests for the file-value heuristics in media_detection."""

import pytest

from smarttable.core.classification import MediaColumnPredicate, VocabularyMediaPredicate
from smarttable.core.classification.media_detection import (
    is_file_value,
    looks_like_file_reference,
    media_kind_from_url,
)
from smarttable.models.column import MediaKind


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://x/a.jpg", True),
        ("/storage/a", True),
        ("a.pdf", True),
        ("  http://x  ", True),
        ("pending", False),
        ("", False),
        ("   ", False),
        (None, False),
        (12.5, False),
    ],
)
def test_looks_like_file_reference(value, expected):
    assert looks_like_file_reference(value) is expected


def test_is_file_value_requires_non_blank_string():
    assert is_file_value("x")
    assert not is_file_value("")
    assert not is_file_value(" \t")
    assert not is_file_value(b"http://x")
    assert not is_file_value(None)


@pytest.mark.parametrize(
    "url, kind",
    [
        ("https://cdn.example.com/photos/a.JPG", MediaKind.IMAGE),
        ("https://cdn.example.com/a.webp?w=200#top", MediaKind.IMAGE),
        ("/docs/cv.docx", MediaKind.DOCUMENT),
        ("clip.mov", MediaKind.VIDEO),
        ("https://x/song.flac", MediaKind.AUDIO),
        ("https://x/archive.zip", MediaKind.GENERIC),
        ("https://x/no-extension", MediaKind.GENERIC),
        ("https://example.com/", MediaKind.GENERIC),
        ("", MediaKind.GENERIC),
        (None, MediaKind.GENERIC),
    ],
)
def test_media_kind_from_url(url, kind):
    assert media_kind_from_url(url) is kind


def test_vocabulary_predicate_satisfies_protocol():
    assert isinstance(VocabularyMediaPredicate(), MediaColumnPredicate)


def test_custom_kind_keywords_first_match_wins():
    predicate = VocabularyMediaPredicate(
        kind_keywords=(("document", ("scan",)), ("image", ("scan", "photo"))),
    )
    assert predicate.media_kind_for("passport_scan") is MediaKind.DOCUMENT
    assert predicate.media_kind_for("photo") is MediaKind.IMAGE
