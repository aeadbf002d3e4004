"""Column header labels."""

import re

_SEPARATORS = re.compile(r"[_\s]+")


def format_column_header(key: str) -> str:
    """Turn a snake_case key into a Title Case label.

    "photo_url" -> "Photo Url", "FIRST_name" -> "First Name".
    """
    words = [word for word in _SEPARATORS.split(str(key)) if word]
    if not words:
        return str(key)
    return " ".join(word[0].upper() + word[1:].lower() for word in words)
