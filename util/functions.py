# util/functions.py
import secrets
import string
import time
from datetime import date
from typing import Sequence

_ALPHABET = string.digits + string.ascii_lowercase


def random_id(length: int = 9) -> str:
    """Short base36 identifier for history items and media files."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def now_ms() -> int:
    return int(time.time() * 1000)


def today() -> str:
    return date.today().isoformat()


def clip_chars(text: str, max_chars: int, suffix: str = "...") -> str:
    """
    - Trim `text` to at most `max_chars` characters.
    - Appends `suffix` only when trimming occurs.
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + suffix


def build_preview(
    text: str, url: str, media_types: Sequence[str], max_chars: int = 60
) -> str:
    """
    History preview: the URL if any, else the start of the text,
    else the kind of the first attachment.
    """
    if url:
        return url
    if text:
        return clip_chars(text, max_chars)
    if media_types:
        return f"Media: {media_types[0]}"
    return "Analysis"
