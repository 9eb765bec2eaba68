"""Pure text helpers for posts — slug derivation and reading-time estimation."""

import math
import re
import unicodedata
from dataclasses import dataclass

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_HTML_TAG = re.compile(r"<[^>]+>")
_MARKDOWN_LINK_TARGET = re.compile(r"\]\([^)]*\)")
_WORD = re.compile(r"\w+(?:['’]\w+)*")


@dataclass(frozen=True)
class ReadingTime:
    word_count: int
    minutes: int


def slugify(text: str, max_length: int = 80) -> str:
    """Turn arbitrary text into a lowercase, hyphen-separated ASCII slug.

    Accents are folded ("Café" -> "cafe"), every run of other characters
    becomes a single hyphen and leading/trailing hyphens are dropped.
    Returns an empty string when nothing usable is left.
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", folded.lower()).strip("-")
    if max_length > 0 and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def with_suffix(slug: str, suffix: int, max_length: int = 80) -> str:
    """Append ``-<suffix>`` while staying within ``max_length``."""
    tail = f"-{suffix}"
    if max_length > 0:
        slug = slug[: max(max_length - len(tail), 1)].rstrip("-")
    return f"{slug}{tail}"


def count_words(content: str) -> int:
    """Count words in markdown, HTML or plain text."""
    text = _HTML_TAG.sub(" ", content)
    text = _MARKDOWN_LINK_TARGET.sub("]", text)
    return len(_WORD.findall(text))


def estimate_reading_time(content: str, words_per_minute: int = 200) -> ReadingTime:
    """Estimate reading time, rounding up to whole minutes (minimum one)."""
    words = count_words(content)
    minutes = max(1, math.ceil(words / max(words_per_minute, 1)))
    return ReadingTime(word_count=words, minutes=minutes)
