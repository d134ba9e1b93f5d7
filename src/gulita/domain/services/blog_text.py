"""Text helpers for blog posts: reading time, excerpts and tags."""

import math
import re
from collections.abc import Iterable

from gulita.domain.entities.blog import MAX_TAGS

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 200

_TAG_PATTERN = re.compile(r"<[^>]*>")


def reading_time_minutes(content: str) -> int:
    """Estimated reading time in whole minutes, never less than one.

    Examples:
        >>> reading_time_minutes("word " * 450)
        3
        >>> reading_time_minutes("")
        1
    """
    word_count = len(content.split())
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def generate_excerpt(content: str, max_length: int = EXCERPT_LENGTH) -> str:
    """Build a short plain-text summary of ``content``.

    HTML tags are stripped. Text that fits is returned whole. Otherwise the
    cut is made after the last sentence end within the limit when that end
    lies past 70% of it, or at the last word boundary followed by "...".
    """
    clean = _TAG_PATTERN.sub("", content).strip()
    if len(clean) <= max_length:
        return clean

    truncated = clean[:max_length]
    sentence_end = max(truncated.rfind("."), truncated.rfind("!"), truncated.rfind("?"))
    if sentence_end > max_length * 0.7:
        return clean[: sentence_end + 1]

    last_space = truncated.rfind(" ")
    if last_space == -1:
        last_space = max_length
    return clean[:last_space] + "..."


def clean_tags(tags: Iterable[object] | None) -> list[str]:
    """Trim and lower-case tags, dropping blanks and non-strings.

    At most ``MAX_TAGS`` tags are kept, in their original order.
    """
    if not tags:
        return []
    cleaned = [tag.strip().lower() for tag in tags if isinstance(tag, str)]
    return [tag for tag in cleaned if tag][:MAX_TAGS]
