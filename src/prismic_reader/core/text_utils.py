"""Rich-text helpers: plain-text extraction, word counting and reading time.

All functions are pure; reading time depends only on the words in block bodies
(headings are not counted).
"""

import math
import re
from typing import Iterable, List

from .models import ContentBlock, Span

WORDS_PER_MINUTE = 200

_WORD_BOUNDARY = re.compile(r"[^a-zA-Z0-9]+")


def as_text(spans: Iterable[Span], separator: str = " ") -> str:
    """Return the plain text of a span sequence.

    Examples:
        >>> as_text([Span("paragraph", "Hello"), Span("paragraph", "world")])
        'Hello world'
    """
    return separator.join(span.text for span in spans)


def split_words(text: str) -> List[str]:
    """Split *text* on runs of non-alphanumeric ASCII characters.

    Numbers count as words; isolated punctuation does not.

    Examples:
        >>> split_words("It's 2021, again!")
        ['It', 's', '2021', 'again']
        >>> split_words(" -- ")
        []
    """
    return [token for token in _WORD_BOUNDARY.split(text) if token]


def count_words(blocks: Iterable[ContentBlock]) -> int:
    """Total number of words across every block body."""
    return sum(len(split_words(as_text(block.body))) for block in blocks)


def estimate_reading_minutes(blocks: Iterable[ContentBlock]) -> int:
    """Estimated reading time in whole minutes, rounded up.

    Examples:
        >>> estimate_reading_minutes([])
        0
    """
    return math.ceil(count_words(blocks) / WORDS_PER_MINUTE)


__all__ = [
    "WORDS_PER_MINUTE",
    "as_text",
    "split_words",
    "count_words",
    "estimate_reading_minutes",
]
