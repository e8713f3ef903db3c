"""Tests for plain-text extraction and reading time estimation."""

import pytest

from prismic_reader.core.models import ContentBlock, Span
from prismic_reader.core.text_utils import (
    WORDS_PER_MINUTE,
    as_text,
    count_words,
    estimate_reading_minutes,
    split_words,
)


def _block(text, heading="Heading"):
    return ContentBlock(heading=heading, body=(Span("paragraph", text),))


def _words(n):
    return [_block(" ".join(["lorem"] * n))]


def test_as_text_joins_spans_with_separator():
    spans = [Span("paragraph", "First."), Span("list-item", "Second")]
    assert as_text(spans) == "First. Second"
    assert as_text(spans, separator="\n") == "First.\nSecond"
    assert as_text([]) == ""


def test_split_words_counts_numbers_and_drops_punctuation():
    assert split_words("Hello, world! 42 times...") == ["Hello", "world", "42", "times"]
    assert split_words(" -- ?! ") == []
    # Non-ASCII letters act as separators
    assert split_words("café crème") == ["caf", "cr", "me"]


@pytest.mark.parametrize(
    "words,minutes",
    [(0, 0), (1, 1), (199, 1), (200, 1), (201, 2), (400, 2), (401, 3)],
)
def test_reading_time_boundaries(words, minutes):
    assert estimate_reading_minutes(_words(words)) == minutes


def test_empty_content_reads_in_zero_minutes():
    assert estimate_reading_minutes([]) == 0
    assert estimate_reading_minutes([ContentBlock(heading="Only a heading")]) == 0


def test_words_are_summed_across_blocks_and_headings_ignored():
    blocks = [
        _block("one two three", heading="ignored heading words"),
        ContentBlock(heading="h", body=(Span("paragraph", "four"), Span("paragraph", "five six"))),
    ]
    assert count_words(blocks) == 6


def test_adjacent_spans_do_not_merge_words():
    block = ContentBlock(heading="h", body=(Span("paragraph", "end"), Span("paragraph", "start")))
    assert count_words([block]) == 2


@pytest.mark.parametrize("smaller,larger", [(0, 1), (150, 200), (200, 201), (399, 1000)])
def test_reading_time_is_monotonic_in_word_count(smaller, larger):
    assert estimate_reading_minutes(_words(larger)) >= estimate_reading_minutes(_words(smaller))


def test_reading_speed_is_two_hundred_words_per_minute():
    assert WORDS_PER_MINUTE == 200
