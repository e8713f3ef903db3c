"""Error taxonomy shared by the gateway, the listing and the navigator."""

from __future__ import annotations

from typing import Sequence


class PrismicReaderError(Exception):
    """Base class for every error raised by prismic_reader."""


class NotFound(PrismicReaderError):
    """Raised when a single-article lookup finds nothing."""

    def __init__(self, article_id: str):
        super().__init__(f"Article '{article_id}' does not exist")
        self.article_id = article_id


class FetchFailure(PrismicReaderError):
    """Raised when a page or query cannot be fetched or decoded.

    ``errors`` holds the underlying exceptions when more than one request
    failed together (both adjacency queries, for instance).
    """

    def __init__(self, message: str, errors: Sequence[BaseException] = ()):
        super().__init__(message)
        self.errors = tuple(errors)


class PreconditionViolation(PrismicReaderError):
    """Raised when an operation is invoked on input it does not accept."""
