"""Value objects for article listings, article bodies and navigation.

Everything here is immutable: values are replaced wholesale on refetch and
never mutated locally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

# Opaque continuation token (a Prismic ``next_page`` URL); None ends the collection.
PageCursor = str


@dataclass(frozen=True)
class ArticleSummary:
    """Lightweight listing representation of an article.

    Attributes:
        id: Document UID, stable and externally assigned.
        published_at: First publication time, or None for drafts.
        title: Article title.
        subtitle: Short teaser shown in listings.
        author: Author display name.
    """

    id: str
    published_at: Optional[datetime]
    title: str
    subtitle: str = ""
    author: str = ""


@dataclass(frozen=True)
class Span:
    """One rich-text fragment (paragraph, heading, list item...)."""

    kind: str
    text: str


@dataclass(frozen=True)
class ContentBlock:
    heading: str
    body: Tuple[Span, ...] = ()


@dataclass(frozen=True)
class ArticleDetail:
    """Full article: identity, banner, edit time and rich-text content."""

    id: str
    published_at: Optional[datetime]
    title: str
    subtitle: str = ""
    author: str = ""
    banner_url: Optional[str] = None
    last_edited_at: Optional[datetime] = None
    content: Tuple[ContentBlock, ...] = ()

    @property
    def was_edited(self) -> bool:
        """True only when both timestamps are known and differ."""
        if self.published_at is None or self.last_edited_at is None:
            return False
        return self.last_edited_at != self.published_at

    def summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            published_at=self.published_at,
            title=self.title,
            subtitle=self.subtitle,
            author=self.author,
        )


@dataclass(frozen=True)
class Page:
    """A single page returned by the content gateway."""

    items: Tuple[ArticleSummary, ...] = ()
    next_cursor: Optional[PageCursor] = None


@dataclass(frozen=True)
class ListingState:
    """Accumulated listing: items in fetch order plus the next cursor."""

    items: Tuple[ArticleSummary, ...] = ()
    cursor: Optional[PageCursor] = None

    @property
    def has_more(self) -> bool:
        return self.cursor is not None

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self.items)


@dataclass(frozen=True)
class ArticleRef:
    id: str
    title: str


@dataclass(frozen=True)
class NavigationResult:
    """Chronological neighbours of an article; either side may be absent."""

    previous: Optional[ArticleRef] = None
    next: Optional[ArticleRef] = None


class Ordering(Enum):
    """Result orderings the core asks the gateway for."""

    SOURCE_DEFAULT = "source_default"
    PUBLISHED_ASCENDING = "published_ascending"


@dataclass(frozen=True)
class Predicate:
    """Store-agnostic query predicate.

    ``operator`` is one of ``"type"``, ``"published_before"`` or
    ``"published_after"``; gateways translate it into their own query syntax.
    """

    operator: str
    value: object = field(default=None)


def document_type(name: str) -> Predicate:
    return Predicate("type", name)


def published_before(instant: datetime) -> Predicate:
    """Documents first published strictly before *instant*."""
    return Predicate("published_before", instant)


def published_after(instant: datetime) -> Predicate:
    """Documents first published strictly after *instant*."""
    return Predicate("published_after", instant)


__all__ = [
    "PageCursor",
    "ArticleSummary",
    "Span",
    "ContentBlock",
    "ArticleDetail",
    "Page",
    "ListingState",
    "ArticleRef",
    "NavigationResult",
    "Ordering",
    "Predicate",
    "document_type",
    "published_before",
    "published_after",
]
