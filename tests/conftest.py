"""Shared fixtures: an in-memory content gateway and article factories."""

from __future__ import annotations

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure the repository's src/ directory is importable without installation.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from prismic_reader.core.errors import NotFound  # noqa: E402
from prismic_reader.core.models import (  # noqa: E402
    ArticleDetail,
    ContentBlock,
    Ordering,
    Page,
    Span,
)

EPOCH = datetime(2021, 3, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes):
    """Timestamp *minutes* after a fixed epoch."""
    return EPOCH + timedelta(minutes=minutes)


def make_article(uid, minutes, *, title=None, words=0, edited_minutes=None):
    published = at(minutes) if minutes is not None else None
    content = ()
    if words:
        content = (ContentBlock(heading="Body", body=(Span("paragraph", " ".join(["word"] * words)),)),)
    return ArticleDetail(
        id=uid,
        published_at=published,
        title=title or f"Title {uid}",
        subtitle=f"Subtitle {uid}",
        author="Author",
        banner_url=f"https://images.example.com/{uid}.png",
        last_edited_at=at(edited_minutes) if edited_minutes is not None else published,
        content=content,
    )


class InMemoryGateway:
    """Content gateway over a fixed set of articles.

    Evaluates predicates like a content store would, pages results with
    cursor strings and records every call together with its preview ref.
    Articles without a publication date are drafts and only visible when a
    preview ref is supplied.
    """

    def __init__(self, articles, *, default_page_size=20, document_type="posts"):
        self.articles = list(articles)
        self.default_page_size = default_page_size
        self.document_type = document_type
        self.calls = []
        self.failures = {}
        self._result_sets = {}
        self._keys = itertools.count()

    def _visible(self, preview_ref):
        return [a for a in self.articles if a.published_at is not None or preview_ref]

    def _matches(self, predicate, article):
        if predicate.operator == "type":
            return predicate.value == self.document_type
        if article.published_at is None:
            return False
        if predicate.operator == "published_before":
            return article.published_at < predicate.value
        if predicate.operator == "published_after":
            return article.published_at > predicate.value
        raise ValueError(predicate.operator)

    def _page(self, key, offset):
        items, page_size = self._result_sets[key]
        chunk = items[offset:offset + page_size]
        next_offset = offset + page_size
        cursor = f"cursor:{key}:{next_offset}" if next_offset < len(items) else None
        return Page(items=tuple(a.summary() for a in chunk), next_cursor=cursor)

    def query(self, predicates, *, ordering=Ordering.SOURCE_DEFAULT, page_size=None, preview_ref=None):
        self.calls.append(("query", preview_ref))
        for predicate in predicates:
            if predicate.operator in self.failures:
                raise self.failures[predicate.operator]
        items = [a for a in self._visible(preview_ref) if all(self._matches(p, a) for p in predicates)]
        if ordering is Ordering.PUBLISHED_ASCENDING:
            items.sort(key=lambda a: a.published_at)
        else:
            items.sort(key=lambda a: (a.published_at is not None, a.published_at or EPOCH), reverse=True)
        key = next(self._keys)
        self._result_sets[key] = (items, page_size or self.default_page_size)
        return self._page(key, 0)

    def fetch_page(self, cursor, *, preview_ref=None):
        self.calls.append(("fetch_page", preview_ref))
        if "fetch_page" in self.failures:
            raise self.failures["fetch_page"]
        _, key, offset = cursor.split(":")
        return self._page(int(key), int(offset))

    def get_by_id(self, article_id, *, preview_ref=None):
        self.calls.append(("get_by_id", preview_ref))
        for article in self._visible(preview_ref):
            if article.id == article_id:
                return article
        raise NotFound(article_id)


@pytest.fixture
def blog():
    """Five published articles, one minute apart, plus one draft."""
    articles = [make_article(f"post-{n}", n, words=150 * n) for n in range(1, 6)]
    articles.append(make_article("draft", None, words=10))
    return InMemoryGateway(articles)
