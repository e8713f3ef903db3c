"""
Previous/next resolution by publication order.

The previous article is the last of the articles published strictly before
the target (ascending order); the next article is the first of those published
strictly after it. Articles sharing the target's exact timestamp are excluded
from both sides.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..core.errors import FetchFailure, PreconditionViolation
from ..core.gateway import ContentGateway
from ..core.models import (
    ArticleDetail,
    ArticleRef,
    ArticleSummary,
    NavigationResult,
    Ordering,
    published_after,
    published_before,
)

logger = logging.getLogger(__name__)


def pick_previous(results: Sequence[ArticleSummary]) -> Optional[ArticleRef]:
    """Closest earlier article: the last item of an ascending "before" set."""
    if not results:
        return None
    last = results[-1]
    return ArticleRef(id=last.id, title=last.title)


def pick_next(results: Sequence[ArticleSummary]) -> Optional[ArticleRef]:
    """Closest later article: the first item of an ascending "after" set."""
    if not results:
        return None
    first = results[0]
    return ArticleRef(id=first.id, title=first.title)


def _fetch_before(gateway: ContentGateway, target: ArticleDetail, preview_ref: Optional[str]) -> List[ArticleSummary]:
    # The closest earlier article sits at the very end of the ascending set,
    # so every page has to be read.
    page = gateway.query(
        [published_before(target.published_at)],
        ordering=Ordering.PUBLISHED_ASCENDING,
        preview_ref=preview_ref,
    )
    items = list(page.items)
    seen = set()
    while page.next_cursor is not None:
        if page.next_cursor in seen:
            raise FetchFailure(f"Cursor {page.next_cursor!r} repeated while reading earlier articles")
        seen.add(page.next_cursor)
        page = gateway.fetch_page(page.next_cursor, preview_ref=preview_ref)
        items.extend(page.items)
    return items


def _fetch_after(gateway: ContentGateway, target: ArticleDetail, preview_ref: Optional[str]) -> List[ArticleSummary]:
    page = gateway.query(
        [published_after(target.published_at)],
        ordering=Ordering.PUBLISHED_ASCENDING,
        preview_ref=preview_ref,
    )
    return list(page.items)


async def resolve_adjacent(
    target: ArticleDetail,
    gateway: ContentGateway,
    *,
    preview_ref: Optional[str] = None,
) -> NavigationResult:
    """Resolve the chronological neighbours of *target*.

    Both lookups run concurrently and are combined once both have finished.

    Raises:
        PreconditionViolation: If *target* has no publication date (draft)
        FetchFailure: If either lookup fails; when both fail the raised error
            carries both causes in ``errors``
    """
    if target.published_at is None:
        raise PreconditionViolation(f"Article '{target.id}' is unpublished; it has no neighbours")

    before, after = await asyncio.gather(
        asyncio.to_thread(_fetch_before, gateway, target, preview_ref),
        asyncio.to_thread(_fetch_after, gateway, target, preview_ref),
        return_exceptions=True,
    )

    failures = [r for r in (before, after) if isinstance(r, BaseException)]
    if len(failures) == 2:
        raise FetchFailure(
            f"Both neighbour lookups failed for '{target.id}': {failures[0]}; {failures[1]}",
            errors=failures,
        ) from failures[0]
    if failures:
        raise failures[0]

    result = NavigationResult(previous=pick_previous(before), next=pick_next(after))
    logger.debug(
        "Neighbours of %s: previous=%s next=%s",
        target.id,
        result.previous.id if result.previous else None,
        result.next.id if result.next else None,
    )
    return result


class ArticleNavigator:
    """Binds a gateway and preview ref for repeated neighbour lookups."""

    def __init__(self, gateway: ContentGateway, preview_ref: Optional[str] = None):
        self.gateway = gateway
        self.preview_ref = preview_ref

    async def resolve(self, target: ArticleDetail) -> NavigationResult:
        return await resolve_adjacent(target, self.gateway, preview_ref=self.preview_ref)
