"""
Show one article with its reading time and previous/next navigation.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.command_context import CommandContext
from ..core.gateway import ContentGateway
from ..core.models import ArticleDetail, NavigationResult
from ..core.text_utils import as_text, estimate_reading_minutes
from ..processors.navigator import resolve_adjacent

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d %b %Y"
EDITED_FORMAT = "* edited on %d %b %Y, at %H:%M"


@dataclass(frozen=True)
class ArticleView:
    """Everything needed to render an article page."""

    detail: ArticleDetail
    navigation: NavigationResult
    reading_minutes: int
    preview: bool = False


async def build_view(
    gateway: ContentGateway,
    article_id: str,
    *,
    preview_ref: Optional[str] = None,
) -> ArticleView:
    """Fetch an article, resolve its neighbours and estimate its reading time.

    Drafts (only visible in preview mode) have no publication date and are
    shown without navigation.
    """
    detail = await asyncio.to_thread(gateway.get_by_id, article_id, preview_ref=preview_ref)
    if detail.published_at is None:
        logger.info("Article '%s' is a draft; skipping navigation", article_id)
        navigation = NavigationResult()
    else:
        navigation = await resolve_adjacent(detail, gateway, preview_ref=preview_ref)
    return ArticleView(
        detail=detail,
        navigation=navigation,
        reading_minutes=estimate_reading_minutes(detail.content),
        preview=bool(preview_ref),
    )


def render_lines(view: ArticleView) -> List[str]:
    """Plain-text rendering of an ArticleView."""
    detail = view.detail
    published = detail.published_at.strftime(DATE_FORMAT) if detail.published_at else "draft"
    lines = [detail.title]
    if detail.subtitle:
        lines.append(detail.subtitle)
    lines.append(f"{published} | {detail.author} | {view.reading_minutes} min")
    if detail.was_edited:
        lines.append(detail.last_edited_at.strftime(EDITED_FORMAT))
    if detail.banner_url:
        lines.append(f"Banner: {detail.banner_url}")
    for block in detail.content:
        lines.append("")
        lines.append(f"## {block.heading}")
        lines.append(as_text(block.body, separator="\n"))
    lines.append("")
    if view.navigation.previous:
        lines.append(f"Previous post: {view.navigation.previous.title} ({view.navigation.previous.id})")
    if view.navigation.next:
        lines.append(f"Next post: {view.navigation.next.title} ({view.navigation.next.id})")
    if view.preview:
        lines.append("[preview mode]")
    return lines


def run(config_path: str, article_id: str, *, preview_ref: Optional[str] = None) -> ArticleView:
    """Fetch one article and its navigation.

    Raises:
        NotFound: If the article does not exist
        FetchFailure: If a request fails
    """
    with CommandContext(config_path) as ctx:
        return asyncio.run(build_view(ctx.gateway, article_id, preview_ref=preview_ref))
