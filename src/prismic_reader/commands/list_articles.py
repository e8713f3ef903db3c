"""
List published articles page by page.

Opens the listing with the configured page size, then keeps loading pages
until the requested number of pages has been read or the source runs out.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..core.command_context import CommandContext
from ..core.gateway import ContentGateway
from ..core.models import ArticleSummary, ListingState
from ..processors.listing import PaginatedListing

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d %b %Y"


async def collect(
    gateway: ContentGateway,
    *,
    document_type_name: str,
    page_size: int,
    pages: Optional[int] = 1,
    preview_ref: Optional[str] = None,
) -> ListingState:
    """Open a listing and load up to *pages* pages (all pages when None)."""
    listing = await PaginatedListing.open(
        gateway,
        document_type_name=document_type_name,
        page_size=page_size,
        preview_ref=preview_ref,
    )
    remaining = None if pages is None else max(pages - 1, 0)
    return await listing.load_all(max_pages=remaining)


def format_summary(item: ArticleSummary) -> str:
    published = item.published_at.strftime(DATE_FORMAT) if item.published_at else "draft"
    return f"{published} | {item.title} | {item.subtitle} | {item.author} | {item.id}"


def run(
    config_path: str,
    pages: Optional[int] = 1,
    *,
    page_size: Optional[int] = None,
    preview_ref: Optional[str] = None,
) -> ListingState:
    """Fetch the article listing.

    Args:
        config_path: Path to the main configuration file
        pages: Number of pages to load; None loads every page
        page_size: Items per page (defaults to listing.page_size from config)
        preview_ref: Optional preview token threaded through every request

    Returns:
        The accumulated ListingState
    """
    with CommandContext(config_path) as ctx:
        size = page_size or ctx.page_size
        state = asyncio.run(
            collect(
                ctx.gateway,
                document_type_name=ctx.document_type,
                page_size=size,
                pages=pages,
                preview_ref=preview_ref,
            )
        )
    logger.info("Listed %d article(s); more pages: %s", len(state.items), state.has_more)
    return state
