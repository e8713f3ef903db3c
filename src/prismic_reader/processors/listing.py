"""
Incremental article listing.

A listing starts from one page returned by the gateway and grows at the tail
as further pages are loaded through the page cursor. Each load produces a new
ListingState via ``append_page``; the previous state is never modified.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..core.errors import FetchFailure, PreconditionViolation
from ..core.gateway import ContentGateway
from ..core.models import ListingState, Page, document_type

logger = logging.getLogger(__name__)


def append_page(state: ListingState, page: Page) -> ListingState:
    """Return the state obtained by appending *page* to *state*.

    Items are appended in page order and the cursor is replaced by the page's
    cursor (None once the source reports the end of the collection).

    Raises:
        FetchFailure: If the page repeats an article already in the listing
    """
    seen = set(state.ids)
    for item in page.items:
        if item.id in seen:
            raise FetchFailure(f"Page repeats article '{item.id}' already in the listing")
        seen.add(item.id)
    return ListingState(items=state.items + tuple(page.items), cursor=page.next_cursor)


class PaginatedListing:
    """Growing, order-preserving listing driven by a single consumer.

    ``load_next`` must not be called again before the previous call finishes;
    overlapping calls are rejected with PreconditionViolation.
    """

    def __init__(
        self,
        gateway: ContentGateway,
        initial: ListingState,
        *,
        preview_ref: Optional[str] = None,
    ):
        self.gateway = gateway
        self.preview_ref = preview_ref
        self._state = initial
        self._loading = False

    @classmethod
    async def open(
        cls,
        gateway: ContentGateway,
        *,
        document_type_name: str,
        page_size: int,
        preview_ref: Optional[str] = None,
    ) -> "PaginatedListing":
        """Run the initial listing query and wrap its first page."""
        page = await asyncio.to_thread(
            gateway.query,
            [document_type(document_type_name)],
            page_size=page_size,
            preview_ref=preview_ref,
        )
        logger.debug("Opened '%s' listing with %d item(s)", document_type_name, len(page.items))
        return cls(gateway, append_page(ListingState(), page), preview_ref=preview_ref)

    def current(self) -> ListingState:
        return self._state

    def has_more(self) -> bool:
        return self._state.has_more

    async def load_next(self) -> ListingState:
        """Fetch the next page and append it.

        The state is replaced only after the page has been fetched and merged;
        on failure it is left exactly as it was.

        Raises:
            PreconditionViolation: If the listing is exhausted or a load is in flight
            FetchFailure: If the page cannot be fetched or decoded
        """
        if self._loading:
            raise PreconditionViolation("load_next() is already in progress for this listing")
        state = self._state
        if state.cursor is None:
            raise PreconditionViolation("Listing has no more pages to load")

        self._loading = True
        try:
            page = await asyncio.to_thread(
                self.gateway.fetch_page, state.cursor, preview_ref=self.preview_ref
            )
            new_state = append_page(state, page)
        finally:
            self._loading = False

        self._state = new_state
        logger.debug(
            "Loaded %d item(s); listing now holds %d, more=%s",
            len(page.items), len(new_state.items), new_state.has_more,
        )
        return new_state

    async def load_all(self, max_pages: Optional[int] = None) -> ListingState:
        """Keep loading pages while the source has more (up to *max_pages*)."""
        loaded = 0
        while self.has_more() and (max_pages is None or loaded < max_pages):
            await self.load_next()
            loaded += 1
        return self._state
