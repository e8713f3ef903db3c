"""
Content gateway interface using Python Protocol for structural subtyping.

The listing and the navigator depend only on this interface; the Prismic
implementation lives in ``core.apis.prismic_client`` and tests supply an
in-memory one.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from .models import ArticleDetail, Ordering, Page, PageCursor, Predicate


@runtime_checkable
class ContentGateway(Protocol):
    """Query capability over a headless content store.

    ``preview_ref`` is an opaque token. When present the store must resolve
    draft content as if it were published; when absent only public content is
    visible. Callers pass it through unchanged and never inspect it.
    """

    def query(
        self,
        predicates: Sequence[Predicate],
        *,
        ordering: Ordering = Ordering.SOURCE_DEFAULT,
        page_size: Optional[int] = None,
        preview_ref: Optional[str] = None,
    ) -> Page:
        """Return the first page of documents matching every predicate.

        Args:
            predicates: Conditions combined with AND
            ordering: Requested ordering (store default when SOURCE_DEFAULT)
            page_size: Items per page (store default when None)
            preview_ref: Optional preview token

        Raises:
            FetchFailure: On transport or decoding errors
        """
        ...

    def fetch_page(self, cursor: PageCursor, *, preview_ref: Optional[str] = None) -> Page:
        """Return the page identified by *cursor*, which is passed back unmodified.

        Raises:
            FetchFailure: On transport or decoding errors
        """
        ...

    def get_by_id(self, article_id: str, *, preview_ref: Optional[str] = None) -> ArticleDetail:
        """Fetch one article by its identifier.

        Raises:
            NotFound: If no article has that identifier
            FetchFailure: On transport or decoding errors
        """
        ...
