"""
Prismic REST API v2 client implementing the content gateway.

Prismic serves documents from ``{endpoint}/documents/search`` against a
content *ref*: the master ref for published content, or a preview ref that
exposes drafts. Paged responses carry a ready-made ``next_page`` URL which is
used as the listing cursor.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import requests

from ..errors import FetchFailure, NotFound
from ..http_client import RetryableHTTPClient
from ..models import (
    ArticleDetail,
    ArticleSummary,
    ContentBlock,
    Ordering,
    Page,
    PageCursor,
    Predicate,
    Span,
)

logger = logging.getLogger(__name__)

PRISMIC_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
PUBLICATION_DATE_PATH = "document.first_publication_date"
ASCENDING_BY_PUBLICATION = f"[{PUBLICATION_DATE_PATH}]"


def parse_prismic_date(value: Optional[str]) -> Optional[datetime]:
    """Parse Prismic's ``2021-03-25T19:25:28+0000`` timestamps.

    Raises:
        ValueError: If *value* is not a Prismic timestamp
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected a timestamp string, got {value!r}")
    return datetime.strptime(value, PRISMIC_DATE_FORMAT)


def _to_millis(instant: datetime) -> int:
    return int(instant.timestamp() * 1000)


def render_predicate(predicate: Predicate) -> str:
    """Translate a store-agnostic predicate into Prismic query syntax.

    Examples:
        >>> render_predicate(Predicate("type", "posts"))
        '[at(document.type, "posts")]'
    """
    if predicate.operator == "type":
        return f"[at(document.type, {json.dumps(predicate.value)})]"
    if predicate.operator == "published_before":
        return f"[date.before({PUBLICATION_DATE_PATH}, {_to_millis(predicate.value)})]"
    if predicate.operator == "published_after":
        return f"[date.after({PUBLICATION_DATE_PATH}, {_to_millis(predicate.value)})]"
    raise ValueError(f"Unsupported predicate operator: {predicate.operator}")


def render_query(predicates: Sequence[Predicate]) -> str:
    return "[" + "".join(render_predicate(p) for p in predicates) + "]"


def _plain(value: Any) -> str:
    """Key-text fields arrive as strings; rich-text titles as block lists."""
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(block.get("text", "")) for block in value)
    return str(value)


def decode_summary(doc: Dict[str, Any]) -> ArticleSummary:
    data = doc.get("data") or {}
    return ArticleSummary(
        id=doc["uid"],
        published_at=parse_prismic_date(doc.get("first_publication_date")),
        title=_plain(data.get("title")),
        subtitle=_plain(data.get("subtitle")),
        author=_plain(data.get("author")),
    )


def decode_detail(doc: Dict[str, Any]) -> ArticleDetail:
    """Decode a full Prismic document into an ArticleDetail."""
    data = doc.get("data") or {}
    blocks = []
    for group in data.get("content") or []:
        body = tuple(
            Span(kind=str(item.get("type", "paragraph")), text=str(item.get("text", "")))
            for item in group.get("body") or []
        )
        blocks.append(ContentBlock(heading=_plain(group.get("heading")), body=body))

    return ArticleDetail(
        id=doc["uid"],
        published_at=parse_prismic_date(doc.get("first_publication_date")),
        title=_plain(data.get("title")),
        subtitle=_plain(data.get("subtitle")),
        author=_plain(data.get("author")),
        banner_url=(data.get("banner") or {}).get("url"),
        last_edited_at=parse_prismic_date(doc.get("last_publication_date")),
        content=tuple(blocks),
    )


def decode_page(payload: Dict[str, Any]) -> Page:
    """Decode a search response into a Page.

    Raises:
        FetchFailure: If the payload is not a well-formed Prismic page
    """
    try:
        results = payload["results"]
        if not isinstance(results, list):
            raise TypeError(f"'results' is {type(results).__name__}, not a list")
        items = tuple(decode_summary(doc) for doc in results)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise FetchFailure(f"Malformed page payload: {e}") from e
    return Page(items=items, next_cursor=payload.get("next_page") or None)


class PrismicGateway:
    """Content gateway backed by a Prismic repository.

    Args:
        endpoint: API root, e.g. ``https://<repo>.cdn.prismic.io/api/v2``
        document_type: Custom type holding the articles (default: ``posts``)
        access_token: Optional API token for private repositories
        http: Optional RetryableHTTPClient; one is created when omitted
    """

    def __init__(
        self,
        endpoint: str,
        *,
        document_type: str = "posts",
        access_token: Optional[str] = None,
        http: Optional[RetryableHTTPClient] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.document_type = document_type
        self.access_token = access_token
        self.http = http or RetryableHTTPClient()
        self._master_ref: Optional[str] = None
        self._ref_lock = threading.Lock()

    def _auth_params(self) -> Dict[str, str]:
        return {"access_token": self.access_token} if self.access_token else {}

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            r = self.http.get_with_retry(url, params=params)
        except requests.RequestException as e:
            raise FetchFailure(f"Request to {url} failed: {e}") from e
        if r is None:
            raise FetchFailure(f"Request to {url} returned 404")
        try:
            payload = r.json()
        except ValueError as e:
            raise FetchFailure(f"Response from {url} is not JSON: {e}") from e
        if not isinstance(payload, dict):
            raise FetchFailure(f"Response from {url} is not a JSON object")
        return payload

    def master_ref(self) -> str:
        """Return the repository's master ref, fetched once per gateway."""
        with self._ref_lock:
            if self._master_ref is None:
                payload = self._get_json(self.endpoint, self._auth_params())
                for ref in payload.get("refs") or []:
                    if isinstance(ref, dict) and ref.get("isMasterRef"):
                        self._master_ref = ref.get("ref")
                        break
                if not self._master_ref:
                    raise FetchFailure(f"No master ref advertised by {self.endpoint}")
                logger.debug("Using master ref %s", self._master_ref)
        return self._master_ref

    def _search(
        self,
        q: str,
        *,
        ordering: Ordering = Ordering.SOURCE_DEFAULT,
        page_size: Optional[int] = None,
        preview_ref: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "ref": preview_ref if preview_ref else self.master_ref(),
            "q": q,
        }
        if ordering is Ordering.PUBLISHED_ASCENDING:
            params["orderings"] = ASCENDING_BY_PUBLICATION
        if page_size:
            params["pageSize"] = int(page_size)
        params.update(self._auth_params())
        logger.debug("Searching %s q=%s preview=%s", self.endpoint, q, bool(preview_ref))
        return self._get_json(f"{self.endpoint}/documents/search", params)

    def query(
        self,
        predicates: Sequence[Predicate],
        *,
        ordering: Ordering = Ordering.SOURCE_DEFAULT,
        page_size: Optional[int] = None,
        preview_ref: Optional[str] = None,
    ) -> Page:
        payload = self._search(
            render_query(predicates),
            ordering=ordering,
            page_size=page_size,
            preview_ref=preview_ref,
        )
        return decode_page(payload)

    def fetch_page(self, cursor: PageCursor, *, preview_ref: Optional[str] = None) -> Page:
        # next_page already embeds the ref the listing was opened with
        logger.debug("Fetching next page %s preview=%s", cursor, bool(preview_ref))
        return decode_page(self._get_json(cursor))

    def get_by_id(self, article_id: str, *, preview_ref: Optional[str] = None) -> ArticleDetail:
        q = f"[[at(my.{self.document_type}.uid, {json.dumps(article_id)})]]"
        payload = self._search(q, page_size=1, preview_ref=preview_ref)
        try:
            results = payload["results"]
            if not results:
                raise NotFound(article_id)
            return decode_detail(results[0])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FetchFailure(f"Malformed document payload for '{article_id}': {e}") from e

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
