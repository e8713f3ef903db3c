from __future__ import annotations

import logging
from typing import Optional

from .commands import list_articles as list_cmd
from .commands import show_article as show_cmd
from .commands.show_article import ArticleView
from .core.config import DEFAULT_CONFIG_PATH
from .core.errors import FetchFailure, NotFound, PreconditionViolation, PrismicReaderError
from .core.models import ListingState

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = str(DEFAULT_CONFIG_PATH)

__all__ = [
    'list_articles',
    'show_article',
    'ArticleView',
    'ListingState',
    'PrismicReaderError',
    'NotFound',
    'FetchFailure',
    'PreconditionViolation',
]


def list_articles(
    pages: Optional[int] = 1,
    *,
    page_size: Optional[int] = None,
    preview_ref: Optional[str] = None,
    config_path: Optional[str] = None,
) -> ListingState:
    """Fetch the article listing programmatically.

    Args:
        pages: Number of pages to load; None loads all of them.
        page_size: Items per page; defaults to listing.page_size in config.
        preview_ref: Optional Prismic preview ref.
        config_path: Path to main YAML config; defaults to the data dir config.
    """
    return list_cmd.run(config_path or _DEFAULT_CONFIG, pages, page_size=page_size, preview_ref=preview_ref)


def show_article(
    article_id: str,
    *,
    preview_ref: Optional[str] = None,
    config_path: Optional[str] = None,
) -> ArticleView:
    """Fetch one article with its navigation and reading time."""
    return show_cmd.run(config_path or _DEFAULT_CONFIG, article_id, preview_ref=preview_ref)
