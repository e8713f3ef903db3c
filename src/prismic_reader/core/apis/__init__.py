"""
API client modules for content stores.

Currently provides the Prismic REST API v2 gateway.
"""

from .prismic_client import PrismicGateway, decode_detail, decode_page, render_query

__all__ = [
    'PrismicGateway',
    'decode_detail',
    'decode_page',
    'render_query',
]
