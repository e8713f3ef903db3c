"""
Command context for shared initialization across CLI commands.

Loads and validates the configuration and builds the Prismic gateway so
command implementations only deal with listings and articles.
"""

from __future__ import annotations

import logging
from typing import Optional

from .apis.prismic_client import PrismicGateway
from .config import ConfigManager
from .http_client import RetryableHTTPClient


logger = logging.getLogger(__name__)


class CommandContext:
    """Encapsulates config loading and gateway construction.

    Example:
        ```python
        with CommandContext(config_path) as ctx:
            page = ctx.gateway.query(...)
        ```
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize command context with config and gateway.

        Args:
            config_path: Path to main config file (None = use default)

        Raises:
            ValueError: If configuration is invalid
        """
        self.config_manager = ConfigManager(config_path)

        if not self.config_manager.validate_config():
            raise ValueError("Invalid configuration. Run 'prismic-reader status' for details.")

        settings = self.config_manager.get_prismic_settings()
        self.document_type = settings['document_type']
        self.page_size = self.config_manager.get_page_size()

        http = RetryableHTTPClient(
            rps=float(settings.get('rps', 5.0)),
            max_retries=int(settings.get('max_retries', 3)),
            timeout=float(settings.get('timeout', 15)),
        )
        self.gateway = PrismicGateway(
            settings['endpoint'],
            document_type=self.document_type,
            access_token=settings.get('access_token'),
            http=http,
        )

        logger.debug("CommandContext initialized with config from %s", self.config_manager.config_path)

    def close(self) -> None:
        self.gateway.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
