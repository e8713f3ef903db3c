"""Configuration management for the YAML config file."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml

from .paths import default_config_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = default_config_path()
DEFAULT_PAGE_SIZE = 2

_DEFAULT_CONFIG_TEMPLATE = """# Auto-generated default configuration for prismic-reader
prismic:
  endpoint: "https://spacetraveling.cdn.prismic.io/api/v2"
  document_type: "posts"
  access_token_env: "PRISMIC_ACCESS_TOKEN"
  rps: 5.0
  max_retries: 3
  timeout: 15

listing:
  page_size: 2
"""


def _write_template(path: Path, content: str) -> None:
    """Write templated YAML content to disk with a trailing newline."""
    path.write_text(content.strip() + "\n", encoding="utf-8")


class ConfigManager:
    """Manages loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the manager and make sure a config file exists."""
        path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = path.resolve()
        self.config_path = str(path)
        self.base_dir = str(path.parent)
        self._config = None
        self._ensure_default_config()

    def load_config(self) -> Dict[str, Any]:
        """Load the main configuration file."""
        if self._config is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info("Loaded configuration from %s", self.config_path)
            except Exception as e:
                logger.error("Failed to load config from %s: %s", self.config_path, e)
                raise

        return self._config

    def _ensure_default_config(self) -> None:
        """Create the default configuration file if it is missing."""
        config_file = Path(self.config_path)
        if config_file.exists():
            return
        config_file.parent.mkdir(parents=True, exist_ok=True)
        _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
        logger.info("Created default config.yaml at %s", config_file)

    def get_prismic_settings(self) -> Dict[str, Any]:
        """Return the ``prismic`` section with the access token resolved from the environment."""
        section = dict(self.load_config().get('prismic') or {})
        token_env = section.get('access_token_env') or "PRISMIC_ACCESS_TOKEN"
        section['access_token'] = os.environ.get(token_env) or section.get('access_token')
        section.setdefault('document_type', 'posts')
        return section

    def get_page_size(self) -> int:
        listing = self.load_config().get('listing') or {}
        return int(listing.get('page_size', DEFAULT_PAGE_SIZE))

    def validate_config(self) -> bool:
        """Validate the configuration file."""
        try:
            config = self.load_config()

            prismic = config.get('prismic')
            if not isinstance(prismic, dict):
                logger.error("Missing required section 'prismic' in config")
                return False

            endpoint = prismic.get('endpoint')
            parsed = urlparse(endpoint) if isinstance(endpoint, str) else None
            if parsed is None or parsed.scheme not in ('http', 'https') or not parsed.netloc:
                logger.error("'prismic.endpoint' must be an http(s) URL, got %r", endpoint)
                return False

            doc_type = prismic.get('document_type', 'posts')
            if not isinstance(doc_type, str) or not doc_type.strip():
                logger.error("'prismic.document_type' must be a non-empty string")
                return False

            for key in ('rps', 'max_retries', 'timeout'):
                value = prismic.get(key)
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                    logger.error("'prismic.%s' must be a positive number", key)
                    return False

            listing = config.get('listing') or {}
            if not isinstance(listing, dict):
                logger.error("'listing' must be a mapping")
                return False
            page_size = listing.get('page_size', DEFAULT_PAGE_SIZE)
            if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
                logger.error("'listing.page_size' must be a positive integer")
                return False

            logger.info("Configuration validation passed")
            return True

        except Exception as e:
            logger.error("Configuration validation failed: %s", e)
            return False


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_PAGE_SIZE",
]
