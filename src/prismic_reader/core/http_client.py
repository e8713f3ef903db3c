"""Shared HTTP client with retry logic and rate limiting."""

import logging
import threading
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class RetryableHTTPClient:
    """HTTP client with exponential backoff retry logic and rate limiting.

    Retries throttling and server errors (429, 500, 502, 503, 504) with
    exponential backoff, respects Retry-After headers, and enforces a minimum
    interval between requests.

    Args:
        rps: Maximum requests per second (default: 5.0)
        max_retries: Maximum number of attempts per request (default: 3)
        timeout: Request timeout in seconds (default: 15)
    """

    def __init__(self, rps: float = 5.0, max_retries: int = 3, timeout: float = 15):
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.rps = rps
        self.max_retries = max(1, int(max_retries))
        self.timeout = timeout
        self.min_interval = 1.0 / max(rps, 0.01)
        self.last_request_time = 0.0
        self._rate_lock = threading.Lock()

    def _rate_limit(self):
        """Enforce rate limiting between requests, across threads sharing the client."""
        with self._rate_lock:
            now = time.time()
            slot = max(now, self.last_request_time + self.min_interval)
            self.last_request_time = slot
        if slot > now:
            time.sleep(slot - now)

    def get_with_retry(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Optional[requests.Response]:
        """Make a GET request, retrying transient failures.

        Args:
            url: URL to fetch
            params: Optional query parameters
            headers: Optional request headers
            timeout: Optional timeout override (uses instance default if None)

        Returns:
            Response object on success, None on 404

        Raises:
            requests.HTTPError: On non-retryable HTTP errors or when every
                attempt hit a retryable status
            requests.RequestException: On network errors after retries exhausted
        """
        timeout = timeout or self.timeout
        last_response = None

        for attempt in range(self.max_retries):
            try:
                self._rate_limit()
                r = self.session.get(url, params=params, headers=headers, timeout=timeout)
            except requests.RequestException as e:
                if attempt < self.max_retries - 1:
                    wait = min(8.0, 2.0 ** attempt)
                    logger.warning("GET %s failed (%s); retrying in %.1fs", url, e, wait)
                    time.sleep(wait)
                    continue
                raise

            if r.status_code == 404:
                return None

            if r.status_code in RETRYABLE_STATUS:
                last_response = r
                if attempt < self.max_retries - 1:
                    wait = self._calculate_backoff_time(r, attempt)
                    logger.warning("GET %s returned %s; retrying in %.1fs", url, r.status_code, wait)
                    time.sleep(wait)
                continue

            r.raise_for_status()
            logger.debug("GET %s -> %s", r.url, r.status_code)
            return r

        raise requests.HTTPError(
            f"Giving up on {url} after {self.max_retries} attempts "
            f"(last status {last_response.status_code})",
            response=last_response,
        )

    def _calculate_backoff_time(self, response: requests.Response, attempt: int) -> float:
        """Calculate backoff time, respecting Retry-After header if present."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return max(float(retry_after), 1.0)
            except (ValueError, TypeError):
                pass
        # 1s, 2s, 4s, capped at 8s
        return min(8.0, 2.0 ** attempt)

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
