"""
Thin requests.Session wrapper shared by the data providers.

`get` never raises for network or HTTP errors: it logs the failure and
returns None, so callers test the result the same way for every source.
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "product-transactions-api/1.0",
    "Accept": "application/json",
}


class RequestSession:
    """Shared HTTP session with default headers and a per-request timeout."""

    def __init__(self, timeout: float = 30, headers: Optional[dict] = None):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        if headers:
            self.session.headers.update(headers)

    def get(self, url: str, params: Optional[dict] = None) -> Optional[requests.Response]:
        """GET a URL. Returns the response on 2xx, otherwise None."""
        try:
            res = self.session.get(url, params=params, timeout=self.timeout)
            res.raise_for_status()
            return res
        except requests.RequestException as e:
            logger.error(f"GET {url} failed: {e}")
            return None

    def close(self):
        self.session.close()
