"""
Product transaction feed provider.

Fetches the upstream JSON document (an array of transaction-shaped objects)
that seeds the local database. One request, no pagination, no API key.
"""

import logging
import os
from typing import Dict, List, Optional

from utils.session import RequestSession

logger = logging.getLogger(__name__)

FEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


class ProductFeedProvider:
    """Provider for the product transaction feed."""

    def __init__(self, url: Optional[str] = None, timeout: float = 30):
        self.url = url or os.getenv("PRODUCT_FEED_URL", FEED_URL)
        self.session = RequestSession(timeout=timeout)
        self.name = "product_feed"

    def fetch_transactions(self) -> List[Dict]:
        """
        Fetch the full transaction feed.

        Elements are returned as-is; shape validation is left to insertion.

        Raises:
            RuntimeError: request failed or the payload is not a JSON array
        """
        resp = self.session.get(self.url)
        if not resp:
            raise RuntimeError(f"Failed to fetch product feed from {self.url}")

        try:
            data = resp.json()
        except ValueError as e:
            raise RuntimeError(f"Product feed is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise RuntimeError(
                f"Unexpected product feed payload: expected array, got {type(data).__name__}"
            )

        logger.debug(f"Fetched {len(data)} records from {self.url}")
        return data

    def close(self):
        self.session.close()
