"""
Configuration management for the Product Transactions API.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR: Path = Path(__file__).parent.parent

load_dotenv(BASE_DIR / ".env")


class Settings:
    """API server configuration."""

    # Paths
    BASE_DIR: Path = BASE_DIR
    DB_PATH: str = os.getenv("TRANSACTIONS_DB_PATH", str(BASE_DIR / "data" / "roxiler.db"))

    # Server
    API_TITLE: str = "Product Transactions API"
    API_DESCRIPTION: str = "Listing, statistics and chart data for product sale transactions"
    API_VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Upstream feed, fetched once at startup
    FEED_URL: str = os.getenv(
        "PRODUCT_FEED_URL",
        "https://s3.amazonaws.com/roxiler.com/product_transaction.json",
    )
    FEED_TIMEOUT: float = float(os.getenv("FEED_TIMEOUT", "30"))


settings = Settings()
