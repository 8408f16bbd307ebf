"""
Pydantic data models for the product transactions system.

Defines the Transaction entity stored in SQLite and the shared query
vocabulary (month abbreviations, price buckets) used by the API layer.
"""

from pydantic import BaseModel, Field
from typing import Optional


# ---------------------------------------------------------------------------
# Query vocabulary
# ---------------------------------------------------------------------------

MONTH_ABBREVIATIONS = {
    "Jan": "01",
    "Feb": "02",
    "Mar": "03",
    "Apr": "04",
    "May": "05",
    "Jun": "06",
    "Jul": "07",
    "Aug": "08",
    "Sep": "09",
    "Oct": "10",
    "Nov": "11",
    "Dec": "12",
}

DEFAULT_MONTH = "Mar"

# (label, low, high) -- high=None means open-ended upward
PRICE_BUCKETS = [
    ("0-100", 0, 100),
    ("101-200", 101, 200),
    ("201-300", 201, 300),
    ("301-400", 301, 400),
    ("401-500", 401, 500),
    ("501-600", 501, 600),
    ("601-700", 601, 700),
    ("701-800", 701, 800),
    ("801-900", 801, 900),
    ("901-above", 901, None),
]


class InvalidMonthError(ValueError):
    """Raised when a month filter is not one of the twelve abbreviations."""

    message = "Invalid month abbreviation"

    def __init__(self, month: Optional[str] = None):
        self.month = month
        super().__init__(self.message)


def resolve_month(month: Optional[str]) -> str:
    """
    Map a three-letter month abbreviation to its two-digit numeric string.

    Raises:
        InvalidMonthError: for None, empty, or unrecognized input
    """
    if month is None or month not in MONTH_ABBREVIATIONS:
        raise InvalidMonthError(month)
    return MONTH_ABBREVIATIONS[month]


# ---------------------------------------------------------------------------
# Core Entities
# ---------------------------------------------------------------------------

class Transaction(BaseModel):
    """
    One product sale record as published by the upstream feed.
    Field names follow the feed, including camelCase dateOfSale.
    """
    id: int
    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    sold: Optional[bool] = None
    dateOfSale: Optional[str] = Field(default=None, description="ISO timestamp of the sale")


class IngestSummary(BaseModel):
    """Outcome counts of one feed load."""
    fetched: int = 0
    inserted: int = 0
    skipped: int = 0
    failed: int = 0
