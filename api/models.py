"""
Pydantic models for API request/response validation.
Auto-generates OpenAPI documentation.
"""

from pydantic import BaseModel
from models import Transaction


class TransactionResponse(Transaction):
    """Single transaction row."""


class StatisticsResponse(BaseModel):
    """
    Monthly sale statistics.

    totalSoldItems is the count of all rows in the month, not only those
    flagged sold.
    """
    totalSaleAmount: float
    totalSoldItems: int
    totalNotSoldItems: int


class ErrorResponse(BaseModel):
    """Error response."""
    error: str


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    database_path: str
    total_transactions: int
