"""
Query layer for the product transactions API.
Translates request parameters into reads against the transactions store.
"""

from typing import Dict, List, Optional

from database import DatabaseManager
from models import DEFAULT_MONTH, resolve_month


class TransactionQueryService:
    """
    Read-only queries over the seeded transactions table.

    Every month-consuming operation raises InvalidMonthError for an
    abbreviation outside Jan..Dec. Storage errors propagate unchanged.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    # ----------------------------------------------------------------
    # Listing
    # ----------------------------------------------------------------

    def list_transactions(
        self,
        page: int = 1,
        per_page: int = 10,
        search: str = "",
        month: Optional[str] = DEFAULT_MONTH,
    ) -> List[Dict]:
        """
        List transactions of a month, optionally filtered by a substring
        of title, description or price.

        Args:
            page: 1-based page number
            per_page: page size
            search: substring filter; empty matches everything
            month: three-letter month abbreviation (default 'Mar')

        Returns:
            List of transaction rows in storage order
        """
        numeric_month = resolve_month(month)
        offset = (page - 1) * per_page
        return self.db.query_transactions(
            numeric_month,
            search=search or "",
            limit=per_page,
            offset=offset,
        )

    # ----------------------------------------------------------------
    # Aggregates
    # ----------------------------------------------------------------

    def statistics(self, month: Optional[str]) -> Dict:
        """
        Sale statistics for a month.

        totalSoldItems counts every row of the month regardless of the sold
        flag; totalNotSoldItems counts rows with sold = 0.
        """
        stats = self.db.month_statistics(resolve_month(month))
        return {
            "totalSaleAmount": stats["total_sale_amount"],
            "totalSoldItems": stats["total_items"],
            "totalNotSoldItems": stats["total_not_sold"],
        }

    def bar_chart(self, month: Optional[str]) -> Dict[str, int]:
        """Item count per price range for a month."""
        return self.db.price_bucket_counts(resolve_month(month))

    def pie_chart(self, month: Optional[str]) -> Dict[str, int]:
        """Item count per category for a month."""
        return self.db.category_counts(resolve_month(month))

    def total_count(self) -> int:
        return self.db.count_transactions()
