"""
SQLite database layer for the product transactions system.

Holds the `transactions` table seeded from the upstream product feed and
provides the filtered and aggregate reads behind the HTTP API. Rows are only
ever inserted (insert-or-ignore on id); nothing updates or deletes them.

Usage:
    from database import DatabaseManager
    db = DatabaseManager("data/roxiler.db")
    db.insert_if_absent({"id": 1, "title": "...", ...})
    db.month_statistics("03")
"""

import os
import sqlite3

from models import PRICE_BUCKETS


BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")
DEFAULT_DB_PATH = os.path.join(DATA_DIR, "roxiler.db")

TRANSACTION_COLUMNS = (
    "id", "title", "price", "description", "category", "image", "sold", "dateOfSale",
)


# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id          INTEGER PRIMARY KEY,
    title       TEXT,
    price       REAL,
    description TEXT,
    category    TEXT,
    image       TEXT,
    sold        BOOLEAN,
    dateOfSale  TEXT
);

CREATE INDEX IF NOT EXISTS idx_tx_category ON transactions(category);
"""

MONTH_CLAUSE = "strftime('%m', dateOfSale) = ?"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DatabaseManager:
    """SQLite database manager for product transactions."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        self.db_path = db_path
        # Shared with FastAPI's threadpool; reads only after ingestion.
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.row_factory = sqlite3.Row
        self.ensure_schema()

    def ensure_schema(self):
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self):
        self.conn.close()

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def insert_if_absent(self, record: dict) -> bool:
        """
        Insert one transaction, ignoring it if the id already exists.

        Returns:
            True if a new row was written, False on an id conflict
        """
        sql = """
            INSERT OR IGNORE INTO transactions
                (id, title, price, description, category, image, sold, dateOfSale)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        row = tuple(record.get(col) for col in TRANSACTION_COLUMNS)
        with self.conn:
            cur = self.conn.execute(sql, row)
        return cur.rowcount == 1

    def count_transactions(self) -> int:
        cur = self.conn.execute("SELECT COUNT(*) FROM transactions")
        return cur.fetchone()[0]

    # ------------------------------------------------------------------
    # Filtered reads
    # ------------------------------------------------------------------

    def query_transactions(
        self,
        numeric_month: str,
        search: str = "",
        limit: int = 10,
        offset: int = 0,
    ) -> list[dict]:
        """
        Rows for a month, optionally narrowed by a substring search over
        title, description and price. Storage order, LIMIT/OFFSET paged.
        """
        conditions = [MONTH_CLAUSE]
        params = [numeric_month]

        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                "(title LIKE ? ESCAPE '\\' "
                "OR description LIKE ? ESCAPE '\\' "
                "OR price LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])

        sql = f"""
            SELECT * FROM transactions
            WHERE {' AND '.join(conditions)}
            LIMIT ? OFFSET ?
        """
        params.extend([limit, offset])

        cur = self.conn.execute(sql, params)
        return [dict(r) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def month_statistics(self, numeric_month: str) -> dict:
        """Sale total, row count and unsold count for a month."""
        sql = f"""
            SELECT
                COALESCE(SUM(price), 0) AS total_sale_amount,
                COUNT(*) AS total_items,
                COUNT(CASE WHEN sold = 0 THEN 1 END) AS total_not_sold
            FROM transactions
            WHERE {MONTH_CLAUSE}
        """
        cur = self.conn.execute(sql, (numeric_month,))
        return dict(cur.fetchone())

    def price_bucket_counts(self, numeric_month: str) -> dict[str, int]:
        """
        Count rows of a month per price bucket. Every bucket label is present,
        in PRICE_BUCKETS order, with 0 for empty buckets.

        Only numeric, non-negative prices are bucketed; rows with a NULL, text
        or negative price are left out of every bucket.
        """
        whens = []
        params = []
        prev_high = None
        for label, _low, high in PRICE_BUCKETS:
            if high is None:
                whens.append("WHEN price > ? THEN ?")
                params.extend([prev_high, label])
            else:
                whens.append("WHEN price <= ? THEN ?")
                params.extend([high, label])
            prev_high = high
        params.append(numeric_month)

        sql = f"""
            SELECT
                CASE {' '.join(whens)} END AS bucket,
                COUNT(*) AS item_count
            FROM transactions
            WHERE {MONTH_CLAUSE}
              AND typeof(price) IN ('integer', 'real')
              AND price >= 0
            GROUP BY bucket
        """
        cur = self.conn.execute(sql, params)
        found = {r["bucket"]: r["item_count"] for r in cur.fetchall()}
        return {label: found.get(label, 0) for label, _low, _high in PRICE_BUCKETS}

    def category_counts(self, numeric_month: str) -> dict[str, int]:
        """Count rows of a month grouped by category."""
        sql = f"""
            SELECT category, COUNT(*) AS item_count
            FROM transactions
            WHERE {MONTH_CLAUSE}
            GROUP BY category
        """
        cur = self.conn.execute(sql, (numeric_month,))
        return {r["category"]: r["item_count"] for r in cur.fetchall()}

    # ------------------------------------------------------------------
    # Generic query
    # ------------------------------------------------------------------

    def query(self, sql: str, params: tuple = ()) -> list[dict]:
        """Execute a raw SQL query and return results as list of dicts."""
        cur = self.conn.execute(sql, params)
        return [dict(r) for r in cur.fetchall()]
