"""
Product Feed Seeding Pipeline

Fetches the upstream product transaction feed once and loads it into SQLite
with insert-or-ignore on id, so re-running it is a no-op for known records.
The API server runs this at startup; it can also be run standalone.

Usage:
    python -m sources.product_feed.pipeline                      # Default DB + feed URL
    python -m sources.product_feed.pipeline --db data/other.db   # Specific database file
    python -m sources.product_feed.pipeline --url http://...     # Alternate feed
"""

import argparse
import datetime
import os
import sys
from pathlib import Path
from typing import Optional

sys.path.append(str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv
load_dotenv(os.path.join(Path(__file__).parent.parent.parent, ".env"))

from utils import log
from database import DatabaseManager, DEFAULT_DB_PATH
from models import IngestSummary
from sources.product_feed.provider import ProductFeedProvider

logger = log.setup_verbose_logging("product_feed")


class ProductFeedPipeline:
    """
    One-shot loader from the product feed into the transactions table.

    Records are inserted sequentially. A record that fails to insert is
    logged and counted, and the rest of the batch still loads. A failed
    fetch is raised to the caller.
    """

    def __init__(self, db: DatabaseManager, provider: Optional[ProductFeedProvider] = None):
        self.db = db
        self.provider = provider or ProductFeedProvider()

    def run(self) -> IngestSummary:
        start = datetime.datetime.now()
        log.header("PRODUCT FEED: Seeding transactions")
        log.step(f"Fetching feed from {self.provider.url}")

        records = self.provider.fetch_transactions()
        summary = IngestSummary(fetched=len(records))
        log.info(f"Fetched {len(records)} records")

        log.step(f"Loading into {self.db.db_path}")
        total = len(records)
        for idx, record in enumerate(records, 1):
            self._load_record(record, idx, total, summary)

        elapsed = datetime.datetime.now() - start
        log.summary_table("Product Feed Summary", [
            ("Fetched", str(summary.fetched)),
            ("Inserted", str(summary.inserted)),
            ("Already present", str(summary.skipped)),
            ("Failed", str(summary.failed)),
            ("Elapsed", str(elapsed)),
        ])
        if summary.failed:
            log.warn(f"{summary.failed} record(s) could not be loaded")
        else:
            log.ok("Product feed load complete")
        return summary

    def _load_record(self, record, idx: int, total: int, summary: IngestSummary):
        record_id = record.get("id") if isinstance(record, dict) else None
        try:
            if self.db.insert_if_absent(record):
                summary.inserted += 1
            else:
                summary.skipped += 1
        except Exception as e:
            summary.failed += 1
            log.progress(idx, total, f"id={record_id}", f"{log.C.ERR}failed: {e}{log.C.RESET}")
            logger.exception(f"Failed to insert feed record #{idx} (id={record_id})")


def main():
    parser = argparse.ArgumentParser(description="Seed the transactions database from the product feed")
    parser.add_argument("--db", default=os.getenv("TRANSACTIONS_DB_PATH", DEFAULT_DB_PATH),
                        help="SQLite database file")
    parser.add_argument("--url", help="Feed URL (default: PRODUCT_FEED_URL or the public S3 feed)")
    args = parser.parse_args()

    try:
        db = DatabaseManager(db_path=args.db)
    except Exception as e:
        log.err(f"Cannot open database {args.db}: {e}")
        sys.exit(1)

    provider = ProductFeedProvider(url=args.url)
    try:
        ProductFeedPipeline(db, provider).run()
    except Exception as e:
        log.err(f"Product feed load aborted: {e}")
        logger.exception("Product feed load aborted")
        sys.exit(1)
    finally:
        provider.close()
        db.close()


if __name__ == "__main__":
    main()
