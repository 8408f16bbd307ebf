"""Tests for Pydantic models and the month/bucket vocabulary."""

import pytest
from pydantic import ValidationError

from models import (
    MONTH_ABBREVIATIONS,
    PRICE_BUCKETS,
    IngestSummary,
    InvalidMonthError,
    Transaction,
    resolve_month,
)


# ---------------------------------------------------------------------------
# Month filter
# ---------------------------------------------------------------------------

class TestResolveMonth:
    def test_exact_twelve_entry_table(self):
        assert MONTH_ABBREVIATIONS == {
            "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04",
            "May": "05", "Jun": "06", "Jul": "07", "Aug": "08",
            "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
        }

    @pytest.mark.parametrize("abbr,numeric", list(MONTH_ABBREVIATIONS.items()))
    def test_valid(self, abbr, numeric):
        assert resolve_month(abbr) == numeric

    @pytest.mark.parametrize("bad", [None, "", "mar", "MAR", "March", "13", "03", " Mar"])
    def test_invalid_raises(self, bad):
        with pytest.raises(InvalidMonthError, match="Invalid month abbreviation"):
            resolve_month(bad)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_month("Foo")

    def test_error_keeps_input(self):
        try:
            resolve_month("Foo")
        except InvalidMonthError as e:
            assert e.month == "Foo"


# ---------------------------------------------------------------------------
# Price buckets
# ---------------------------------------------------------------------------

class TestPriceBuckets:
    def test_ten_buckets(self):
        assert len(PRICE_BUCKETS) == 10

    def test_contiguous(self):
        for (_, _, prev_high), (_, low, _) in zip(PRICE_BUCKETS, PRICE_BUCKETS[1:]):
            assert low == prev_high + 1

    def test_last_open_ended(self):
        assert PRICE_BUCKETS[-1] == ("901-above", 901, None)


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------

class TestTransaction:
    def test_from_row(self):
        t = Transaction(id=1, title="T", price=10, sold=1, dateOfSale="2022-03-01T00:00:00Z")
        assert t.price == 10.0
        assert t.sold is True

    def test_optional_defaults(self):
        t = Transaction(id=1)
        assert t.title is None
        assert t.category is None
        assert t.dateOfSale is None

    def test_missing_id_raises(self):
        with pytest.raises(ValidationError):
            Transaction(title="T")


class TestIngestSummary:
    def test_defaults_zero(self):
        s = IngestSummary()
        assert (s.fetched, s.inserted, s.skipped, s.failed) == (0, 0, 0, 0)
