"""Shared fixtures for the test suite."""

import pytest
from unittest.mock import MagicMock

from database import DatabaseManager


@pytest.fixture
def tmp_db(tmp_path):
    """Fresh DatabaseManager backed by a real SQLite DB in tmp_path."""
    db_path = str(tmp_path / "test.db")
    db = DatabaseManager(db_path=db_path)
    yield db
    db.close()


@pytest.fixture
def mock_response():
    """Factory for mock HTTP responses."""
    def _make(status_code=200, json_data=None):
        resp = MagicMock()
        resp.status_code = status_code
        resp.json.return_value = json_data
        # truthy when status_code == 200
        resp.__bool__ = lambda self: self.status_code == 200
        return resp
    return _make


@pytest.fixture
def sample_transaction():
    """Factory fixture — call with overrides to get a feed record dict."""
    def _make(**overrides):
        record = {
            "id": 1,
            "title": "Fjallraven Foldsack No. 1 Backpack",
            "price": 329.85,
            "description": "Your perfect pack for everyday use and walks in the forest.",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def march_db(tmp_db, sample_transaction):
    """
    Store seeded with three March rows (prices 50, 150, 950; one unsold)
    plus one April row that month filters must exclude.
    """
    rows = [
        sample_transaction(id=1, title="Canvas Tote", price=50, category="bags",
                           sold=True, dateOfSale="2022-03-05T10:00:00+00:00"),
        sample_transaction(id=2, title="Leather Wallet", price=150, category="accessories",
                           sold=True, dateOfSale="2022-03-12T10:00:00+00:00"),
        sample_transaction(id=3, title="Smart Watch", price=950, category="electronics",
                           sold=False, dateOfSale="2021-03-20T10:00:00+00:00"),
        sample_transaction(id=4, title="Rain Jacket", price=75, category="bags",
                           sold=False, dateOfSale="2022-04-02T10:00:00+00:00"),
    ]
    for r in rows:
        tmp_db.insert_if_absent(r)
    return tmp_db
