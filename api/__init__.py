"""
REST API for product sale transactions.

Exposes the seeded SQLite transactions table via read-only HTTP endpoints
for listing, monthly statistics and chart data.
"""

__version__ = "1.0.0"
