"""Test fixtures package."""

from .mock_connection import (
    MockConnection,
    column_row,
    create_mock_connection_with_catalog,
    create_sales_catalog,
)

__all__ = [
    "MockConnection",
    "column_row",
    "create_mock_connection_with_catalog",
    "create_sales_catalog",
]
