"""Exceptions raised by the repository layer and mapped to HTTP by the routes."""

from __future__ import annotations


class ProductNotFound(Exception):
    """No product exists with the requested id."""

    def __init__(self, product_id: str) -> None:
        super().__init__("Product not found")
        self.product_id = product_id


class DatabaseUnavailable(Exception):
    """A data route was called while no database is configured."""

    def __init__(self) -> None:
        super().__init__("Database is not configured (MONGODB_URI is not set)")
