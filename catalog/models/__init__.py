"""Database models for the application."""

from catalog.models.category import CategoryDB
from catalog.models.product import ProductDB

__all__ = ["CategoryDB", "ProductDB"]
