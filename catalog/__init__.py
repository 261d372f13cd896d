"""Catalog management API - products and categories with a Redis read-through cache."""
