"""Catalog core - relational persistence and query engine for products."""

__version__ = "0.1.0"
