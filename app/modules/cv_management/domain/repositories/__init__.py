"""Persistence contracts."""

from .data_store import DataStore, Filters, Row

__all__ = ["DataStore", "Filters", "Row"]
