"""Household directory: spreadsheet ingestion, normalization and search."""

__version__ = "0.1.0"
