"""Batch ETL for ATP match and player data."""

__version__ = "0.1.0"
