"""Threadvote: vote ledger, score aggregation and threaded comments."""

__version__ = "0.1.0"
