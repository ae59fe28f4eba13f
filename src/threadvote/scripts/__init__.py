"""Operational scripts for Threadvote."""
