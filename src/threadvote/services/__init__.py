"""Service layer for Threadvote."""
