"""HTTP API for Threadvote."""
