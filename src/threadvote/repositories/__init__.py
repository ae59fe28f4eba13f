"""Data access helpers for posts, comments and votes."""
