"""
Infrastructure Layer

Adapters for Last.fm/iTunes over HTTP, SQLite persistence, and the
in-memory reference catalog.
"""
