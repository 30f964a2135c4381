"""SQLite persistence for saved collections."""
