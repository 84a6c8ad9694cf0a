"""SQLite storage layer for Wordbank."""
