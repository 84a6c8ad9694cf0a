"""Feature modules for Wordbank."""
