"""Wordbank: vocabulary ingestion with AI-assisted grouping and example sentences."""

__version__ = "0.1.0"
