"""REST API module for Wordbank.

Exposes bulk vocabulary ingestion together with the read-only retrieval
views (listing, groups, random sample, id range) and single-entry deletion.
"""
