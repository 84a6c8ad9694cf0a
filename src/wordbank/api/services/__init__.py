"""Clients for talking to a running Wordbank API."""
