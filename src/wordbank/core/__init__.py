"""Core utilities shared by the API, CLI and features."""
