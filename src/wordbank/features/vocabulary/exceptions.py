"""
Custom exceptions for the vocabulary ingestion system.

Enrichment failures are recovered inside the assignment engine, duplicate
and storage failures are classified per word by the merger, and invalid
requests are rejected before any processing begins.
"""

from typing import Any, Dict, Optional


class VocabularyError(Exception):
    """Base exception for all vocabulary-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class EnrichmentUnavailableError(VocabularyError):
    """Raised when the text-generation service fails or returns unusable output."""

    def __init__(self, message: str, model: Optional[str] = None):
        details = {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class StorageError(VocabularyError):
    """Errors raised by the vocabulary store."""
    pass


class DuplicateEntryError(StorageError):
    """Raised when an insert violates the unique constraint on word."""

    def __init__(self, word: str):
        super().__init__(f"Word already exists: {word}", {"word": word})
        self.word = word


class StorageFailureError(StorageError):
    """Raised for any store failure other than a duplicate word."""

    def __init__(self, message: str, word: Optional[str] = None):
        details = {}
        if word is not None:
            details["word"] = word
        super().__init__(message, details)
        self.word = word


class InvalidRequestError(VocabularyError):
    """Raised when a batch request is malformed."""
    pass
