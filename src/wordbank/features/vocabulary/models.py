"""
Vocabulary ingestion models and data structures.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass
class NewWord:
    """A word submitted for insertion."""
    word: str
    meaning: str
    synonyms: Optional[List[str]] = None


@dataclass
class WordAssignment:
    """Group label and example sentence chosen for one word."""
    group_name: Optional[str] = None
    sentence: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.group_name is None and self.sentence is None


# word -> assignment, one entry per requested word
TaxonomyAssignment = Dict[str, WordAssignment]


@dataclass
class BatchOutcome:
    """Per-outcome results of merging a batch into the store."""
    added: List[Dict[str, Any]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: List[Dict[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.skipped) + len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "added": self.added,
            "skipped": self.skipped,
            "errors": self.errors,
        }


@dataclass
class BatchSummary:
    """Summary of one bulk insert call."""
    total_sent: int
    results: BatchOutcome
    ai_processing_used: bool
    offset: int = 0
    total_words: int = 0
    has_more: bool = False
    next_offset: Optional[int] = None

    @property
    def added_count(self) -> int:
        return len(self.results.added)

    @property
    def skipped_count(self) -> int:
        return len(self.results.skipped)

    @property
    def error_count(self) -> int:
        return len(self.results.errors)
