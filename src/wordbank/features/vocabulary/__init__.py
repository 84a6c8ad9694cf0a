"""
Vocabulary Module

This module ingests batches of new words, enriching each with a group label
and an example sentence before persisting it, and classifies every word as
added, skipped or failed.

Main Components:
- BulkVocabularyProcessor: Main entry point for bulk ingestion
- TaxonomyAssigner: AI-powered group and sentence assignment with fallback
- VocabularyMerger: Per-word insertion with outcome classification
- GeminiEnrichmentClient: Text-generation client
"""

from .processor import BulkVocabularyProcessor
from .assigner import TaxonomyAssigner
from .merger import VocabularyMerger
from .api_client import GeminiEnrichmentClient
from .prompt_builder import EnrichmentPromptBuilder
from .response_parser import EnrichmentResponseParser
from .models import NewWord, WordAssignment, BatchOutcome, BatchSummary

__all__ = [
    'BulkVocabularyProcessor',
    'TaxonomyAssigner',
    'VocabularyMerger',
    'GeminiEnrichmentClient',
    'EnrichmentPromptBuilder',
    'EnrichmentResponseParser',
    'NewWord',
    'WordAssignment',
    'BatchOutcome',
    'BatchSummary'
]
