"""
Bulk Vocabulary Processor

Main entry point for bulk ingestion: reads the existing group labels,
assigns labels and sentences to the new words, merges them into the store
and summarises the outcome. Large batches can be processed one chunk per
call by passing an offset.
"""

from typing import List, Optional

from .assigner import TaxonomyAssigner
from .exceptions import InvalidRequestError
from .merger import VocabularyMerger
from .models import BatchSummary, NewWord
from ...core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 50


class BulkVocabularyProcessor:
    """Orchestrates label lookup, enrichment and merging for one request."""

    def __init__(self, repository, enrichment_client=None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            repository: Store gateway (VocabularyRepository or compatible)
            enrichment_client: Object exposing generate(prompt) -> str, or None
            chunk_size: Words processed per call when an offset is given
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self.repository = repository
        self.assigner = TaxonomyAssigner(enrichment_client)
        self.merger = VocabularyMerger(repository)
        self.chunk_size = chunk_size

    def process(self, words: List[NewWord], offset: Optional[int] = None) -> BatchSummary:
        """
        Process a batch, or one chunk of it when offset is given.

        Args:
            words: The full submitted batch
            offset: Start of the chunk to process; None processes everything

        Returns:
            BatchSummary for the processed slice

        Raises:
            InvalidRequestError: If the batch is empty or the offset is out of range
        """
        if not words:
            raise InvalidRequestError("Invalid input. Expected words array.")

        total_words = len(words)
        if offset is None:
            start, end = 0, total_words
        else:
            if offset < 0 or offset >= total_words:
                raise InvalidRequestError(
                    f"Offset {offset} is out of range for {total_words} words",
                    {"offset": offset, "total_words": total_words}
                )
            start, end = offset, min(offset + self.chunk_size, total_words)

        batch = words[start:end]
        logger.info(f"Processing words {start}-{end - 1} of {total_words}")

        existing_groups = self._load_existing_groups()

        try:
            assignment = self.assigner.assign(batch, existing_groups)
        except Exception as e:
            logger.error(f"Group assignment failed, proceeding without groups/sentences: {e}", exc_info=True)
            assignment = TaxonomyAssigner.fallback(batch)

        outcome = self.merger.merge(batch, assignment)

        has_more = end < total_words
        return BatchSummary(
            total_sent=len(batch),
            results=outcome,
            ai_processing_used=TaxonomyAssigner.produced_any(assignment),
            offset=start,
            total_words=total_words,
            has_more=has_more,
            next_offset=end if has_more else None,
        )

    def _load_existing_groups(self):
        try:
            existing_groups = self.repository.list_distinct_group_labels()
        except Exception as e:
            logger.warning(f"Error fetching existing groups, continuing with none: {e}")
            return set()

        logger.debug(f"Existing groups: {sorted(existing_groups)}")
        return existing_groups
