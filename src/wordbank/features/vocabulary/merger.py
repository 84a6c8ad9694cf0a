"""
Vocabulary Merger

Inserts a batch of words one at a time and sorts each into exactly one of
added, skipped (duplicate word) or errors.
"""

from typing import List

from .exceptions import DuplicateEntryError
from .models import BatchOutcome, NewWord, TaxonomyAssignment, WordAssignment
from ...core.logging import get_logger

logger = get_logger(__name__)


class VocabularyMerger:
    """Merges new words into the store with per-word failure isolation."""

    def __init__(self, repository):
        """
        Args:
            repository: Store gateway exposing insert_entry()
        """
        self.repository = repository

    def merge(self, new_words: List[NewWord], assignment: TaxonomyAssignment) -> BatchOutcome:
        """
        Insert every word in submission order.

        Args:
            new_words: Words to insert
            assignment: Group label and sentence per word

        Returns:
            BatchOutcome with one outcome per submitted word
        """
        outcome = BatchOutcome()

        for new_word in new_words:
            word_assignment = assignment.get(new_word.word) or WordAssignment()

            try:
                entry = self.repository.insert_entry(
                    word=new_word.word,
                    meaning=new_word.meaning,
                    synonyms=new_word.synonyms or [],
                    group_name=word_assignment.group_name,
                    sentence=word_assignment.sentence,
                )
            except DuplicateEntryError:
                logger.debug(f"Skipping duplicate word: {new_word.word}")
                outcome.skipped.append(new_word.word)
            except Exception as e:
                logger.error(f"Failed to insert word '{new_word.word}': {e}")
                outcome.errors.append({
                    "word": new_word.word,
                    "error": getattr(e, "message", None) or str(e),
                })
            else:
                outcome.added.append(entry)

        logger.info(
            f"Merged {len(new_words)} words: {len(outcome.added)} added, "
            f"{len(outcome.skipped)} skipped, {len(outcome.errors)} errors"
        )
        return outcome
