"""
Taxonomy Assigner

Assigns every word of a batch a free-text group label and an example
sentence with one call to the text-generation service. Existing labels are
offered for reuse; when the service is unavailable or its reply cannot be
trusted, every word falls back to an empty assignment.
"""

from typing import Iterable, List, Optional

from .exceptions import EnrichmentUnavailableError
from .models import NewWord, TaxonomyAssignment, WordAssignment
from .prompt_builder import EnrichmentPromptBuilder
from .response_parser import EnrichmentResponseParser
from ...core.logging import get_logger

logger = get_logger(__name__)


class TaxonomyAssigner:
    """Builds the enrichment prompt, calls the client and parses its reply."""

    def __init__(self, enrichment_client=None):
        """
        Args:
            enrichment_client: Object exposing generate(prompt) -> str, or None
                               when no text-generation service is configured
        """
        self.enrichment_client = enrichment_client

    def assign(self, new_words: List[NewWord], existing_groups: Iterable[str]) -> TaxonomyAssignment:
        """
        Produce an assignment for every word in new_words.

        Args:
            new_words: Words to enrich, in submission order
            existing_groups: Labels already in storage, offered for reuse

        Returns:
            Mapping covering every requested word; words the service did not
            mention map to an empty assignment
        """
        if not new_words:
            return {}

        if self.enrichment_client is None:
            logger.info("No enrichment client configured, skipping group assignment")
            return self.fallback(new_words)

        prompt = EnrichmentPromptBuilder.build_assignment_prompt(new_words, existing_groups)

        try:
            response_text = self.enrichment_client.generate(prompt)
            parsed = EnrichmentResponseParser.parse_assignment_response(response_text)
        except EnrichmentUnavailableError as e:
            logger.warning(f"Enrichment unavailable, proceeding without groups/sentences: {e}")
            return self.fallback(new_words)

        assignment: TaxonomyAssignment = {}
        for new_word in new_words:
            assignment[new_word.word] = parsed.get(new_word.word, WordAssignment())

        missing = [w for w in assignment if w not in parsed]
        if missing:
            logger.debug(f"Enrichment reply did not mention {len(missing)} word(s): {missing}")

        return assignment

    @staticmethod
    def fallback(new_words: List[NewWord]) -> TaxonomyAssignment:
        """Map every requested word to an empty assignment."""
        return {w.word: WordAssignment() for w in new_words}

    @staticmethod
    def produced_any(assignment: Optional[TaxonomyAssignment]) -> bool:
        """Whether at least one word received a label or a sentence."""
        if not assignment:
            return False
        return any(not a.is_empty for a in assignment.values())
