"""
Prompt builder for group assignment and example sentence generation.
"""

from typing import Iterable, List

from .models import NewWord


class EnrichmentPromptBuilder:
    """
    Builder for the single prompt sent per batch to the text-generation service.
    """

    @staticmethod
    def build_assignment_prompt(new_words: List[NewWord], existing_groups: Iterable[str]) -> str:
        """
        Create the prompt asking for a group label and example sentence per word.

        Args:
            new_words: Words to categorize, in submission order
            existing_groups: Group labels already present in storage

        Returns:
            Complete prompt text
        """
        groups_section = EnrichmentPromptBuilder._format_existing_groups(existing_groups)
        words_section = "\n".join(
            f'Word: "{w.word}" - Meaning: "{w.meaning}"' for w in new_words
        )

        prompt = f"""You are a vocabulary assistant. Your task is to:
1. Assign group names to words based on their meanings
2. Create example sentences showing proper usage of each word

Existing groups in database:
{groups_section}

New words to categorize:
{words_section}

Rules for grouping:
1. If a word's meaning matches an existing group, assign it to that group and reuse the group name exactly as written
2. If no existing group matches, create a NEW simple group name (2-4 words max)
3. Group names should be simple like "feeling happy", "movement verbs", "time related", etc.
4. Multiple words with identical or similar meanings should get the SAME group name

Rules for sentences:
1. Create ONE clear, natural sentence for each word
2. The sentence should demonstrate the word's meaning in context
3. Keep sentences simple and easy to understand (10-20 words)
4. Use the exact word provided (match the case)

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "word": "word1",
    "group_name": "simple group name",
    "sentence": "A clear example sentence using word1 in context."
  }},
  {{
    "word": "word2",
    "group_name": "simple group name",
    "sentence": "A clear example sentence using word2 in context."
  }}
]

Return ONLY the JSON array, no other text."""

        return prompt

    @staticmethod
    def _format_existing_groups(existing_groups: Iterable[str]) -> str:
        groups = sorted(existing_groups)
        if not groups:
            return "No existing groups yet"
        return "\n".join(f'- "{g}"' for g in groups)
