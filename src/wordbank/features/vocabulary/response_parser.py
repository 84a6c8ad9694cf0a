"""
Response parser for group assignment replies.
"""

import json
import re
from typing import Any, Dict, Optional

from .exceptions import EnrichmentUnavailableError
from .models import WordAssignment

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


class EnrichmentResponseParser:
    """
    Parser for the JSON array of {word, group_name, sentence} records.

    Any structural problem rejects the whole reply; records are never
    salvaged one by one.
    """

    @staticmethod
    def strip_code_fences(response_text: str) -> str:
        """Remove markdown code fences the model may wrap around its reply."""
        return CODE_FENCE_PATTERN.sub("", response_text).strip()

    @staticmethod
    def parse_assignment_response(response_text: str) -> Dict[str, WordAssignment]:
        """
        Parse and validate an assignment reply.

        Args:
            response_text: Raw response from the text-generation service

        Returns:
            Mapping of word to its assignment, first record per word wins

        Raises:
            EnrichmentUnavailableError: If the reply is not a well-formed array
        """
        cleaned = EnrichmentResponseParser.strip_code_fences(response_text or "")

        try:
            records = json.loads(cleaned)
        except (json.JSONDecodeError, ValueError) as e:
            raise EnrichmentUnavailableError(f"Failed to parse assignment response: {e}")

        if not isinstance(records, list):
            raise EnrichmentUnavailableError("Assignment response must be a JSON array")

        assignments: Dict[str, WordAssignment] = {}
        for index, record in enumerate(records):
            EnrichmentResponseParser._validate_record(record, index)
            word = record["word"]
            if word in assignments:
                continue
            assignments[word] = WordAssignment(
                group_name=EnrichmentResponseParser._clean_value(record.get("group_name")),
                sentence=EnrichmentResponseParser._clean_value(record.get("sentence")),
            )

        return assignments

    @staticmethod
    def _validate_record(record: Any, index: int) -> None:
        if not isinstance(record, dict):
            raise EnrichmentUnavailableError(f"Record {index} is not an object")

        if not isinstance(record.get("word"), str):
            raise EnrichmentUnavailableError(f"Record {index} has no word")

        for key in ("group_name", "sentence"):
            value = record.get(key)
            if value is not None and not isinstance(value, str):
                raise EnrichmentUnavailableError(f"Record {index} has a non-string {key}")

    @staticmethod
    def _clean_value(value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value
