"""
API client for vocabulary enrichment using Google Gemini.
"""

from typing import Optional
from google import genai

from .exceptions import EnrichmentUnavailableError
from ...core.logging import get_logger
from ...core.settings import DEFAULT_GEMINI_MODEL

logger = get_logger(__name__)


class GeminiEnrichmentClient:
    """
    Client for sending enrichment prompts to Gemini.

    A single failed call is reported as EnrichmentUnavailableError; retries
    are left to the caller.
    """

    def __init__(self, api_key: str, model: Optional[str] = None):
        """
        Initialize the Gemini client.

        Args:
            api_key: Google API key for Gemini
            model: Gemini model to use (optional, defaults to "gemini-2.5-flash")
        """
        if not api_key:
            raise ValueError("API key for Gemini must be provided.")
        self.model = model if model is not None else DEFAULT_GEMINI_MODEL
        self.client = genai.Client(api_key=api_key)

    def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the raw response text.

        Args:
            prompt: The prompt to send to Gemini

        Returns:
            Raw response text

        Raises:
            EnrichmentUnavailableError: If the call fails or returns no text
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={"response_mime_type": "application/json"},
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise EnrichmentUnavailableError(f"Gemini request failed: {e}", model=self.model) from e

        response_text = response.text
        if not response_text:
            raise EnrichmentUnavailableError("Empty response from Gemini", model=self.model)
        return response_text
