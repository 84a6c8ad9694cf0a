"""API client for the CLI to interact with the Wordbank vocabulary API."""

import os

import requests
from typing import Dict, Any, Iterator, List, Optional


class APIError(Exception):
    """Raised when the API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class VocabularyAPIClient:
    """Client for interacting with the Wordbank vocabulary API."""

    def __init__(self, base_url: str = "http://localhost:8000/api/v1", timeout: int = 300, api_key: Optional[str] = None):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds; bulk calls wait on the AI service
            api_key: Sent as X-API-Key; defaults to WORDBANK_API_KEY
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.set_api_key(api_key or os.getenv("WORDBANK_API_KEY"))

    def set_api_key(self, api_key: Optional[str]):
        """Set or clear the key sent with every request."""
        if api_key:
            self.session.headers["X-API-Key"] = api_key
        else:
            self.session.headers.pop("X-API-Key", None)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an HTTP request to the API.

        Raises:
            APIError: For HTTP and connection errors
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code
            if status_code == 401:
                raise APIError("Unauthorized. Set WORDBANK_API_KEY to the server's API key.", status_code=401)
            if status_code == 429:
                raise APIError("Too many requests. Please wait a moment and try again.", status_code=429)
            raise APIError(f"HTTP Error: {e} - {e.response.text[:500]}", status_code=status_code)
        except requests.exceptions.RequestException as e:
            raise APIError(f"API request failed: {e}")

    def bulk_insert(self, words: List[Dict[str, Any]], offset: Optional[int] = None) -> Dict[str, Any]:
        """Submit a batch of words, optionally processing a single chunk."""
        payload: Dict[str, Any] = {"words": words}
        if offset is not None:
            payload["offset"] = offset
        return self._make_request("POST", "/vocabulary/bulk", json=payload)

    def bulk_insert_chunked(self, words: List[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        """
        Submit a batch chunk by chunk, following the server's cursor.

        Yields:
            The response for each processed chunk
        """
        offset: Optional[int] = 0
        while offset is not None:
            response = self.bulk_insert(words, offset=offset)
            yield response
            offset = response.get("nextOffset") if response.get("hasMore") else None

    def get_groups(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._make_request("GET", "/vocabulary/groups")

    def delete_word(self, word: str) -> Dict[str, Any]:
        return self._make_request("DELETE", f"/vocabulary/{requests.utils.quote(word, safe='')}")
