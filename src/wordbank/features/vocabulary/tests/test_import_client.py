import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock

import click
import requests

from wordbank.api.services.api_client import APIError, VocabularyAPIClient
from wordbank.cli_handlers import load_words_file


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        error = requests.exceptions.HTTPError(f"{status_code} Error")
        error.response = response
        response.text = json.dumps(payload)
        response.raise_for_status.side_effect = error
    return response


class TestVocabularyAPIClient(unittest.TestCase):

    def setUp(self):
        self.client = VocabularyAPIClient(base_url="http://api.test/api/v1/")
        self.client.session = MagicMock()

    def test_chunked_import_follows_cursor(self):
        self.client.session.request.side_effect = [
            _response({"offset": 0, "hasMore": True, "nextOffset": 50}),
            _response({"offset": 50, "hasMore": True, "nextOffset": 100}),
            _response({"offset": 100, "hasMore": False, "nextOffset": None}),
        ]
        words = [{"word": f"word{i}", "meaning": "m"} for i in range(120)]

        responses = list(self.client.bulk_insert_chunked(words))

        self.assertEqual([r["offset"] for r in responses], [0, 50, 100])
        offsets = [call.kwargs["json"]["offset"] for call in self.client.session.request.call_args_list]
        self.assertEqual(offsets, [0, 50, 100])
        self.assertEqual(
            self.client.session.request.call_args_list[0].args,
            ("POST", "http://api.test/api/v1/vocabulary/bulk")
        )

    def test_single_request_omits_offset(self):
        self.client.session.request.return_value = _response({"hasMore": False})

        self.client.bulk_insert([{"word": "joyful", "meaning": "happy"}])

        self.assertNotIn("offset", self.client.session.request.call_args.kwargs["json"])

    def test_http_error_carries_status(self):
        self.client.session.request.return_value = _response({"detail": "Word not found"}, status_code=404)

        with self.assertRaises(APIError) as ctx:
            self.client.delete_word("missing word")

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertTrue(self.client.session.request.call_args.args[1].endswith("/vocabulary/missing%20word"))

    def test_api_key_is_sent_as_header(self):
        client = VocabularyAPIClient(api_key="server-key")

        self.assertEqual(client.session.headers["X-API-Key"], "server-key")

    def test_connection_error(self):
        self.client.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with self.assertRaises(APIError) as ctx:
            self.client.get_groups()

        self.assertIsNone(ctx.exception.status_code)


class TestLoadWordsFile(unittest.TestCase):

    def _write(self, data):
        handle, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(handle, "w", encoding="utf-8") as f:
            json.dump(data, f)
        self.addCleanup(os.remove, path)
        return path

    def test_accepts_list_or_words_object(self):
        words = [{"word": "joyful", "meaning": "full of happiness"}]

        self.assertEqual(load_words_file(self._write(words)), words)
        self.assertEqual(load_words_file(self._write({"words": words})), words)

    def test_rejects_empty_or_wrong_shape(self):
        for data in ([], {"items": []}, "joyful"):
            with self.subTest(data=data):
                with self.assertRaises(click.BadParameter):
                    load_words_file(self._write(data))


if __name__ == '__main__':
    unittest.main()
