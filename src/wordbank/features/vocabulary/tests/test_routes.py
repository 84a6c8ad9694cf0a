import json
import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from wordbank.api.main import app
from wordbank.api.routes.vocabulary import get_db, get_enrichment_client, group_entries_by_label
from wordbank.features.vocabulary.exceptions import StorageFailureError
from wordbank.storage.src.database import get_db_connection
from wordbank.storage.src.project.database_repositories import VocabularyRepository
from wordbank.storage.src.project.initialize_database import setup_database

BULK_URL = "/api/v1/vocabulary/bulk"
VOCABULARY_URL = "/api/v1/vocabulary"


def _locked_insert(**kwargs):
    raise StorageFailureError("database is locked", word=kwargs["word"])


class TestVocabularyRoutes(unittest.TestCase):

    def setUp(self):
        self.conn = get_db_connection(":memory:")
        setup_database(self.conn)
        self.repo = VocabularyRepository(self.conn)

        self.enrichment_client = MagicMock()
        self.enrichment_client.generate.return_value = json.dumps([
            {"word": "joyful", "group_name": "feeling happy", "sentence": "She gave a joyful laugh at the news."},
            {"word": "sprint", "group_name": "movement verbs", "sentence": "He had to sprint to catch the bus."},
        ])

        def override_get_db():
            yield self.conn

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_enrichment_client] = lambda: self.enrichment_client
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.conn.close()

    def _seed(self, count):
        for i in range(count):
            self.repo.insert_entry(f"word{i}", f"meaning {i}", [], "numbers" if i % 2 else None, None)

    def test_bulk_insert_returns_camel_case_summary(self):
        self.repo.insert_entry("ledger", "a book of accounts")

        response = self.client.post(BULK_URL, json={"words": [
            {"word": "joyful", "meaning": "full of happiness", "synonyms": ["happy"]},
            {"word": "sprint", "meaning": "to run very fast"},
            {"word": "ledger", "meaning": "a book of accounts"},
        ]})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["totalSent"], 3)
        self.assertEqual(body["addedCount"], 2)
        self.assertEqual(body["skippedCount"], 1)
        self.assertEqual(body["errorCount"], 0)
        self.assertTrue(body["aiProcessingUsed"])
        self.assertFalse(body["hasMore"])
        self.assertIsNone(body["nextOffset"])
        self.assertEqual(body["results"]["skipped"], ["ledger"])
        added = {entry["word"]: entry for entry in body["results"]["added"]}
        self.assertEqual(added["joyful"]["group_name"], "feeling happy")
        self.assertEqual(added["joyful"]["synonyms"], ["happy"])

    def test_bulk_insert_without_enrichment_client(self):
        app.dependency_overrides[get_enrichment_client] = lambda: None

        response = self.client.post(BULK_URL, json={"words": [{"word": "joyful", "meaning": "full of happiness"}]})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertFalse(body["aiProcessingUsed"])
        self.assertIsNone(body["results"]["added"][0]["group_name"])

    def test_bulk_insert_rejects_malformed_input(self):
        for payload in (
            {},
            {"words": "joyful"},
            {"words": [{"word": "joyful"}]},
            {"words": [{"word": "", "meaning": "nothing"}]},
        ):
            with self.subTest(payload=payload):
                response = self.client.post(BULK_URL, json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "Invalid input. Expected words array.")

        self.enrichment_client.generate.assert_not_called()
        self.assertEqual(self.repo.list_page(0, 10)[1], 0)

    def test_bulk_insert_with_every_word_failing_still_returns_created(self):
        with patch.object(VocabularyRepository, "insert_entry", side_effect=_locked_insert):
            response = self.client.post(BULK_URL, json={"words": [
                {"word": "sprint", "meaning": "to run very fast"},
                {"word": "joyful", "meaning": "full of happiness"},
                {"word": "ledger", "meaning": "a book of accounts"},
            ]})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["errorCount"], body["totalSent"])
        self.assertEqual(body["addedCount"], 0)
        self.assertEqual(body["results"]["errors"], [
            {"word": "sprint", "error": "database is locked"},
            {"word": "joyful", "error": "database is locked"},
            {"word": "ledger", "error": "database is locked"},
        ])

    def test_bulk_insert_rejects_whitespace_only_fields(self):
        for item in ({"word": "   ", "meaning": "nothing"}, {"word": "calm", "meaning": "  "}):
            with self.subTest(item=item):
                response = self.client.post(BULK_URL, json={"words": [item]})
                self.assertEqual(response.status_code, 400)

        self.enrichment_client.generate.assert_not_called()
        self.assertEqual(self.repo.list_page(0, 10)[1], 0)

    def test_bulk_insert_stores_trimmed_word_and_meaning(self):
        self.enrichment_client.generate.return_value = "[]"

        response = self.client.post(BULK_URL, json={"words": [{"word": "  calm ", "meaning": " peaceful  "}]})

        self.assertEqual(response.status_code, 201)
        stored = self.repo.get_by_word("calm")
        self.assertEqual(stored["meaning"], "peaceful")

    def test_bulk_insert_rejects_empty_batch(self):
        response = self.client.post(BULK_URL, json={"words": []})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid input. Expected words array.")
        self.enrichment_client.generate.assert_not_called()

    def test_bulk_insert_rejects_offset_out_of_range(self):
        response = self.client.post(BULK_URL, json={
            "words": [{"word": "joyful", "meaning": "full of happiness"}],
            "offset": 5,
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"], {"offset": 5, "total_words": 1})
        self.assertEqual(self.repo.list_page(0, 10)[1], 0)

    def test_bulk_insert_chunk_cursor(self):
        words = [{"word": f"word{i}", "meaning": f"meaning {i}"} for i in range(60)]
        self.enrichment_client.generate.return_value = "[]"

        first = self.client.post(BULK_URL, json={"words": words, "offset": 0}).json()
        second = self.client.post(BULK_URL, json={"words": words, "offset": first["nextOffset"]}).json()

        self.assertTrue(first["hasMore"])
        self.assertEqual(first["nextOffset"], 50)
        self.assertEqual(first["totalWords"], 60)
        self.assertFalse(second["hasMore"])
        self.assertEqual(second["addedCount"], 10)
        self.assertEqual(self.repo.list_page(0, 100)[1], 60)

    def test_list_vocabulary_paginates(self):
        self._seed(5)

        response = self.client.get(VOCABULARY_URL, params={"page": 2, "limit": 2})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([entry["word"] for entry in body["data"]], ["word2", "word3"])
        self.assertEqual(body["pagination"], {
            "page": 2, "limit": 2, "total": 5, "totalPages": 3, "hasMore": True
        })

    def test_delete_word(self):
        self._seed(1)

        response = self.client.delete(f"{VOCABULARY_URL}/word0")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deleted"]["word"], "word0")

        response = self.client.delete(f"{VOCABULARY_URL}/word0")
        self.assertEqual(response.status_code, 404)

    def test_groups_only_include_labelled_words(self):
        self._seed(4)

        response = self.client.get(f"{VOCABULARY_URL}/groups")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(list(body.keys()), ["numbers"])
        self.assertEqual([w["word"] for w in body["numbers"]], ["word1", "word3"])

    def test_range_and_random(self):
        self._seed(5)

        response = self.client.get(f"{VOCABULARY_URL}/range", params={"start": 2, "end": 4})
        self.assertEqual([entry["id"] for entry in response.json()], [2, 3, 4])

        response = self.client.get(f"{VOCABULARY_URL}/range", params={"start": 4, "end": 2})
        self.assertEqual(response.status_code, 400)

        response = self.client.get(f"{VOCABULARY_URL}/random", params={"count": 3})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 3)

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


class TestGroupEntriesByLabel(unittest.TestCase):

    def test_skips_unlabelled_and_keeps_order(self):
        entries = [
            {"word": "a", "meaning": "first", "synonyms": [], "group_name": "letters", "sentence": None},
            {"word": "b", "meaning": "second", "synonyms": [], "group_name": None, "sentence": None},
            {"word": "c", "meaning": "third", "synonyms": ["see"], "group_name": "letters", "sentence": "C is third."},
        ]

        groups = group_entries_by_label(entries)

        self.assertEqual(list(groups.keys()), ["letters"])
        self.assertEqual([w.word for w in groups["letters"]], ["a", "c"])
        self.assertEqual(groups["letters"][1].synonyms, ["see"])


if __name__ == '__main__':
    unittest.main()
