import unittest
from unittest.mock import MagicMock

from wordbank.features.vocabulary.exceptions import DuplicateEntryError, StorageFailureError
from wordbank.features.vocabulary.merger import VocabularyMerger
from wordbank.features.vocabulary.models import NewWord, WordAssignment


def _persisted(word, meaning, synonyms, group_name, sentence):
    return {
        "word": word,
        "meaning": meaning,
        "synonyms": synonyms,
        "group_name": group_name,
        "sentence": sentence,
    }


class TestVocabularyMerger(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.merger = VocabularyMerger(self.repo)
        self.words = [
            NewWord("w1", "first meaning"),
            NewWord("w2", "second meaning", ["two"]),
            NewWord("w3", "third meaning"),
        ]

    def test_partial_failure_is_isolated(self):
        def insert(word, meaning, synonyms, group_name, sentence):
            if word == "w2":
                raise StorageFailureError("disk I/O error", word=word)
            return _persisted(word, meaning, synonyms, group_name, sentence)

        self.repo.insert_entry.side_effect = insert

        outcome = self.merger.merge(self.words, {})

        self.assertEqual([e["word"] for e in outcome.added], ["w1", "w3"])
        self.assertEqual(outcome.skipped, [])
        self.assertEqual(outcome.errors, [{"word": "w2", "error": "disk I/O error"}])
        self.assertEqual(outcome.total, 3)

    def test_duplicates_are_skipped_not_errors(self):
        def insert(word, meaning, synonyms, group_name, sentence):
            if word == "w1":
                raise DuplicateEntryError(word)
            return _persisted(word, meaning, synonyms, group_name, sentence)

        self.repo.insert_entry.side_effect = insert

        outcome = self.merger.merge(self.words, {})

        self.assertEqual(outcome.skipped, ["w1"])
        self.assertEqual(outcome.errors, [])
        self.assertEqual(len(outcome.added), 2)

    def test_unexpected_exception_is_recorded_per_word(self):
        self.repo.insert_entry.side_effect = RuntimeError("connection reset")

        outcome = self.merger.merge(self.words, {})

        self.assertEqual(outcome.added, [])
        self.assertEqual([e["word"] for e in outcome.errors], ["w1", "w2", "w3"])
        self.assertEqual(outcome.errors[0]["error"], "connection reset")

    def test_assignment_is_written_verbatim(self):
        self.repo.insert_entry.side_effect = _persisted
        assignment = {
            "w1": WordAssignment("Feeling  Happy!", "A sentence using w1 in context."),
            "w3": WordAssignment(None, "Only a sentence for w3."),
        }

        outcome = self.merger.merge(self.words, assignment)

        self.repo.insert_entry.assert_any_call(
            word="w1", meaning="first meaning", synonyms=[],
            group_name="Feeling  Happy!", sentence="A sentence using w1 in context."
        )
        self.repo.insert_entry.assert_any_call(
            word="w2", meaning="second meaning", synonyms=["two"],
            group_name=None, sentence=None
        )
        self.assertEqual(outcome.added[2]["group_name"], None)
        self.assertEqual(outcome.added[2]["sentence"], "Only a sentence for w3.")


if __name__ == '__main__':
    unittest.main()
