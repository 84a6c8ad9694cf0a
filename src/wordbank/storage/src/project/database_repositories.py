"""
Database repositories for vocabulary entries.
"""

from typing import List, Optional, Dict, Any, Set, Tuple
import json
import sqlite3
from ....core.logging import get_logger
from ....features.vocabulary.exceptions import DuplicateEntryError, StorageFailureError

logger = get_logger(__name__)

ENTRY_COLUMNS = "id, word, meaning, synonyms, group_name, sentence"


class BaseRepository:
    """Base repository class handling database connection."""

    def __init__(self, db_connection):
        self.db = db_connection

    def cursor(self):
        return self.db.cursor()

    def commit(self):
        self.db.commit()


def _row_to_entry(row) -> Dict[str, Any]:
    entry = dict(row)
    raw_synonyms = entry.get("synonyms")
    try:
        entry["synonyms"] = json.loads(raw_synonyms) if raw_synonyms else []
    except (json.JSONDecodeError, TypeError):
        entry["synonyms"] = []
    return entry


class VocabularyRepository(BaseRepository):
    """Repository for vocabulary entries keyed by a unique word."""

    def list_distinct_group_labels(self) -> Set[str]:
        """Return the distinct non-empty group labels currently stored."""
        cursor = self.cursor()
        cursor.execute('''
            SELECT DISTINCT group_name FROM vocabulary
            WHERE group_name IS NOT NULL AND group_name != ''
        ''')
        return {row[0] for row in cursor.fetchall()}

    def insert_entry(
        self,
        word: str,
        meaning: str,
        synonyms: Optional[List[str]] = None,
        group_name: Optional[str] = None,
        sentence: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Insert one vocabulary entry.

        Returns:
            The persisted entry

        Raises:
            DuplicateEntryError: If the word is already stored
            StorageFailureError: For any other storage failure
        """
        cursor = self.cursor()
        try:
            cursor.execute('''
                INSERT INTO vocabulary (word, meaning, synonyms, group_name, sentence)
                VALUES (?, ?, ?, ?, ?)
            ''', (word, meaning, json.dumps(synonyms or []), group_name, sentence))
            # Read back before committing so a failed read leaves nothing stored
            cursor.execute(f'SELECT {ENTRY_COLUMNS} FROM vocabulary WHERE id = ?', (cursor.lastrowid,))
            row = cursor.fetchone()
            self.commit()
        except sqlite3.IntegrityError as e:
            self.db.rollback()
            if "UNIQUE" in str(e).upper():
                raise DuplicateEntryError(word) from e
            raise StorageFailureError(str(e), word=word) from e
        except sqlite3.Error as e:
            self.db.rollback()
            raise StorageFailureError(str(e), word=word) from e

        return _row_to_entry(row)

    def get_by_word(self, word: str) -> Optional[Dict[str, Any]]:
        cursor = self.cursor()
        cursor.execute(f'SELECT {ENTRY_COLUMNS} FROM vocabulary WHERE word = ?', (word,))
        row = cursor.fetchone()
        return _row_to_entry(row) if row else None

    def delete_by_word(self, word: str) -> Optional[Dict[str, Any]]:
        """Delete an entry by word, returning the deleted entry or None."""
        existing = self.get_by_word(word)
        if existing is None:
            return None

        cursor = self.cursor()
        cursor.execute('DELETE FROM vocabulary WHERE id = ?', (existing["id"],))
        self.commit()
        return existing

    def list_page(self, offset: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """Return one page of entries in insertion order plus the total count."""
        cursor = self.cursor()
        cursor.execute('SELECT COUNT(*) FROM vocabulary')
        total = cursor.fetchone()[0]

        cursor.execute(f'''
            SELECT {ENTRY_COLUMNS} FROM vocabulary
            ORDER BY id ASC
            LIMIT ? OFFSET ?
        ''', (limit, offset))
        rows = cursor.fetchall()
        return [_row_to_entry(row) for row in rows], total

    def list_by_id_range(self, lo: int, hi: int) -> List[Dict[str, Any]]:
        """Return entries with lo <= id <= hi."""
        cursor = self.cursor()
        cursor.execute(f'''
            SELECT {ENTRY_COLUMNS} FROM vocabulary
            WHERE id >= ? AND id <= ?
            ORDER BY id ASC
        ''', (lo, hi))
        return [_row_to_entry(row) for row in cursor.fetchall()]

    def sample_random(self, n: int) -> List[Dict[str, Any]]:
        """Return up to n random entries."""
        cursor = self.cursor()
        cursor.execute(f'''
            SELECT {ENTRY_COLUMNS} FROM vocabulary
            ORDER BY RANDOM()
            LIMIT ?
        ''', (n,))
        return [_row_to_entry(row) for row in cursor.fetchall()]

    def list_grouped_entries(self) -> List[Dict[str, Any]]:
        """Return entries that carry a group label, ordered by label."""
        cursor = self.cursor()
        cursor.execute(f'''
            SELECT {ENTRY_COLUMNS} FROM vocabulary
            WHERE group_name IS NOT NULL
            ORDER BY group_name ASC, id ASC
        ''')
        return [_row_to_entry(row) for row in cursor.fetchall()]
