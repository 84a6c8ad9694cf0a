"""
SQLite connection helpers for the vocabulary store.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

# <project root>/storage/database.db
DEFAULT_DB_PATH = Path(__file__).resolve().parents[4] / "storage" / "database.db"


def get_db_path() -> str:
    """Return the database file, honouring ``WORDBANK_DB_PATH``."""
    return os.getenv("WORDBANK_DB_PATH") or str(DEFAULT_DB_PATH)


def _prepare_storage_dir(db_path: str) -> None:
    storage_dir = Path(db_path).parent
    try:
        storage_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create storage directory {storage_dir}: {e}")
        return

    if not os.access(storage_dir, os.W_OK):
        logger.error(f"Storage directory {storage_dir} is not writable")


def get_db_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Open a connection to the vocabulary database.

    Rows come back as ``sqlite3.Row``. The connection may be handed to
    FastAPI's threadpool, so same-thread checking is off.

    Args:
        db_path: Explicit path or ":memory:"; defaults to get_db_path()
    """
    db_path = db_path or get_db_path()
    if db_path != IN_MEMORY:
        _prepare_storage_dir(db_path)

    try:
        conn = sqlite3.connect(db_path, check_same_thread=False)
    except sqlite3.Error as e:
        logger.error(f"Failed to open database {db_path}: {e}")
        raise

    conn.row_factory = sqlite3.Row
    logger.debug(f"Opened database {db_path}")
    return conn
