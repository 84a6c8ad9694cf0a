"""
Database initialization utilities.
"""

from ..database import get_db_connection
from ....core.logging import get_logger

logger = get_logger(__name__)


def setup_database(conn=None):
    """
    Initialize the database with all required tables.

    Args:
        conn: Optional open connection. When omitted a connection is opened
              on the configured database file and closed afterwards.
    """
    owns_connection = conn is None
    try:
        if owns_connection:
            conn = get_db_connection()
        cursor = conn.cursor()

        # Vocabulary entries; word is the identity key
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS vocabulary (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                word TEXT NOT NULL UNIQUE,
                meaning TEXT NOT NULL,
                synonyms TEXT NOT NULL DEFAULT '[]',
                group_name TEXT,
                sentence TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_vocabulary_group_name
            ON vocabulary (group_name)
        ''')

        # Key/value settings store
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS app_settings (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
        logger.info("Database tables created/verified")

    except Exception as e:
        logger.error(f"Error setting up database: {e}")
        raise
    finally:
        if owns_connection and conn:
            conn.close()


if __name__ == "__main__":
    setup_database()
