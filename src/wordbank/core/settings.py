"""
Persisted runtime settings for Wordbank.

Values live as JSON in the ``app_settings`` table so they survive restarts
and can be changed through the settings API; environment variables are the
fallback when a key was never stored.
"""

import json
import os
import sqlite3
from enum import Enum
from typing import Any, Optional

from ..storage.src.database import get_db_connection, get_db_path

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

GEMINI_API_KEY = "gemini_api_key"
GEMINI_MODEL = "gemini_model"
LOG_LEVEL = "log_level"
API_KEY = "api_key"


class LogLevel(str, Enum):
    """Log level options."""
    NONE = "none"
    ERROR = "error"
    INFO = "info"
    DEBUG = "debug"


class BackendSettings:
    """Static accessors over the app_settings table."""

    @staticmethod
    def get_setting(key: str, default: Any = None) -> Any:
        """
        Read a stored setting.

        Returns default when the database or the key does not exist yet;
        reading never creates the database file.
        """
        db_path = get_db_path()
        if not os.path.exists(db_path):
            return default

        conn = get_db_connection(db_path)
        try:
            row = conn.execute('SELECT value FROM app_settings WHERE key = ?', (key,)).fetchone()
        except sqlite3.Error:
            # app_settings not created yet
            return default
        finally:
            conn.close()

        if row is None or row[0] is None:
            return default
        try:
            return json.loads(row[0])
        except (json.JSONDecodeError, TypeError):
            return row[0]

    @staticmethod
    def set_setting(key: str, value: Any) -> bool:
        """Store a setting as JSON. Returns False if the write failed."""
        conn = get_db_connection()
        try:
            conn.execute('''
                INSERT OR REPLACE INTO app_settings (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
            ''', (key, json.dumps(value)))
            conn.commit()
            return True
        except sqlite3.Error:
            return False
        finally:
            conn.close()

    @staticmethod
    def get_gemini_api_key() -> Optional[str]:
        return BackendSettings.get_setting(GEMINI_API_KEY) or os.getenv("GEMINI_API_KEY")

    @staticmethod
    def set_gemini_api_key(api_key: str) -> bool:
        return BackendSettings.set_setting(GEMINI_API_KEY, api_key)

    @staticmethod
    def get_gemini_model() -> str:
        return (
            BackendSettings.get_setting(GEMINI_MODEL)
            or os.getenv("WORDBANK_GEMINI_MODEL")
            or DEFAULT_GEMINI_MODEL
        )

    @staticmethod
    def set_gemini_model(model: str) -> bool:
        return BackendSettings.set_setting(GEMINI_MODEL, model)

    @staticmethod
    def get_api_key() -> Optional[str]:
        """Access key stored with set-api-key, checked by the authentication middleware."""
        return BackendSettings.get_setting(API_KEY)

    @staticmethod
    def set_api_key(api_key: str) -> bool:
        return BackendSettings.set_setting(API_KEY, api_key)

    @staticmethod
    def get_log_level() -> LogLevel:
        """Stored level, then WORDBANK_LOG_LEVEL, then info."""
        level = BackendSettings.get_setting(LOG_LEVEL) or os.getenv("WORDBANK_LOG_LEVEL") or LogLevel.INFO.value
        try:
            return LogLevel(str(level).lower())
        except ValueError:
            return LogLevel.INFO

    @staticmethod
    def set_log_level(level: LogLevel) -> bool:
        return BackendSettings.set_setting(LOG_LEVEL, LogLevel(level).value)
