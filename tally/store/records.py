"""Key-value record store primitives.

Values are text blobs keyed by name. String lists are stored as JSON arrays.
Reads never create the database; writes create it on demand.
"""

import json
import logging
import sqlite3
from collections.abc import Sequence
from contextlib import closing
from pathlib import Path

from tally.store.schema import database_exists, get_db_path, init_database

logger = logging.getLogger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def get_string(key: str, db_path: Path | None = None) -> str | None:
    """Get a stored string.

    Args:
        key: Record key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored value, or None if the key or the database does not exist.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if not database_exists(db_path):
        return None

    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM records WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row["value"] if row else None


def set_string(key: str, value: str, db_path: Path | None = None) -> None:
    """Store a string, replacing any previous value.

    Args:
        key: Record key.
        value: Value to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if not database_exists(db_path):
        init_database(db_path)

    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO records (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
            logger.debug("Wrote %s (%d bytes)", key, len(value))
        except sqlite3.Error:
            conn.rollback()
            raise


def get_string_list(key: str, db_path: Path | None = None) -> list[str] | None:
    """Get a stored list of strings.

    Args:
        key: Record key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored list, or None if nothing is stored under the key.

    Raises:
        sqlite3.Error: If database operation fails.
        json.JSONDecodeError: If the stored value is not a JSON array.
    """
    value = get_string(key, db_path)
    if value is None:
        return None
    return list(json.loads(value))


def set_string_list(key: str, values: Sequence[str], db_path: Path | None = None) -> None:
    """Store a list of strings, replacing any previous value.

    Args:
        key: Record key.
        values: Strings to store, order preserved.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_string(key, json.dumps(list(values), ensure_ascii=False), db_path)
