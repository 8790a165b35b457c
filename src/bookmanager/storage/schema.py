"""Database schema definition and initialization."""

from __future__ import annotations

import logging

from bookmanager.storage.connection import get_connection

logger = logging.getLogger(__name__)

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS BOOKS (
    ID          INTEGER PRIMARY KEY AUTOINCREMENT,
    NAME        TEXT,
    AUTHOR      TEXT,
    PRINT_YEAR  INTEGER,
    IS_READ     INTEGER CHECK (IS_READ IN (0, 1))
);

CREATE INDEX IF NOT EXISTS idx_books_name ON BOOKS(NAME);
CREATE INDEX IF NOT EXISTS idx_books_author ON BOOKS(AUTHOR);
"""


def init_db(database_path: str) -> None:
    """Create the BOOKS table and its indexes if they do not already exist."""
    with get_connection(database_path) as conn:
        conn.executescript(_SCHEMA_SQL)
    logger.info("Database initialized at %s", database_path)


def reset_db(database_path: str) -> None:
    """Delete every book and restart ID generation at 1."""
    with get_connection(database_path) as conn:
        conn.execute("DELETE FROM BOOKS")
        conn.execute("DELETE FROM sqlite_sequence WHERE name = 'BOOKS'")
    logger.info("Database reset at %s", database_path)
