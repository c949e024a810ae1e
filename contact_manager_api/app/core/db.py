"""
SQLite database integration.

This module provides ``open_connection`` for obtaining the single
connection shared by the whole process and ``init_db`` which creates
the ``contacts`` table on application start.  The schema is created
with ``IF NOT EXISTS`` so restarting against an existing file is safe;
there is no migration mechanism.
"""

import logging
import os
import sqlite3
from pathlib import Path

from .config import Settings

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

CONTACTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS contacts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    phone TEXT NOT NULL,
    email TEXT,
    address TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

UNIQUE_EMAIL_INDEX = "CREATE UNIQUE INDEX IF NOT EXISTS idx_contacts_email ON contacts(email)"


def get_database_path(settings: Settings) -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path (or ``:memory:``),
    use it directly.  Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if db_url == MEMORY_DATABASE or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def open_connection(settings: Settings) -> sqlite3.Connection:
    """Open the shared SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  The connection is opened in autocommit mode: every statement
    the store issues is its own transaction unless it opens one
    explicitly.  WAL journaling lets readers proceed while a write is
    in progress.
    """
    db_path = get_database_path(settings)
    conn = sqlite3.connect(db_path, check_same_thread=False, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL")
    logger.debug("Opened database %s", db_path)
    return conn


def init_db(conn: sqlite3.Connection, unique_email: bool = False) -> None:
    """Create the contacts table and, optionally, the unique email index."""
    conn.execute(CONTACTS_SCHEMA)
    if unique_email:
        conn.execute(UNIQUE_EMAIL_INDEX)
    logger.info("Database schema ready", extra={"unique_email": unique_email})
