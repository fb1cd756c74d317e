"""
Database connection utilities.
Centralizes get_db(), the get_db_conn() context manager, and gen_id().
"""

import logging
import sqlite3
import uuid
from contextlib import contextmanager

logger = logging.getLogger("prospector.db")


def get_db(db_path: str = None):
    """Get a database connection with row_factory for dict-like access."""
    from prospector.config import DB_JOURNAL_MODE, DB_PATH

    conn = sqlite3.connect(db_path or DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA journal_mode={DB_JOURNAL_MODE}")
    return conn


@contextmanager
def get_db_conn(db_path: str = None):
    """Context manager for database connections. Ensures connections are always closed."""
    conn = get_db(db_path)
    try:
        yield conn
    finally:
        conn.close()


def gen_id(prefix=""):
    """Generate a prefixed UUID."""
    short = uuid.uuid4().hex[:12]
    return f"{prefix}_{short}" if prefix else short
