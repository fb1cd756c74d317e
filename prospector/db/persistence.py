"""
Prospector - Persistence collaborators.

Stores talk to a key -> list-of-documents capability with two methods:
load(key) and save(key, documents). Two implementations live here: an
in-memory one for tests and ephemeral sessions, and an SQLite one that keeps
each key as a single JSON document so a save is one atomic statement.
"""

import json
import logging
from copy import deepcopy
from datetime import datetime, timezone
from typing import Dict, List

from prospector.db.connection import get_db_conn

logger = logging.getLogger("prospector.db.persistence")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_documents (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL DEFAULT '[]',
    updated_at TEXT NOT NULL
);
"""


class InMemoryPersistence:
    """Dict-backed persistence. Copies on the way in and out so callers can't alias."""

    def __init__(self, initial: Dict[str, List[dict]] = None):
        self._data = {k: deepcopy(v) for k, v in (initial or {}).items()}
        self.save_count = 0

    def load(self, key: str) -> List[dict]:
        return deepcopy(self._data.get(key, []))

    def save(self, key: str, documents: List[dict]) -> None:
        self._data[key] = deepcopy(list(documents))
        self.save_count += 1


class SQLitePersistence:
    """SQLite-backed persistence, one row per key."""

    def __init__(self, db_path: str = None):
        if db_path is None:
            from prospector.config import DB_PATH
            db_path = DB_PATH
        self.db_path = db_path
        self.init_db()

    def init_db(self) -> None:
        with get_db_conn(self.db_path) as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        logger.debug("Persistence ready at %s", self.db_path)

    def load(self, key: str) -> List[dict]:
        with get_db_conn(self.db_path) as conn:
            row = conn.execute(
                "SELECT payload FROM kv_documents WHERE key=?", (key,)
            ).fetchone()
        if not row:
            return []
        return json.loads(row["payload"])

    def save(self, key: str, documents: List[dict]) -> None:
        payload = json.dumps(list(documents), ensure_ascii=False)
        now = datetime.now(timezone.utc).isoformat()
        with get_db_conn(self.db_path) as conn:
            conn.execute("""
                INSERT INTO kv_documents (key, payload, updated_at) VALUES (?,?,?)
                ON CONFLICT(key) DO UPDATE SET payload=excluded.payload,
                    updated_at=excluded.updated_at
            """, (key, payload, now))
            conn.commit()
        logger.debug("Saved %d document(s) under '%s'", len(documents), key)

    def keys(self) -> List[str]:
        with get_db_conn(self.db_path) as conn:
            rows = conn.execute("SELECT key FROM kv_documents ORDER BY key").fetchall()
        return [r["key"] for r in rows]
