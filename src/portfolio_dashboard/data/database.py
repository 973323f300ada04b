"""SQLite database connection and schema management."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS investments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    asset_name TEXT NOT NULL,
    asset_type TEXT NOT NULL,
    symbol TEXT DEFAULT NULL,
    quantity TEXT NOT NULL,
    purchase_price TEXT NOT NULL,
    purchase_date TEXT NOT NULL,
    current_price TEXT DEFAULT NULL,
    notes TEXT DEFAULT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_investments_created ON investments(created_at);
"""


class Database:
    def __init__(self, db_path: str = "portfolio.db"):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._in_transaction: bool = False

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def initialize(self):
        """Create tables if they don't exist."""
        self.conn.executescript(SCHEMA)
        self.conn.commit()
        logger.debug("Initialized database at %s", self.db_path)

    @contextmanager
    def transaction(self):
        """Wrap multiple operations in a single atomic commit."""
        self._in_transaction = True
        try:
            yield
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            self._in_transaction = False

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None


# Global database instance, configured at app startup
_db: Database | None = None


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: current working directory
    return Path.cwd()


def get_db() -> Database:
    global _db
    if _db is None:
        default_path = _find_project_root() / "portfolio.db"
        default_path.parent.mkdir(parents=True, exist_ok=True)
        _db = Database(str(default_path))
        _db.initialize()
    return _db


def set_db_path(path: str):
    global _db
    if _db:
        _db.close()
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    _db = Database(str(p))
    _db.initialize()
