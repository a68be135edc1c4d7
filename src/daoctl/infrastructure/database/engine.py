"""Database engine setup for SQLite with WAL mode.

The DB is stored at {ledger_root}/.daoctl/ledger.db. SQLAlchemy Core
(not ORM) is used: records are opaque encoded blobs, so there is nothing
for an identity map to track.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from daoctl.infrastructure.database.schema import metadata

DATA_DIR = ".daoctl"
DB_FILENAME = "ledger.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(ledger_root: Path) -> Engine:
    """Initialize the ledger database at ``{ledger_root}/.daoctl/ledger.db``.

    Idempotent — safe to call on an existing ledger.
    """
    data_dir = ledger_root / DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
