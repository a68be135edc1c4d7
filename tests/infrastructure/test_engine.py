"""Tests for the SQLite engine and schema setup."""

from pathlib import Path

from sqlalchemy import inspect, text

from daoctl.infrastructure.database import init_database
from daoctl.infrastructure.database.engine import DATA_DIR, DB_FILENAME


class TestInitDatabase:
    def test_creates_db_file(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            assert (tmp_path / DATA_DIR / DB_FILENAME).is_file()
        finally:
            engine.dispose()

    def test_creates_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"daos", "policies", "council_members"} <= tables
        finally:
            engine.dispose()

    def test_pragmas(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path).dispose()
        engine = init_database(tmp_path)
        try:
            assert "daos" in inspect(engine).get_table_names()
        finally:
            engine.dispose()
