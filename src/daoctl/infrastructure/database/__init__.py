"""SQLite database engine and schema via SQLAlchemy Core."""

from daoctl.infrastructure.database.engine import create_db_engine, init_database
from daoctl.infrastructure.database.schema import council_members, daos, metadata, policies

__all__ = [
    "council_members",
    "create_db_engine",
    "daos",
    "init_database",
    "metadata",
    "policies",
]
