"""SQLAlchemy Core table definitions for the ledger database.

Records are stored in their deterministic binary encoding (``record``
columns). A few fields are duplicated into plain columns for lookups.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    LargeBinary,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

daos = Table(
    "daos",
    metadata,
    Column("id", LargeBinary, primary_key=True),
    Column("founder", LargeBinary, nullable=False),
    Column("account_id", LargeBinary, nullable=False, unique=True),
    Column("token_id", Integer, nullable=False),
    Column("record", LargeBinary, nullable=False),  # encoded Dao
    Column("created", Text, nullable=False),
)

# Keyed by the DAO id but stored apart from the Dao record.
policies = Table(
    "policies",
    metadata,
    Column("dao_id", LargeBinary, ForeignKey("daos.id"), primary_key=True),
    Column("record", LargeBinary, nullable=False),  # encoded Policy
    Column("modified", Text, nullable=False),
)

council_members = Table(
    "council_members",
    metadata,
    Column("dao_id", LargeBinary, ForeignKey("daos.id"), primary_key=True),
    Column("position", Integer, primary_key=True),
    Column("account_id", LargeBinary, nullable=False),
    UniqueConstraint("dao_id", "account_id"),
)
