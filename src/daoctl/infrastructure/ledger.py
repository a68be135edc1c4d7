"""Ledger — repository over the DAO store with transaction coordination.

The Ledger is the single dependency injected into every service. It owns
the database engine and hands out :class:`LedgerTransaction` objects
carrying the data-access helpers.

Nested :meth:`Ledger.transaction` / :meth:`Ledger.reader` calls join the
outermost active transaction, so a provider invoked from inside a service
transaction writes atomically with it.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError

from daoctl.domain.accounts import account_to_hex
from daoctl.domain.errors import DaoExistsError
from daoctl.domain.models import Bounds, Dao, Policy
from daoctl.infrastructure.database.engine import init_database
from daoctl.infrastructure.database.schema import council_members, daos, policies

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from daoctl.config.settings import DaoSettings

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class LedgerTransaction:
    """Active connection plus typed access to the DAO tables."""

    conn: Connection
    bounds: Bounds

    # --- daos ---

    def dao_exists(self, dao_id: bytes) -> bool:
        row = self.conn.execute(select(daos.c.id).where(daos.c.id == dao_id)).first()
        return row is not None

    def get_dao(self, dao_id: bytes) -> Dao | None:
        row = self.conn.execute(select(daos.c.record).where(daos.c.id == dao_id)).first()
        if row is None:
            return None
        return Dao.decode(row.record, self.bounds)

    def insert_dao(self, dao_id: bytes, dao: Dao) -> None:
        """Store a new DAO; ids and derived accounts are unique."""
        try:
            self.conn.execute(
                insert(daos).values(
                    id=dao_id,
                    founder=dao.founder,
                    account_id=dao.account_id,
                    token_id=dao.token_id,
                    record=dao.encode(),
                    created=_now_iso(),
                )
            )
        except IntegrityError as exc:
            msg = f"DAO account {account_to_hex(dao.account_id)} is already in use"
            raise DaoExistsError(msg, dao_id=dao_id.hex()) from exc

    def count_daos(self) -> int:
        return int(self.conn.execute(select(func.count()).select_from(daos)).scalar_one())

    def list_dao_ids(self) -> list[bytes]:
        rows = self.conn.execute(select(daos.c.id).order_by(daos.c.id)).all()
        return [row.id for row in rows]

    # --- policies ---

    def get_policy(self, dao_id: bytes) -> Policy | None:
        row = self.conn.execute(
            select(policies.c.record).where(policies.c.dao_id == dao_id)
        ).first()
        if row is None:
            return None
        return Policy.decode(row.record)

    def put_policy(self, dao_id: bytes, policy: Policy) -> None:
        """Insert or replace the policy of *dao_id*."""
        self.conn.execute(delete(policies).where(policies.c.dao_id == dao_id))
        self.conn.execute(
            insert(policies).values(dao_id=dao_id, record=policy.encode(), modified=_now_iso())
        )

    # --- council ---

    def get_members(self, dao_id: bytes) -> list[bytes]:
        rows = self.conn.execute(
            select(council_members.c.account_id)
            .where(council_members.c.dao_id == dao_id)
            .order_by(council_members.c.position)
        ).all()
        return [row.account_id for row in rows]

    def replace_members(self, dao_id: bytes, members: Sequence[bytes]) -> None:
        self.conn.execute(delete(council_members).where(council_members.c.dao_id == dao_id))
        if members:
            self.conn.execute(
                insert(council_members),
                [
                    {"dao_id": dao_id, "position": i, "account_id": account}
                    for i, account in enumerate(members)
                ],
            )


class Ledger:
    """Repository encapsulating the DAO database.

    Constructed once at CLI startup from :class:`DaoSettings`. Services
    receive the Ledger via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: DaoSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._active: LedgerTransaction | None = None

    @property
    def root(self) -> Path:
        return self._settings.ledger_root

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine, created (with the schema) on first use."""
        if self._engine is None:
            self._engine = init_database(self._settings.ledger_root)
        return self._engine

    @property
    def settings(self) -> DaoSettings:
        return self._settings

    @property
    def bounds(self) -> Bounds:
        return self._settings.limits.to_bounds()

    @contextmanager
    def transaction(self) -> Iterator[LedgerTransaction]:
        """Open a write transaction, or join the one already active.

        Commits when the outermost block exits normally and rolls back
        if it raises.
        """
        if self._active is not None:
            yield self._active
            return
        with self.engine.begin() as conn:
            txn = LedgerTransaction(conn=conn, bounds=self.bounds)
            self._active = txn
            try:
                yield txn
            except Exception:
                logger.debug("Ledger transaction rolled back", exc_info=True)
                raise
            finally:
                self._active = None

    @contextmanager
    def reader(self) -> Iterator[LedgerTransaction]:
        """Read-only access; joins the active transaction if there is one."""
        if self._active is not None:
            yield self._active
            return
        with self.engine.connect() as conn:
            yield LedgerTransaction(conn=conn, bounds=self.bounds)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
