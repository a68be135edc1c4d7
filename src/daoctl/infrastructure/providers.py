"""Ledger-backed implementations of the DAO capability interfaces.

:class:`LedgerDaoProvider` satisfies ``DaoProvider`` and
:class:`LedgerCouncilProvider` satisfies ``CouncilProvider``. Both join an
active :meth:`Ledger.transaction` when called from inside one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from daoctl.domain.accounts import ACCOUNT_ID_LEN, derive_dao_account
from daoctl.domain.errors import CouncilError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from daoctl.domain.models import Policy
    from daoctl.infrastructure.ledger import Ledger

logger = logging.getLogger(__name__)


class LedgerDaoProvider:
    """Read-only DAO facts served from the ledger."""

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def exists(self, dao_id: bytes) -> bool:
        with self._ledger.reader() as txn:
            return txn.dao_exists(dao_id)

    def account_id_of(self, dao_id: bytes) -> bytes:
        return derive_dao_account(self._ledger.settings.ledger.pallet_id_bytes, dao_id)

    def policy_of(self, dao_id: bytes) -> Policy | None:
        with self._ledger.reader() as txn:
            return txn.get_policy(dao_id)

    def count(self) -> int:
        with self._ledger.reader() as txn:
            return txn.count_daos()


class LedgerCouncilProvider:
    """Council membership stored next to the DAO records.

    Members are stored sorted, so the stored set is canonical and replaying
    the same set (in any order) changes nothing.
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def _normalize(self, members: Sequence[bytes]) -> list[bytes]:
        limit = self._ledger.settings.council.max_members
        unique = sorted(set(members))
        if not unique:
            raise CouncilError("A council needs at least one member")
        if len(unique) > limit:
            raise CouncilError(
                f"Council of {len(unique)} members exceeds the limit of {limit}",
                limit=limit,
            )
        for account in unique:
            if len(account) != ACCOUNT_ID_LEN:
                raise CouncilError(f"Council member must be {ACCOUNT_ID_LEN} bytes")
        return unique

    def initialize_members(self, dao_id: bytes, members: Sequence[bytes]) -> None:
        normalized = self._normalize(members)
        try:
            with self._ledger.transaction() as txn:
                if not txn.dao_exists(dao_id):
                    raise CouncilError(f"Unknown DAO {dao_id!r}", dao_id=dao_id.hex())
                if txn.get_members(dao_id) == normalized:
                    logger.debug("Council of %r unchanged", dao_id)
                    return
                txn.replace_members(dao_id, normalized)
        except SQLAlchemyError as exc:
            raise CouncilError(f"Council store unavailable: {exc}") from exc
        logger.debug("Council of %r set to %d members", dao_id, len(normalized))

    def members_of(self, dao_id: bytes) -> list[bytes]:
        with self._ledger.reader() as txn:
            return txn.get_members(dao_id)
