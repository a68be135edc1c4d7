"""DaoService — validate payloads, create DAOs, and answer lookups.

Creation is atomic: the Dao record, its Policy and its council are
written in one ledger transaction, and any error rolls all of them back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from daoctl.domain.accounts import ACCOUNT_ID_LEN, account_to_hex, check_dao_id
from daoctl.domain.conversion import DaoDraft, convert_payload, parse_payload
from daoctl.domain.errors import (
    DaoError,
    DaoExistsError,
    DaoNotFoundError,
    InvalidAccountError,
)
from daoctl.domain.models import Config, Dao, Policy
from daoctl.infrastructure.providers import LedgerCouncilProvider, LedgerDaoProvider
from daoctl.services._helpers import as_text, config_data, policy_data, token_data
from daoctl.services.base import BaseService
from daoctl.services.contracts import (
    AccountResultData,
    CountResultData,
    DaoRecordData,
    ValidateResultData,
    dump_validated,
)
from daoctl.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from daoctl.domain.providers import CouncilProvider, DaoProvider
    from daoctl.infrastructure.ledger import Ledger

logger = structlog.get_logger(__name__)


class DaoService(BaseService):
    """DAO lifecycle entry points over a :class:`Ledger`.

    The DAO and council providers default to the ledger-backed ones; any
    object satisfying the provider protocols can be injected instead.
    """

    def __init__(
        self,
        ledger: Ledger,
        *,
        daos: DaoProvider | None = None,
        council: CouncilProvider | None = None,
    ) -> None:
        super().__init__(ledger)
        self._daos: DaoProvider = daos or LedgerDaoProvider(ledger)
        self._council: CouncilProvider = council or LedgerCouncilProvider(ledger)

    def _draft(self, raw: bytes | str, founder: bytes) -> DaoDraft:
        if len(founder) != ACCOUNT_ID_LEN:
            msg = f"Founder must be {ACCOUNT_ID_LEN} bytes, got {len(founder)}"
            raise InvalidAccountError(msg)
        settings = self._ledger.settings
        return convert_payload(
            parse_payload(raw),
            bounds=self._ledger.bounds,
            prime_account=founder,
            approve_origin=settings.policy.approve_origin,
            reject_origin=settings.policy.reject_origin,
        )

    # ------------------------------------------------------------------
    # Dry run
    # ------------------------------------------------------------------

    def validate(self, raw: bytes | str, *, founder: bytes) -> ServiceResult:
        """Convert *raw* without touching the ledger."""
        op = "validate_payload"
        try:
            draft = self._draft(raw, founder)
        except DaoError as exc:
            return self._reject(op, exc)

        bounds = self._ledger.bounds
        config_bytes = draft.config.encode()
        policy_bytes = draft.policy.encode()
        data = {
            "config": config_data(draft.config),
            "policy": policy_data(draft.policy),
            "token": token_data(draft.token_source),
            "encoded": {"config": config_bytes.hex(), "policy": policy_bytes.hex()},
            "encoded_len": {
                "config": len(config_bytes),
                "policy": len(policy_bytes),
                "dao": 2 * ACCOUNT_ID_LEN + 4 + len(config_bytes),
            },
            "max_encoded_len": {
                "config": Config.max_encoded_len(bounds),
                "policy": Policy.max_encoded_len(),
                "dao": Dao.max_encoded_len(bounds),
            },
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(ValidateResultData, data))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(
        self,
        dao_id: bytes,
        raw: bytes | str,
        *,
        founder: bytes,
        members: Sequence[bytes] = (),
    ) -> ServiceResult:
        """Create DAO *dao_id* from payload *raw*.

        The council defaults to the founder alone when *members* is empty.
        """
        op = "create_dao"
        warnings: list[str] = []
        try:
            check_dao_id(dao_id, self._ledger.settings.ledger.id_limit)
            draft = self._draft(raw, founder)
            council = list(members) or [founder]
            with self._ledger.transaction() as txn:
                if self._daos.exists(dao_id):
                    raise DaoExistsError(f"DAO {as_text(dao_id)!r} already exists")
                dao = Dao(
                    founder=founder,
                    account_id=self._daos.account_id_of(dao_id),
                    token_id=draft.token_id,
                    config=draft.config,
                )
                txn.insert_dao(dao_id, dao)
                txn.put_policy(dao_id, draft.policy)
                self._council.initialize_members(dao_id, council)
        except DaoError as exc:
            return self._reject(op, exc)

        if not members:
            warnings.append("No council members given; the founder is the only member")
        logger.info(
            "dao created",
            dao_id=as_text(dao_id),
            account_id=account_to_hex(dao.account_id),
            token=draft.token_source.kind,
        )
        data = self._record_data(dao_id, dao, draft.policy, sorted(set(council)))
        data["token"] = token_data(draft.token_source)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(DaoRecordData, data),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def show(self, dao_id: bytes) -> ServiceResult:
        op = "show_dao"
        try:
            with self._ledger.reader() as txn:
                dao = txn.get_dao(dao_id)
                if dao is None:
                    raise DaoNotFoundError(f"No DAO with id {as_text(dao_id)!r}")
                policy = txn.get_policy(dao_id)
                members = txn.get_members(dao_id)
        except DaoError as exc:
            return self._reject(op, exc)

        data = self._record_data(dao_id, dao, policy, members)
        return ServiceResult(ok=True, op=op, data=dump_validated(DaoRecordData, data))

    def account_of(self, dao_id: bytes) -> ServiceResult:
        """The DAO's account, available before the DAO is created."""
        op = "dao_account"
        data = {
            "dao_id": as_text(dao_id),
            "account_id": account_to_hex(self._daos.account_id_of(dao_id)),
            "exists": self._daos.exists(dao_id),
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(AccountResultData, data))

    def count(self) -> ServiceResult:
        op = "count_daos"
        with self._ledger.reader() as txn:
            dao_ids = [as_text(dao_id) for dao_id in txn.list_dao_ids()]
        data = {"count": self._daos.count(), "dao_ids": dao_ids}
        return ServiceResult(ok=True, op=op, data=dump_validated(CountResultData, data))

    @staticmethod
    def _record_data(
        dao_id: bytes,
        dao: Dao,
        policy: Policy | None,
        members: Sequence[bytes],
    ) -> dict[str, Any]:
        return {
            "dao_id": as_text(dao_id),
            "founder": account_to_hex(dao.founder),
            "account_id": account_to_hex(dao.account_id),
            "token_id": dao.token_id,
            "config": config_data(dao.config),
            "policy": policy_data(policy) if policy is not None else None,
            "council": [account_to_hex(account) for account in members],
        }
