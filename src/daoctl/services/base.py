"""BaseService — abstract foundation for all daoctl services.

Every service receives a :class:`Ledger` at construction time and owns
its transaction boundaries via ``self._ledger.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from daoctl.services.result import ServiceResult

if TYPE_CHECKING:
    from daoctl.domain.errors import DaoError
    from daoctl.infrastructure.ledger import Ledger

logger = structlog.get_logger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class DaoService(BaseService):
            def create(self, dao_id: bytes, raw: bytes, ...) -> ServiceResult:
                with self._ledger.transaction() as txn:
                    ...
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def _reject(self, op: str, exc: DaoError) -> ServiceResult:
        """Log a rejected operation and wrap it in a failed ServiceResult."""
        logger.info("operation rejected", op=op, code=exc.code, reason=exc.message)
        return ServiceResult.failure(op, exc)
