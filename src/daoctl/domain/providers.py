"""Capability interfaces other modules use to reach DAOs.

Consumers depend on these protocols, never on a concrete store, so any
implementation with the right method set can be injected.

Contracts:
- ``DaoProvider.account_id_of`` is defined for every id, including ids
  that do not exist yet, so addresses can be precomputed.
- ``CouncilProvider.initialize_members`` is idempotent for an identical
  member set and replaces the set otherwise. Failures raise
  :class:`~daoctl.domain.errors.CouncilError`; they are never swallowed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from daoctl.domain.models import Policy


@runtime_checkable
class DaoProvider(Protocol):
    """Read-only facts about DAOs."""

    def exists(self, dao_id: bytes) -> bool:
        """Whether a DAO with *dao_id* is currently stored."""
        ...

    def account_id_of(self, dao_id: bytes) -> bytes:
        """The account owned by *dao_id* (deterministic, storage-free)."""
        ...

    def policy_of(self, dao_id: bytes) -> Policy | None:
        """The DAO's policy, or None if the DAO or its policy is missing."""
        ...

    def count(self) -> int:
        """Number of DAOs currently tracked."""
        ...


@runtime_checkable
class CouncilProvider(Protocol):
    """Membership management used by the DAO-creation flow."""

    def initialize_members(self, dao_id: bytes, members: Sequence[bytes]) -> None:
        """Set the council of *dao_id* to exactly *members*."""
        ...
