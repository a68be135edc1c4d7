"""Account identifiers and DAO account derivation.

Accounts are 32 raw bytes on the ledger and ``0x``-prefixed hex on text
surfaces (CLI flags, JSON output).

A DAO's account is a sub-account of the governance module's pallet id:
``b"modl" + pallet_id + compact(len(dao_id)) + dao_id``, zero-padded or
truncated to 32 bytes. The derivation needs no storage, so the address
of a DAO is known before the DAO exists.

INVARIANT: a DAO's account never changes for the DAO's lifetime.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from daoctl.domain.codec import encode_bytes
from daoctl.domain.errors import InvalidAccountError, InvalidDaoIdError, TooLongError

ACCOUNT_ID_LEN = 32
PALLET_ID_LEN = 8
MODULE_PREFIX = b"modl"

AccountId = Annotated[bytes, Field(min_length=ACCOUNT_ID_LEN, max_length=ACCOUNT_ID_LEN)]
DaoId = bytes


def derive_dao_account(pallet_id: bytes, dao_id: DaoId) -> bytes:
    """Deterministically derive the account owned by *dao_id*."""
    if len(pallet_id) != PALLET_ID_LEN:
        msg = f"Pallet id must be {PALLET_ID_LEN} bytes, got {len(pallet_id)}"
        raise ValueError(msg)
    raw = MODULE_PREFIX + pallet_id + encode_bytes(dao_id)
    return raw[:ACCOUNT_ID_LEN].ljust(ACCOUNT_ID_LEN, b"\x00")


def account_from_hex(value: str) -> bytes:
    """Parse a ``0x``-prefixed (or bare) hex account id.

    Raises:
        InvalidAccountError: If *value* is not 32 bytes of hex.
    """
    text = value[2:] if value.lower().startswith("0x") else value
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidAccountError(f"Account id is not valid hex: {value!r}", value=value) from exc
    if len(raw) != ACCOUNT_ID_LEN:
        msg = f"Account id must be {ACCOUNT_ID_LEN} bytes, got {len(raw)}"
        raise InvalidAccountError(msg, value=value)
    return raw


def account_to_hex(account: bytes) -> str:
    return "0x" + account.hex()


def check_dao_id(dao_id: DaoId, limit: int) -> DaoId:
    """Reject empty ids and ids longer than *limit* bytes."""
    if not dao_id:
        raise InvalidDaoIdError("DAO id must not be empty")
    if len(dao_id) > limit:
        raise TooLongError("dao_id", len(dao_id), limit)
    return dao_id
