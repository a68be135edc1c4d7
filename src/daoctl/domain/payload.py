"""Untrusted payload models — the shape operators submit off-ledger.

These models mirror the JSON a caller hands in. String fields become
bytes through :func:`string_to_bytes`, decimal strings become integers
through :func:`string_to_u128`. Nothing here is bounded yet; bounding
happens in :mod:`daoctl.domain.conversion`.

The wire format carries two optional keys, ``token`` (mint a new
governance token) and ``token_id`` (reuse an existing one). They are
folded into a single tagged variant, ``token_source``, so a Payload can
never hold both or neither.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from daoctl.domain.errors import ConflictingTokenError, MissingTokenError
from daoctl.domain.scalars import (
    U8_MAX,
    U32_MAX,
    U128_MAX,
    check_u128,
    string_to_bytes,
    string_to_u128,
)


def _wire_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return string_to_bytes(value)
    msg = f"expected a string, got {type(value).__name__}"
    raise ValueError(msg)


def _wire_u128(value: Any) -> int:
    if isinstance(value, str):
        return string_to_u128(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return check_u128(value)
    msg = f"expected a decimal string, got {type(value).__name__}"
    raise ValueError(msg)


def _wire_decimal(value: Any) -> int:
    if isinstance(value, str):
        return string_to_u128(value)
    msg = f"expected a decimal string, got {type(value).__name__}"
    raise ValueError(msg)


WireBytes = Annotated[bytes, BeforeValidator(_wire_bytes)]
WireU128 = Annotated[int, BeforeValidator(_wire_u128), Field(ge=0, le=U128_MAX)]
# Token amounts travel as decimal strings only.
DecimalU128 = Annotated[int, BeforeValidator(_wire_decimal), Field(ge=0, le=U128_MAX)]
U8 = Annotated[int, Field(strict=True, ge=0, le=U8_MAX)]
U32 = Annotated[int, Field(strict=True, ge=0, le=U32_MAX)]
TokenId = U32

_FROZEN_STRICT = ConfigDict(frozen=True, extra="forbid")


class TokenMetadata(BaseModel):
    """Human-readable metadata of a governance token."""

    model_config = _FROZEN_STRICT

    name: WireBytes
    symbol: WireBytes
    decimals: U8


class GovernanceToken(BaseModel):
    """A governance token to mint alongside the DAO."""

    model_config = _FROZEN_STRICT

    token_id: TokenId
    metadata: TokenMetadata
    min_balance: DecimalU128


class PolicyPayload(BaseModel):
    """Policy knobs the creator may choose.

    ``proposal_period`` is in milliseconds. ``proposal_bond`` is a Permill
    (see :data:`daoctl.domain.models.BOND_DENOMINATOR`).
    """

    model_config = _FROZEN_STRICT

    proposal_bond: U32
    proposal_bond_min: WireU128
    proposal_bond_max: WireU128 | None = None
    proposal_period: U32


class NewToken(BaseModel):
    """Create the DAO together with a freshly minted governance token."""

    model_config = _FROZEN_STRICT

    kind: Literal["new"] = "new"
    token: GovernanceToken

    @property
    def token_id(self) -> int:
        return self.token.token_id


class ExistingToken(BaseModel):
    """Bind the DAO to a token that already exists on the ledger."""

    model_config = _FROZEN_STRICT

    kind: Literal["existing"] = "existing"
    token_id: TokenId


TokenSource = Annotated[NewToken | ExistingToken, Field(discriminator="kind")]


class Payload(BaseModel):
    """A DAO-creation request, prior to bounding."""

    model_config = _FROZEN_STRICT

    name: WireBytes
    purpose: WireBytes
    metadata: WireBytes
    token_source: TokenSource
    policy: PolicyPayload

    @model_validator(mode="before")
    @classmethod
    def _fold_token_fields(cls, data: Any) -> Any:
        """Turn the wire keys ``token`` / ``token_id`` into ``token_source``.

        ``token_source`` itself is accepted only as an already-built
        :class:`NewToken` or :class:`ExistingToken`, never from raw input.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        token = data.pop("token", None)
        token_id = data.pop("token_id", None)
        if "token_source" in data:
            if not isinstance(data["token_source"], (NewToken, ExistingToken)):
                msg = "token_source is not a payload key; use token or token_id"
                raise ValueError(msg)
            if token is not None or token_id is not None:
                raise ConflictingTokenError()
            return data
        if token is not None and token_id is not None:
            raise ConflictingTokenError()
        if token is not None:
            data["token_source"] = {"kind": "new", "token": token}
        elif token_id is not None:
            data["token_source"] = {"kind": "existing", "token_id": token_id}
        else:
            raise MissingTokenError()
        return data
