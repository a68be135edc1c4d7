"""Bounded on-ledger models — the only shapes the storage layer accepts.

- :class:`Config`: name/purpose/metadata under configured maxima.
- :class:`Policy`: bonding and approval thresholds.
- :class:`Dao`: aggregate binding founder, DAO account, token and Config.

INVARIANT: bounds are checked when a record is constructed, never only at
encode time, and oversized input is rejected rather than truncated.
Stored lengths feed weight accounting downstream.

Each record encodes deterministically (:mod:`daoctl.domain.codec`) and
reports its worst-case encoded size via ``max_encoded_len``.
"""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    model_validator,
)

from daoctl.domain.accounts import ACCOUNT_ID_LEN, AccountId
from daoctl.domain.codec import (
    ScaleReader,
    bounded_bytes_max_len,
    encode_bytes,
    encode_option,
    encode_u32,
    encode_u128,
)
from daoctl.domain.errors import (
    DaoValidationError,
    DecodeError,
    InvalidPolicyError,
    TooLongError,
)
from daoctl.domain.scalars import U32_MAX, U128_MAX

U32 = Annotated[int, Field(strict=True, ge=0, le=U32_MAX)]
U128 = Annotated[int, Field(strict=True, ge=0, le=U128_MAX)]

# proposal_bond is a Permill: parts per million of the proposal value.
BOND_DENOMINATOR = 1_000_000

_RECORD = ConfigDict(frozen=True, extra="forbid")


class Bounds(BaseModel):
    """Maximum byte lengths for bounded fields.

    ``string_limit`` caps name and purpose (L1); ``metadata_limit`` caps
    the free-form metadata blob (L2).
    """

    model_config = {"frozen": True}

    string_limit: int = Field(default=64, gt=0)
    metadata_limit: int = Field(default=256, ge=0)


DEFAULT_BOUNDS = Bounds()


def _context_bounds(info: ValidationInfo) -> Bounds:
    context = info.context or {}
    bounds = context.get("bounds")
    return bounds if isinstance(bounds, Bounds) else DEFAULT_BOUNDS


def check_bounded(field: str, value: bytes, limit: int) -> bytes:
    """Return *value* unchanged or raise :class:`TooLongError`."""
    if len(value) > limit:
        raise TooLongError(field, len(value), limit)
    return value


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class Config(BaseModel):
    """Bounded DAO configuration.

    Construct with :meth:`bounded` to check against explicit bounds;
    plain construction checks against :data:`DEFAULT_BOUNDS`.
    """

    model_config = _RECORD

    name: bytes
    purpose: bytes
    metadata: bytes

    @model_validator(mode="after")
    def _check_bounds(self, info: ValidationInfo) -> Self:
        bounds = _context_bounds(info)
        check_bounded("name", self.name, bounds.string_limit)
        check_bounded("purpose", self.purpose, bounds.string_limit)
        check_bounded("metadata", self.metadata, bounds.metadata_limit)
        return self

    @classmethod
    def bounded(cls, *, name: bytes, purpose: bytes, metadata: bytes, bounds: Bounds) -> Config:
        return cls.model_validate(
            {"name": name, "purpose": purpose, "metadata": metadata},
            context={"bounds": bounds},
        )

    def encode(self) -> bytes:
        return encode_bytes(self.name) + encode_bytes(self.purpose) + encode_bytes(self.metadata)

    @classmethod
    def read(cls, reader: ScaleReader, bounds: Bounds) -> Config:
        return cls.bounded(
            name=reader.read_bytes(max_len=bounds.string_limit),
            purpose=reader.read_bytes(max_len=bounds.string_limit),
            metadata=reader.read_bytes(max_len=bounds.metadata_limit),
            bounds=bounds,
        )

    @classmethod
    def decode(cls, data: bytes, bounds: Bounds = DEFAULT_BOUNDS) -> Config:
        reader = ScaleReader(data)
        config = cls.read(reader, bounds)
        reader.finish()
        return config

    @staticmethod
    def max_encoded_len(bounds: Bounds = DEFAULT_BOUNDS) -> int:
        return 2 * bounded_bytes_max_len(bounds.string_limit) + bounded_bytes_max_len(
            bounds.metadata_limit
        )


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


class Ratio(BaseModel):
    """A ``numerator / denominator`` share of council members.

    Accepts a ``(numerator, denominator)`` pair as input, which is how
    TOML and JSON carry it.
    """

    model_config = _RECORD

    numerator: U32
    denominator: U32

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                msg = f"expected a (numerator, denominator) pair, got {len(data)} items"
                raise ValueError(msg)
            return {"numerator": data[0], "denominator": data[1]}
        return data

    @model_validator(mode="after")
    def _check_ratio(self) -> Self:
        if self.denominator == 0:
            raise InvalidPolicyError("Origin ratio denominator must be non-zero")
        if self.numerator > self.denominator:
            raise InvalidPolicyError(
                f"Origin ratio {self.numerator}/{self.denominator} exceeds 1"
            )
        return self

    def as_tuple(self) -> tuple[int, int]:
        return self.numerator, self.denominator

    def is_met(self, ayes: int, total: int) -> bool:
        """Whether *ayes* out of *total* members reach this threshold."""
        if total <= 0:
            return False
        return ayes * self.denominator >= self.numerator * total

    def encode(self) -> bytes:
        return encode_u32(self.numerator) + encode_u32(self.denominator)

    @classmethod
    def read(cls, reader: ScaleReader) -> Ratio:
        return cls(numerator=reader.read_u32(), denominator=reader.read_u32())


class Policy(BaseModel):
    """Proposal bonding and approval thresholds of a DAO.

    Attributes:
        proposal_bond: Permill of a proposal's value that must be bonded.
            An accepted proposal gets the bond back, a rejected one does not.
        proposal_bond_min: Lower bound of the bond, in token base units.
        proposal_bond_max: Optional upper bound; ``>= proposal_bond_min``.
        proposal_period: Voting period in milliseconds, ``> 0``.
        prime_account: Account with the casting vote (the founder by default).
        approve_origin: Share of council members required to approve.
        reject_origin: Share of council members required to reject.
    """

    model_config = _RECORD

    proposal_bond: U32
    proposal_bond_min: U128
    proposal_bond_max: U128 | None = None
    proposal_period: U32
    prime_account: AccountId
    approve_origin: Ratio
    reject_origin: Ratio

    @model_validator(mode="after")
    def _check_policy(self) -> Self:
        if self.proposal_period == 0:
            raise InvalidPolicyError("proposal_period must be greater than zero")
        if self.proposal_bond > BOND_DENOMINATOR:
            raise InvalidPolicyError(
                f"proposal_bond {self.proposal_bond} exceeds {BOND_DENOMINATOR} (100%)"
            )
        if self.proposal_bond_max is not None and self.proposal_bond_max < self.proposal_bond_min:
            raise InvalidPolicyError(
                "proposal_bond_max must not be lower than proposal_bond_min",
                proposal_bond_min=self.proposal_bond_min,
                proposal_bond_max=self.proposal_bond_max,
            )
        return self

    def bond_for(self, value: int) -> int:
        """Bond required for a proposal worth *value*, clamped to min/max."""
        bond = max(self.proposal_bond_min, value * self.proposal_bond // BOND_DENOMINATOR)
        if self.proposal_bond_max is not None:
            bond = min(bond, self.proposal_bond_max)
        return bond

    def encode(self) -> bytes:
        return b"".join(
            [
                encode_u32(self.proposal_bond),
                encode_u128(self.proposal_bond_min),
                encode_option(self.proposal_bond_max, encode_u128),
                encode_u32(self.proposal_period),
                self.prime_account,
                self.approve_origin.encode(),
                self.reject_origin.encode(),
            ]
        )

    @classmethod
    def decode(cls, data: bytes) -> Policy:
        """Decode a stored policy; bytes breaking a policy rule are a DecodeError."""
        reader = ScaleReader(data)
        try:
            policy = cls(
                proposal_bond=reader.read_u32(),
                proposal_bond_min=reader.read_u128(),
                proposal_bond_max=reader.read_option(ScaleReader.read_u128),
                proposal_period=reader.read_u32(),
                prime_account=reader.read_fixed(ACCOUNT_ID_LEN),
                approve_origin=Ratio.read(reader),
                reject_origin=Ratio.read(reader),
            )
        except DaoValidationError as exc:
            raise DecodeError(f"Stored policy is invalid: {exc.message}") from exc
        reader.finish()
        return policy

    @staticmethod
    def max_encoded_len() -> int:
        # bond + min + Option<max> + period + prime + two ratios
        return 4 + 16 + (1 + 16) + 4 + ACCOUNT_ID_LEN + 8 + 8


# ---------------------------------------------------------------------------
# Dao aggregate
# ---------------------------------------------------------------------------


class Dao(BaseModel):
    """A stored DAO: who founded it, its account, its token, its Config."""

    model_config = _RECORD

    founder: AccountId
    account_id: AccountId
    token_id: U32
    config: Config

    def encode(self) -> bytes:
        return self.founder + self.account_id + encode_u32(self.token_id) + self.config.encode()

    @classmethod
    def decode(cls, data: bytes, bounds: Bounds = DEFAULT_BOUNDS) -> Dao:
        reader = ScaleReader(data)
        dao = cls(
            founder=reader.read_fixed(ACCOUNT_ID_LEN),
            account_id=reader.read_fixed(ACCOUNT_ID_LEN),
            token_id=reader.read_u32(),
            config=Config.read(reader, bounds),
        )
        reader.finish()
        return dao

    @staticmethod
    def max_encoded_len(bounds: Bounds = DEFAULT_BOUNDS) -> int:
        return 2 * ACCOUNT_ID_LEN + 4 + Config.max_encoded_len(bounds)
