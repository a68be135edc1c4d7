"""Typed payload contracts for service and CLI boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class ConfigData(BaseModel):
    name: str
    purpose: str
    metadata: str


class PolicyData(BaseModel):
    proposal_bond: int
    proposal_bond_min: str
    proposal_bond_max: str | None = None
    proposal_period: int
    prime_account: str
    approve_origin: list[int]
    reject_origin: list[int]


class TokenData(BaseModel):
    """Token binding: ``new`` carries the metadata to mint."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["new", "existing"]
    token_id: int
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    min_balance: str | None = None


class EncodedSizes(BaseModel):
    """Actual and worst-case encoded sizes, in bytes."""

    config: int
    policy: int
    dao: int


class ValidateResultData(BaseModel):
    """Payload contract for ``DaoService.validate``."""

    config: ConfigData
    policy: PolicyData
    token: TokenData
    encoded: dict[str, str]
    encoded_len: EncodedSizes
    max_encoded_len: EncodedSizes


class DaoRecordData(BaseModel):
    """Payload contract for ``DaoService.create`` and ``DaoService.show``."""

    dao_id: str
    founder: str
    account_id: str
    token_id: int
    config: ConfigData
    token: TokenData | None = None
    policy: PolicyData | None = None
    council: list[str] = Field(default_factory=list)


class AccountResultData(BaseModel):
    """Payload contract for ``DaoService.account_of``."""

    dao_id: str
    account_id: str
    exists: bool


class CountResultData(BaseModel):
    """Payload contract for ``DaoService.count``."""

    count: int
    dao_ids: list[str]
