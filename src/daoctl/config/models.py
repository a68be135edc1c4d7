"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, daoctl.toml only contains
overrides. A fresh ledger needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from daoctl.domain.accounts import PALLET_ID_LEN
from daoctl.domain.models import Bounds, Ratio

# --- daoctl.toml sections ---


class LimitsConfig(BaseModel):
    """[limits] section — maxima for bounded DAO fields."""

    model_config = {"frozen": True}

    string_limit: int = Field(default=64, gt=0)
    metadata_limit: int = Field(default=256, ge=0)

    def to_bounds(self) -> Bounds:
        return Bounds(string_limit=self.string_limit, metadata_limit=self.metadata_limit)


class PolicyConfig(BaseModel):
    """[policy] section — origin thresholds applied to new DAOs."""

    model_config = {"frozen": True}

    approve_origin: Ratio = Field(default_factory=lambda: Ratio(numerator=1, denominator=2))
    reject_origin: Ratio = Field(default_factory=lambda: Ratio(numerator=1, denominator=2))


class LedgerConfig(BaseModel):
    """[ledger] section."""

    model_config = {"frozen": True}

    pallet_id: str = "dao/core"
    id_limit: int = Field(default=32, gt=0)

    @field_validator("pallet_id")
    @classmethod
    def _pallet_id_len(cls, value: str) -> str:
        if len(value.encode("utf-8")) != PALLET_ID_LEN:
            msg = f"pallet_id must be exactly {PALLET_ID_LEN} bytes"
            raise ValueError(msg)
        return value

    @property
    def pallet_id_bytes(self) -> bytes:
        return self.pallet_id.encode("utf-8")


class CouncilConfig(BaseModel):
    """[council] section."""

    model_config = {"frozen": True}

    max_members: int = Field(default=100, gt=0)
