"""Shared service-layer helpers: domain records -> JSON-friendly dicts.

Bytes that came from human-authored strings are shown as text;
account ids as ``0x`` hex; u128 amounts as decimal strings, matching
the wire format they arrived in.
"""

from __future__ import annotations

from typing import Any

from daoctl.domain.accounts import account_to_hex
from daoctl.domain.models import Config, Policy
from daoctl.domain.payload import ExistingToken, NewToken


def as_text(value: bytes) -> str:
    """Decode stored bytes for display; undecodable bytes become U+FFFD.

    Examples:
        >>> as_text(b"Acme")
        'Acme'
    """
    return value.decode("utf-8", errors="replace")


def config_data(config: Config) -> dict[str, Any]:
    return {
        "name": as_text(config.name),
        "purpose": as_text(config.purpose),
        "metadata": as_text(config.metadata),
    }


def policy_data(policy: Policy) -> dict[str, Any]:
    return {
        "proposal_bond": policy.proposal_bond,
        "proposal_bond_min": str(policy.proposal_bond_min),
        "proposal_bond_max": (
            str(policy.proposal_bond_max) if policy.proposal_bond_max is not None else None
        ),
        "proposal_period": policy.proposal_period,
        "prime_account": account_to_hex(policy.prime_account),
        "approve_origin": list(policy.approve_origin.as_tuple()),
        "reject_origin": list(policy.reject_origin.as_tuple()),
    }


def token_data(source: NewToken | ExistingToken) -> dict[str, Any]:
    if isinstance(source, ExistingToken):
        return {"kind": source.kind, "token_id": source.token_id}
    token = source.token
    return {
        "kind": source.kind,
        "token_id": token.token_id,
        "name": as_text(token.metadata.name),
        "symbol": as_text(token.metadata.symbol),
        "decimals": token.metadata.decimals,
        "min_balance": str(token.min_balance),
    }
