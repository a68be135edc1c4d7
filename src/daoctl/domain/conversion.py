"""Trust-boundary conversion: raw payload -> bounded, storable records.

Pure functions. Either every record is built or an error is raised;
nothing partial escapes.

Error contract:
- :class:`ParseError` — a numeric string is malformed or overflows.
- :class:`MalformedPayloadError` — any other shape mismatch.
- :class:`MissingTokenError` / :class:`ConflictingTokenError` — token mode.
- :class:`TooLongError` — a bounded field exceeds its limit.
- :class:`InvalidTokenError` / :class:`InvalidPolicyError` — semantic checks.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from pydantic import ValidationError

from daoctl.domain.errors import InvalidTokenError, MalformedPayloadError
from daoctl.domain.models import Bounds, Config, Policy, Ratio, check_bounded
from daoctl.domain.payload import (
    ExistingToken,
    GovernanceToken,
    NewToken,
    Payload,
    PolicyPayload,
)


@dataclass(frozen=True)
class DaoDraft:
    """Validated output of :func:`convert_payload`, ready to be stored."""

    config: Config
    policy: Policy
    token_source: NewToken | ExistingToken

    @property
    def token_id(self) -> int:
        return self.token_source.token_id


def parse_payload(raw: bytes | str) -> Payload:
    """Deserialize a JSON payload into a :class:`Payload`.

    Domain errors raised by field validators (``ParseError``, token-mode
    errors) propagate unchanged. Everything else becomes
    :class:`MalformedPayloadError`.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedPayloadError(f"Payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedPayloadError("Payload must be a JSON object")
    try:
        return Payload.model_validate(data)
    except ValidationError as exc:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        msg = f"Payload has {len(errors)} invalid field(s)"
        raise MalformedPayloadError(msg, errors=errors) from exc


def build_config(payload: Payload, bounds: Bounds) -> Config:
    return Config.bounded(
        name=payload.name,
        purpose=payload.purpose,
        metadata=payload.metadata,
        bounds=bounds,
    )


def build_policy(
    policy: PolicyPayload,
    *,
    prime_account: bytes,
    approve_origin: Ratio,
    reject_origin: Ratio,
) -> Policy:
    return Policy(
        proposal_bond=policy.proposal_bond,
        proposal_bond_min=policy.proposal_bond_min,
        proposal_bond_max=policy.proposal_bond_max,
        proposal_period=policy.proposal_period,
        prime_account=prime_account,
        approve_origin=approve_origin,
        reject_origin=reject_origin,
    )


def check_new_token(token: GovernanceToken, bounds: Bounds) -> GovernanceToken:
    """Reject token metadata that cannot be minted."""
    meta = token.metadata
    if not meta.name:
        raise InvalidTokenError("Token name must not be empty")
    if not meta.symbol:
        raise InvalidTokenError("Token symbol must not be empty")
    check_bounded("token.name", meta.name, bounds.string_limit)
    check_bounded("token.symbol", meta.symbol, bounds.string_limit)
    if token.min_balance == 0:
        raise InvalidTokenError("Token min_balance must be greater than zero")
    return token


def convert_payload(
    payload: Payload,
    *,
    bounds: Bounds,
    prime_account: bytes,
    approve_origin: Ratio,
    reject_origin: Ratio,
) -> DaoDraft:
    """Bound *payload* into a :class:`DaoDraft`.

    Converting the same payload twice yields records with identical
    encodings.
    """
    config = build_config(payload, bounds)
    policy = build_policy(
        payload.policy,
        prime_account=prime_account,
        approve_origin=approve_origin,
        reject_origin=reject_origin,
    )
    source = payload.token_source
    if isinstance(source, NewToken):
        check_new_token(source.token, bounds)
    return DaoDraft(config=config, policy=policy, token_source=source)
