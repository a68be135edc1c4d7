"""Error taxonomy for the DAO trust boundary.

Every domain error derives from :class:`DaoError` and carries a stable
``code`` that the service layer copies into ``ServiceError.code``.

INVARIANT: DaoError is not a ValueError. Pydantic only collects
ValueError/AssertionError raised inside validators, so these errors leave
``model_validate`` unchanged and callers can catch them by type.
"""

from __future__ import annotations

from typing import Any


class DaoError(Exception):
    """Base class for all daoctl domain errors."""

    code: str = "DAO_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class ParseError(DaoError):
    """A string field could not be converted to its scalar type."""

    code = "PARSE_ERROR"


class MalformedPayloadError(DaoError):
    """The payload does not match the expected shape."""

    code = "MALFORMED_PAYLOAD"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, errors=errors or [])
        self.errors = errors or []


class InvalidAccountError(ParseError):
    """An account id is not 32 bytes of hex."""

    code = "INVALID_ACCOUNT"


class DecodeError(DaoError):
    """Persisted bytes do not decode to a valid record."""

    code = "DECODE_ERROR"


# --- Validation (payload -> bounded records) ---


class DaoValidationError(DaoError):
    """A payload is well-formed but violates a bounding or policy rule."""

    code = "VALIDATION_ERROR"


class TooLongError(DaoValidationError):
    """A bounded field exceeds its declared maximum length."""

    code = "TOO_LONG"

    def __init__(self, field: str, length: int, limit: int) -> None:
        super().__init__(
            f"{field} is {length} bytes long; the maximum is {limit}",
            field=field,
            length=length,
            limit=limit,
        )
        self.field = field
        self.length = length
        self.limit = limit


class InvalidDaoIdError(DaoValidationError):
    code = "INVALID_ID"


class MissingTokenError(DaoValidationError):
    code = "MISSING_TOKEN"

    def __init__(self) -> None:
        super().__init__("Payload must provide either 'token' or 'token_id'")


class ConflictingTokenError(DaoValidationError):
    code = "CONFLICTING_TOKEN"

    def __init__(self) -> None:
        super().__init__("Payload must not provide both 'token' and 'token_id'")


class InvalidTokenError(DaoValidationError):
    """A new governance token cannot be minted from the given metadata."""

    code = "INVALID_TOKEN"


class InvalidPolicyError(DaoValidationError):
    """Policy fields are inconsistent (zero period, inverted bond range, ...)."""

    code = "INVALID_POLICY"


# --- Providers ---


class ProviderError(DaoError):
    """A capability provider could not complete the request."""

    code = "PROVIDER_ERROR"


class CouncilError(ProviderError):
    code = "COUNCIL_ERROR"


class DaoExistsError(ProviderError):
    code = "DAO_EXISTS"


class DaoNotFoundError(ProviderError):
    code = "NOT_FOUND"
