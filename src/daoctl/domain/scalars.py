"""Strict scalar conversion for externally supplied strings.

Payload fields arrive as human-authored strings. These helpers turn them
into bytes and unsigned integers, rejecting anything malformed instead of
defaulting or truncating.
"""

from __future__ import annotations

import re

from daoctl.domain.errors import ParseError

U8_MAX = 2**8 - 1
U32_MAX = 2**32 - 1
U128_MAX = 2**128 - 1

# ASCII only: str.isdigit() would accept other scripts' digits.
_DECIMAL_RE = re.compile(r"[0-9]+")
_U128_MAX_DIGITS = len(str(U128_MAX))


def string_to_bytes(value: str) -> bytes:
    """Return the UTF-8 encoding of *value*.

    Raises:
        ParseError: If *value* holds lone surrogates (not valid Unicode).
    """
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParseError(f"String is not valid Unicode: {exc.reason}") from exc


def string_to_u128(value: str) -> int:
    """Parse *value* as a base-10 unsigned 128-bit integer.

    Only ASCII digits are accepted: no sign, whitespace, or ``_``
    separators. Leading zeros are allowed.

    Examples:
        >>> string_to_u128("1000")
        1000
        >>> string_to_u128("007")
        7

    Raises:
        ParseError: On empty input, any non-digit character, or overflow.
    """
    if not value:
        raise ParseError("Expected a decimal number, got an empty string", value=value)
    if _DECIMAL_RE.fullmatch(value) is None:
        raise ParseError(f"Not a decimal number: {value!r}", value=value)
    digits = value.lstrip("0") or "0"
    if len(digits) > _U128_MAX_DIGITS:
        raise ParseError(f"Number does not fit in 128 bits: {value!r}", value=value)
    number = int(digits)
    if number > U128_MAX:
        raise ParseError(f"Number does not fit in 128 bits: {value!r}", value=value)
    return number


def _check_range(value: int, maximum: int, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"Expected an integer for {kind}, got {type(value).__name__}")
    if value < 0 or value > maximum:
        raise ParseError(f"{value} is out of range for {kind}", value=value)
    return value


def check_u8(value: int) -> int:
    return _check_range(value, U8_MAX, "u8")


def check_u32(value: int) -> int:
    return _check_range(value, U32_MAX, "u32")


def check_u128(value: int) -> int:
    return _check_range(value, U128_MAX, "u128")
