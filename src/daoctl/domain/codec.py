"""Deterministic binary encoding for on-ledger records.

SCALE-style layout, little-endian throughout:

- ``u8`` / ``u32`` / ``u128``: fixed width.
- Byte sequences: compact length prefix, then the raw bytes.
- ``Option<T>``: ``0x00`` for none, ``0x01`` followed by ``T``.
- Records and tuples: fields concatenated in declaration order.

INVARIANT: one logical value has exactly one encoding. The decoder rejects
non-canonical compact integers and trailing bytes.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from typing import TypeVar

from daoctl.domain.errors import DecodeError
from daoctl.domain.scalars import check_u8, check_u32, check_u128

_SINGLE_BYTE_MAX = 2**6 - 1
_TWO_BYTE_MAX = 2**14 - 1
_FOUR_BYTE_MAX = 2**30 - 1

OPTION_NONE = b"\x00"
OPTION_SOME = b"\x01"

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_u8(value: int) -> bytes:
    return struct.pack("<B", check_u8(value))


def encode_u32(value: int) -> bytes:
    return struct.pack("<I", check_u32(value))


def encode_u128(value: int) -> bytes:
    return check_u128(value).to_bytes(16, "little")


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in compact form."""
    if value < 0:
        msg = f"Compact integers are unsigned, got {value}"
        raise ValueError(msg)
    if value <= _SINGLE_BYTE_MAX:
        return struct.pack("<B", value << 2)
    if value <= _TWO_BYTE_MAX:
        return struct.pack("<H", (value << 2) | 0b01)
    if value <= _FOUR_BYTE_MAX:
        return struct.pack("<I", (value << 2) | 0b10)
    size = max(4, (value.bit_length() + 7) // 8)
    return bytes([((size - 4) << 2) | 0b11]) + value.to_bytes(size, "little")


def compact_len(value: int) -> int:
    """Number of bytes :func:`encode_compact` produces for *value*."""
    return len(encode_compact(value))


def encode_bytes(value: bytes) -> bytes:
    return encode_compact(len(value)) + value


def encode_option(value: T | None, encoder: Callable[[T], bytes]) -> bytes:
    if value is None:
        return OPTION_NONE
    return OPTION_SOME + encoder(value)


def bounded_bytes_max_len(bound: int) -> int:
    """Worst-case encoded size of a byte sequence capped at *bound*."""
    return compact_len(bound) + bound


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class ScaleReader:
    """Sequential decoder over an immutable byte buffer.

    Usage::

        reader = ScaleReader(data)
        token_id = reader.read_u32()
        name = reader.read_bytes(max_len=64)
        reader.finish()
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int) -> bytes:
        if size > self.remaining:
            msg = f"Unexpected end of input: needed {size} bytes, {self.remaining} left"
            raise DecodeError(msg)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_u32(self) -> int:
        (value,) = struct.unpack("<I", self._take(4))
        return int(value)

    def read_u128(self) -> int:
        return int.from_bytes(self._take(16), "little")

    def read_compact(self) -> int:
        first = self.read_u8()
        mode = first & 0b11
        if mode == 0b00:
            return first >> 2
        if mode == 0b01:
            value = int.from_bytes(bytes([first]) + self._take(1), "little") >> 2
            lower = _SINGLE_BYTE_MAX + 1
        elif mode == 0b10:
            value = int.from_bytes(bytes([first]) + self._take(3), "little") >> 2
            lower = _TWO_BYTE_MAX + 1
        else:
            size = (first >> 2) + 4
            raw = self._take(size)
            value = int.from_bytes(raw, "little")
            lower = _FOUR_BYTE_MAX + 1
            if raw[-1] == 0:
                raise DecodeError("Non-canonical compact integer (trailing zero byte)")
        if value < lower:
            raise DecodeError(f"Non-canonical compact integer encoding for {value}")
        return value

    def read_bytes(self, *, max_len: int | None = None) -> bytes:
        length = self.read_compact()
        if max_len is not None and length > max_len:
            msg = f"Byte sequence of length {length} exceeds bound {max_len}"
            raise DecodeError(msg)
        return self._take(length)

    def read_fixed(self, size: int) -> bytes:
        return self._take(size)

    def read_option(self, decoder: Callable[[ScaleReader], T]) -> T | None:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag == 1:
            return decoder(self)
        raise DecodeError(f"Invalid option tag {tag:#04x}")

    def finish(self) -> None:
        """Assert the whole buffer was consumed."""
        if self.remaining:
            raise DecodeError(f"{self.remaining} trailing bytes after record")
