"""Tests for the deterministic binary codec."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from daoctl.domain.codec import (
    ScaleReader,
    bounded_bytes_max_len,
    compact_len,
    encode_bytes,
    encode_compact,
    encode_option,
    encode_u8,
    encode_u32,
    encode_u128,
)
from daoctl.domain.errors import DecodeError, ParseError


class TestFixedWidth:
    def test_u8(self) -> None:
        assert encode_u8(7) == b"\x07"

    def test_u32_little_endian(self) -> None:
        assert encode_u32(1) == b"\x01\x00\x00\x00"
        assert encode_u32(86400000) == (86400000).to_bytes(4, "little")

    def test_u128_width(self) -> None:
        encoded = encode_u128(1000)
        assert len(encoded) == 16
        assert encoded[:2] == b"\xe8\x03"

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ParseError):
            encode_u32(2**32)


class TestCompact:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, b"\x00"),
            (1, b"\x04"),
            (63, b"\xfc"),
            (64, b"\x01\x01"),
            (16383, b"\xfd\xff"),
            (16384, b"\x02\x00\x01\x00"),
            (2**30 - 1, b"\xfe\xff\xff\xff"),
            (2**30, b"\x03\x00\x00\x00\x40"),
        ],
    )
    def test_known_encodings(self, value: int, expected: bytes) -> None:
        assert encode_compact(value) == expected
        assert compact_len(value) == len(expected)

    def test_big_integer_mode(self) -> None:
        encoded = encode_compact(2**64)
        assert encoded[0] == ((9 - 4) << 2) | 0b11
        assert len(encoded) == 10

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="unsigned"):
            encode_compact(-1)

    @given(st.integers(min_value=0, max_value=2**128 - 1))
    def test_reader_inverts_encoder(self, value: int) -> None:
        reader = ScaleReader(encode_compact(value))
        assert reader.read_compact() == value
        reader.finish()

    @pytest.mark.parametrize(
        "data",
        [
            b"\x01\x00",  # two-byte form for 0
            b"\x02\x00\x00\x00",  # four-byte form for 0
            b"\x07\x00\x00\x00\x01\x00",  # 5-byte big form with zero high byte
            b"\x03\x00\x00\x00\x00",  # big form below 2**30
        ],
    )
    def test_non_canonical_rejected(self, data: bytes) -> None:
        with pytest.raises(DecodeError, match="Non-canonical"):
            ScaleReader(data).read_compact()


class TestBytesAndOptions:
    def test_length_prefixed(self) -> None:
        assert encode_bytes(b"abc") == b"\x0cabc"
        assert encode_bytes(b"") == b"\x00"

    def test_option(self) -> None:
        assert encode_option(None, encode_u128) == b"\x00"
        assert encode_option(5, encode_u32) == b"\x01\x05\x00\x00\x00"

    def test_bounded_max_len(self) -> None:
        assert bounded_bytes_max_len(63) == 64
        assert bounded_bytes_max_len(64) == 66
        assert bounded_bytes_max_len(256) == 258


class TestScaleReader:
    def test_sequential_reads(self) -> None:
        data = encode_u32(9) + encode_bytes(b"hi") + encode_option(3, encode_u128)
        reader = ScaleReader(data)
        assert reader.read_u32() == 9
        assert reader.read_bytes(max_len=2) == b"hi"
        assert reader.read_option(ScaleReader.read_u128) == 3
        reader.finish()

    def test_truncated_input(self) -> None:
        with pytest.raises(DecodeError, match="Unexpected end"):
            ScaleReader(b"\x01\x02").read_u32()

    def test_trailing_bytes(self) -> None:
        reader = ScaleReader(encode_u32(1) + b"\x00")
        reader.read_u32()
        with pytest.raises(DecodeError, match="trailing"):
            reader.finish()

    def test_bytes_over_bound(self) -> None:
        with pytest.raises(DecodeError, match="exceeds bound"):
            ScaleReader(encode_bytes(b"abcd")).read_bytes(max_len=3)

    def test_invalid_option_tag(self) -> None:
        with pytest.raises(DecodeError, match="option tag"):
            ScaleReader(b"\x02").read_option(ScaleReader.read_u8)
