"""Tests for the bounded on-ledger records."""

import pytest
from pydantic import ValidationError

from daoctl.domain.codec import encode_bytes
from daoctl.domain.errors import DecodeError, InvalidPolicyError, TooLongError
from daoctl.domain.models import (
    BOND_DENOMINATOR,
    DEFAULT_BOUNDS,
    Bounds,
    Config,
    Dao,
    Policy,
    Ratio,
)
from tests.conftest import ALICE, FOUNDER

HALF = Ratio(numerator=1, denominator=2)


def make_policy(**overrides: object) -> Policy:
    fields: dict[str, object] = {
        "proposal_bond": 100,
        "proposal_bond_min": 1000,
        "proposal_period": 86400000,
        "prime_account": FOUNDER,
        "approve_origin": HALF,
        "reject_origin": HALF,
    }
    fields.update(overrides)
    return Policy.model_validate(fields)


class TestConfig:
    def test_within_bounds(self) -> None:
        config = Config(name=b"Acme", purpose=b"Build", metadata=b"")
        assert config.name == b"Acme"

    def test_exactly_at_limit(self) -> None:
        config = Config(name=b"n" * 64, purpose=b"p" * 64, metadata=b"m" * 256)
        assert len(config.metadata) == 256

    @pytest.mark.parametrize(
        ("field", "size"),
        [("name", 65), ("purpose", 65), ("metadata", 257)],
    )
    def test_over_limit(self, field: str, size: int) -> None:
        fields = {"name": b"a", "purpose": b"b", "metadata": b""}
        fields[field] = b"x" * size
        with pytest.raises(TooLongError) as exc_info:
            Config(**fields)
        assert exc_info.value.field == field
        assert exc_info.value.length == size

    def test_custom_bounds(self) -> None:
        bounds = Bounds(string_limit=4, metadata_limit=0)
        config = Config.bounded(name=b"Acme", purpose=b"", metadata=b"", bounds=bounds)
        assert config.name == b"Acme"
        with pytest.raises(TooLongError):
            Config.bounded(name=b"Acme!", purpose=b"", metadata=b"", bounds=bounds)
        with pytest.raises(TooLongError):
            Config.bounded(name=b"", purpose=b"", metadata=b"m", bounds=bounds)

    def test_encoding(self) -> None:
        config = Config(name=b"Acme", purpose=b"Build", metadata=b"")
        assert config.encode() == b"\x10Acme\x14Build\x00"

    def test_decode(self) -> None:
        config = Config(name=b"Acme", purpose=b"Build", metadata=b"{}")
        assert Config.decode(config.encode()) == config

    def test_decode_respects_bounds(self) -> None:
        config = Config(name=b"Acme", purpose=b"Build", metadata=b"")
        with pytest.raises(DecodeError):
            Config.decode(config.encode(), Bounds(string_limit=3))

    def test_decode_trailing_bytes(self) -> None:
        config = Config(name=b"Acme", purpose=b"Build", metadata=b"")
        with pytest.raises(DecodeError):
            Config.decode(config.encode() + b"\x00")

    def test_max_encoded_len(self) -> None:
        assert Config.max_encoded_len() == 66 + 66 + 258
        largest = Config(name=b"n" * 64, purpose=b"p" * 64, metadata=b"m" * 256)
        assert len(largest.encode()) == Config.max_encoded_len()

    def test_max_encoded_len_tracks_bounds(self) -> None:
        assert Config.max_encoded_len(Bounds(string_limit=10, metadata_limit=10)) == 33


class TestRatio:
    def test_from_pair(self) -> None:
        assert Ratio.model_validate([2, 3]).as_tuple() == (2, 3)

    def test_bad_pair(self) -> None:
        with pytest.raises(ValidationError):
            Ratio.model_validate([1, 2, 3])

    def test_zero_denominator(self) -> None:
        with pytest.raises(InvalidPolicyError):
            Ratio(numerator=0, denominator=0)

    def test_above_one(self) -> None:
        with pytest.raises(InvalidPolicyError, match="exceeds 1"):
            Ratio(numerator=3, denominator=2)

    @pytest.mark.parametrize(
        ("ayes", "total", "met"),
        [(1, 2, True), (2, 4, True), (1, 4, False), (3, 5, True), (0, 0, False)],
    )
    def test_is_met(self, ayes: int, total: int, met: bool) -> None:
        assert HALF.is_met(ayes, total) is met

    def test_encoding(self) -> None:
        assert HALF.encode() == b"\x01\x00\x00\x00\x02\x00\x00\x00"


class TestPolicy:
    def test_valid(self) -> None:
        policy = make_policy()
        assert policy.prime_account == FOUNDER
        assert policy.approve_origin == HALF

    def test_zero_period(self) -> None:
        with pytest.raises(InvalidPolicyError, match="proposal_period"):
            make_policy(proposal_period=0)

    def test_bond_above_denominator(self) -> None:
        with pytest.raises(InvalidPolicyError):
            make_policy(proposal_bond=BOND_DENOMINATOR + 1)

    def test_full_bond_allowed(self) -> None:
        assert make_policy(proposal_bond=BOND_DENOMINATOR).proposal_bond == BOND_DENOMINATOR

    def test_inverted_bond_range(self) -> None:
        with pytest.raises(InvalidPolicyError) as exc_info:
            make_policy(proposal_bond_max=999)
        assert exc_info.value.detail["proposal_bond_max"] == 999

    def test_equal_bond_range(self) -> None:
        assert make_policy(proposal_bond_max=1000).proposal_bond_max == 1000

    def test_prime_account_length(self) -> None:
        with pytest.raises(ValidationError):
            make_policy(prime_account=b"\x01" * 31)

    def test_bond_for(self) -> None:
        policy = make_policy()
        assert policy.bond_for(10**9) == 100_000
        assert policy.bond_for(10) == 1000

    def test_bond_for_clamped_to_max(self) -> None:
        assert make_policy(proposal_bond_max=50_000).bond_for(10**9) == 50_000

    def test_encoded_sizes(self) -> None:
        assert len(make_policy().encode()) == Policy.max_encoded_len() - 16
        assert len(make_policy(proposal_bond_max=5000).encode()) == Policy.max_encoded_len()
        assert Policy.max_encoded_len() == 89

    def test_decode(self) -> None:
        policy = make_policy(
            proposal_bond_max=5000,
            reject_origin=Ratio(numerator=2, denominator=3),
        )
        assert Policy.decode(policy.encode()) == policy

    def test_decode_truncated(self) -> None:
        with pytest.raises(DecodeError):
            Policy.decode(make_policy().encode()[:-1])

    def test_decode_zero_period(self) -> None:
        encoded = bytearray(make_policy().encode())
        encoded[21:25] = b"\x00" * 4  # bond, min, none tag, then period
        with pytest.raises(DecodeError, match="proposal_period"):
            Policy.decode(bytes(encoded))

    def test_decode_zero_denominator(self) -> None:
        encoded = bytearray(make_policy().encode())
        encoded[61:65] = b"\x00" * 4  # approve_origin denominator
        with pytest.raises(DecodeError, match="denominator"):
            Policy.decode(bytes(encoded))


class TestDao:
    def make_dao(self) -> Dao:
        return Dao(
            founder=FOUNDER,
            account_id=ALICE,
            token_id=7,
            config=Config(name=b"Acme", purpose=b"Build", metadata=b""),
        )

    def test_encoding_layout(self) -> None:
        encoded = self.make_dao().encode()
        assert encoded[:32] == FOUNDER
        assert encoded[32:64] == ALICE
        assert encoded[64:68] == b"\x07\x00\x00\x00"
        assert encoded[68:] == encode_bytes(b"Acme") + encode_bytes(b"Build") + b"\x00"

    def test_decode(self) -> None:
        dao = self.make_dao()
        assert Dao.decode(dao.encode(), DEFAULT_BOUNDS) == dao

    def test_max_encoded_len(self) -> None:
        assert Dao.max_encoded_len() == 68 + Config.max_encoded_len()

    def test_account_length(self) -> None:
        with pytest.raises(ValidationError):
            Dao(
                founder=FOUNDER,
                account_id=b"\x00",
                token_id=7,
                config=Config(name=b"", purpose=b"", metadata=b""),
            )
