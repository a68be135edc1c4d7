"""Shared pytest fixtures for daoctl tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from daoctl.config.settings import DaoSettings
from daoctl.infrastructure.ledger import Ledger

FOUNDER = bytes([0x11]) * 32
ALICE = bytes([0xA1]) * 32
BOB = bytes([0xB0]) * 32


def acme_payload(**overrides: Any) -> dict[str, Any]:
    """The canonical example payload; keyword arguments replace top-level keys."""
    payload: dict[str, Any] = {
        "name": "Acme",
        "purpose": "Build",
        "metadata": "",
        "token_id": 7,
        "policy": {
            "proposal_bond": 100,
            "proposal_bond_min": "1000",
            "proposal_period": 86400000,
        },
    }
    payload.update(overrides)
    return payload


def new_token_payload(**token_overrides: Any) -> dict[str, Any]:
    """Example payload that mints a new governance token."""
    token: dict[str, Any] = {
        "token_id": 42,
        "metadata": {"name": "Acme Token", "symbol": "ACM", "decimals": 12},
        "min_balance": "1",
    }
    token.update(token_overrides)
    payload = acme_payload(token=token)
    del payload["token_id"]
    return payload


@pytest.fixture(autouse=True, scope="session")
def _no_config_env() -> Iterator[None]:
    """Keep a developer's DAOCTL_* environment out of the tests.

    Session-scoped so hypothesis tests do not pull in a function fixture.
    """
    with pytest.MonkeyPatch.context() as mp:
        mp.delenv("DAOCTL_CONFIG", raising=False)
        mp.delenv("DAOCTL_LEDGER_ROOT", raising=False)
        yield


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> DaoSettings:
    return DaoSettings.from_cli(ledger_root=tmp_path)


@pytest.fixture
def ledger(settings: DaoSettings) -> Iterator[Ledger]:
    """Ledger on a temp directory; the database is created on first use."""
    led = Ledger(settings)
    try:
        yield led
    finally:
        led.close()


@pytest.fixture
def raw_payload() -> Callable[..., bytes]:
    """Factory returning the Acme payload as JSON bytes."""

    def _make(**overrides: Any) -> bytes:
        return json.dumps(acme_payload(**overrides)).encode("utf-8")

    return _make


@pytest.fixture
def _isolated_ledger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated ledger.

    Use via ``@pytest.mark.usefixtures("_isolated_ledger")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)
