"""Tests for the show, account and count commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from daoctl.cli import cli
from daoctl.domain.accounts import account_to_hex, derive_dao_account
from tests.conftest import FOUNDER, acme_payload

FOUNDER_HEX = account_to_hex(FOUNDER)


@pytest.fixture
def created(cli_runner: CliRunner, tmp_path: Path, _isolated_ledger: None) -> str:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(acme_payload()), encoding="utf-8")
    result = cli_runner.invoke(cli, ["create", "ACME", str(path), "--founder", FOUNDER_HEX])
    assert result.exit_code == 0, result.output
    return "ACME"


@pytest.mark.usefixtures("_isolated_ledger")
class TestShowCommand:
    def test_show(self, cli_runner: CliRunner, created: str) -> None:
        result = cli_runner.invoke(cli, ["--json", "show", created])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["config"]["name"] == "Acme"
        assert data["policy"]["proposal_bond_min"] == "1000"
        assert data["council"] == [FOUNDER_HEX]

    def test_show_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "NOPE"])
        assert result.exit_code == 1
        assert "[NOT_FOUND]" in result.output


@pytest.mark.usefixtures("_isolated_ledger")
class TestAccountCommand:
    def test_before_creation(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "account", "ACME"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["account_id"] == account_to_hex(derive_dao_account(b"dao/core", b"ACME"))
        assert data["exists"] is False

    def test_after_creation(self, cli_runner: CliRunner, created: str) -> None:
        result = cli_runner.invoke(cli, ["--json", "account", created])
        assert json.loads(result.stdout)["data"]["exists"] is True


@pytest.mark.usefixtures("_isolated_ledger")
class TestCountCommand:
    def test_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["count"])
        assert result.exit_code == 0
        assert "count: 0" in result.output

    def test_after_creation(self, cli_runner: CliRunner, created: str) -> None:
        result = cli_runner.invoke(cli, ["--json", "count"])
        assert json.loads(result.stdout)["data"] == {"count": 1, "dao_ids": ["ACME"]}
