"""Tests for the root daoctl CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from daoctl import __version__
from daoctl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "daoctl" in result.output
    for command in ("validate", "create", "show", "account", "count"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_ledger")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.usefixtures("_isolated_ledger")
def test_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('[ledger]\npallet_id = "dao/test"\n')
    result = cli_runner.invoke(cli, ["-c", str(config), "--json", "account", "ACME"])
    assert result.exit_code == 0, result.output
    assert "64616f2f74657374" in result.stdout  # b"dao/test"


@pytest.mark.usefixtures("_isolated_ledger")
def test_invalid_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "daoctl.toml").write_text('[ledger]\npallet_id = "short"\n')
    result = cli_runner.invoke(cli, ["count"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


@pytest.mark.usefixtures("_isolated_ledger")
def test_invalid_origin_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "daoctl.toml").write_text("[policy]\napprove_origin = [3, 2]\n")
    result = cli_runner.invoke(cli, ["count"])
    assert result.exit_code == 1
    assert "exceeds 1" in result.output
