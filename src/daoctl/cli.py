"""Root CLI group for daoctl with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from daoctl import __version__
from daoctl.commands import register_commands
from daoctl.commands._context import AppContext
from daoctl.config.settings import DaoSettings
from daoctl.domain.errors import DaoError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="daoctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """daoctl — DAO governance payload validation and ledger tooling."""
    try:
        settings = DaoSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    except DaoError as exc:
        raise click.ClickException(f"Invalid configuration: {exc.message}") from exc
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
