"""Custom Click base classes with --examples support.

When ``--examples`` is passed, the command prints usage examples and
exits, which keeps ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class DaoCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def parse_account_option(
    _ctx: click.Context, param: click.Parameter, value: Any
) -> Any:
    """Click callback turning ``0x`` hex account ids into bytes."""
    from daoctl.domain.accounts import account_from_hex
    from daoctl.domain.errors import InvalidAccountError

    if value is None:
        return None
    values = value if isinstance(value, tuple) else (value,)
    try:
        parsed = tuple(account_from_hex(v) for v in values)
    except InvalidAccountError as exc:
        raise click.BadParameter(exc.message, param=param) from exc
    return parsed if isinstance(value, tuple) else parsed[0]
