"""Command: dry-run a DAO-creation payload."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from daoctl.commands._base import DaoCommand, parse_account_option

if TYPE_CHECKING:
    from daoctl.commands._context import AppContext


@click.command(
    cls=DaoCommand,
    examples="""\
  daoctl validate payload.json --founder 0x<64 hex chars>
  cat payload.json | daoctl --json validate - --founder 0x<64 hex chars>""",
)
@click.argument("payload", type=click.File("rb"))
@click.option(
    "--founder",
    required=True,
    callback=parse_account_option,
    help="Founder account (0x-prefixed hex); becomes the prime account.",
)
@click.pass_obj
def validate(app: AppContext, payload: IO[bytes], founder: bytes) -> None:
    """Validate PAYLOAD and show the bounded records it would produce."""
    from daoctl.services.dao import DaoService

    app.emit(DaoService(app.ledger).validate(payload.read(), founder=founder))
