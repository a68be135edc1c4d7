"""Command: create a DAO on the ledger."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from daoctl.commands._base import DaoCommand, parse_account_option

if TYPE_CHECKING:
    from daoctl.commands._context import AppContext


@click.command(
    cls=DaoCommand,
    examples="""\
  daoctl create ACME payload.json --founder 0x<hex>
  daoctl create ACME payload.json --founder 0x<hex> --member 0x<hex> --member 0x<hex>""",
)
@click.argument("dao_id")
@click.argument("payload", type=click.File("rb"))
@click.option(
    "--founder",
    required=True,
    callback=parse_account_option,
    help="Founder account (0x-prefixed hex).",
)
@click.option(
    "--member",
    "members",
    multiple=True,
    callback=parse_account_option,
    help="Council member account; repeatable. Defaults to the founder.",
)
@click.pass_obj
def create(
    app: AppContext,
    dao_id: str,
    payload: IO[bytes],
    founder: bytes,
    members: tuple[bytes, ...],
) -> None:
    """Create DAO DAO_ID from PAYLOAD."""
    from daoctl.services.dao import DaoService

    svc = DaoService(app.ledger)
    app.emit(svc.create(dao_id.encode("utf-8"), payload.read(), founder=founder, members=members))
