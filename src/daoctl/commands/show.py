"""Commands: read-only DAO lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daoctl.commands._base import DaoCommand

if TYPE_CHECKING:
    from daoctl.commands._context import AppContext


@click.command(cls=DaoCommand, examples="  daoctl show ACME\n  daoctl --json show ACME")
@click.argument("dao_id")
@click.pass_obj
def show(app: AppContext, dao_id: str) -> None:
    """Show the stored record, policy and council of DAO_ID."""
    from daoctl.services.dao import DaoService

    app.emit(DaoService(app.ledger).show(dao_id.encode("utf-8")))


@click.command(cls=DaoCommand, examples="  daoctl account ACME")
@click.argument("dao_id")
@click.pass_obj
def account(app: AppContext, dao_id: str) -> None:
    """Print the account of DAO_ID (works before the DAO exists)."""
    from daoctl.services.dao import DaoService

    app.emit(DaoService(app.ledger).account_of(dao_id.encode("utf-8")))


@click.command(cls=DaoCommand, examples="  daoctl count")
@click.pass_obj
def count(app: AppContext) -> None:
    """Count the DAOs on the ledger."""
    from daoctl.services.dao import DaoService

    app.emit(DaoService(app.ledger).count())
