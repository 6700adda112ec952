"""Command group: inspect record schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordcheck.commands._base import RcGroup

if TYPE_CHECKING:
    from recordcheck.commands._context import AppContext


@click.group(
    cls=RcGroup,
    examples="""\
  recordcheck schema list
  recordcheck schema show booking
  recordcheck schema show schemas/booking.json""",
)
def schema() -> None:
    """Inspect built-in and file-based record schemas."""


@schema.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List built-in schema names."""
    from recordcheck.services.schema import SchemaService

    app.emit(SchemaService(app.settings).list_schemas())


@schema.command(
    "show",
    examples="""\
  recordcheck schema show
  recordcheck schema show booking
  recordcheck --json schema show schemas/custom.yaml""",
)
@click.argument("ref", required=False)
@click.pass_obj
def show(app: AppContext, ref: str | None) -> None:
    """Show the fields of schema REF (a built-in name or a file)."""
    from recordcheck.services.schema import SchemaService

    app.emit(SchemaService(app.settings).describe(ref))
