"""Command: validate an actual record against an expected one."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from recordcheck.commands._base import RcCommand

if TYPE_CHECKING:
    from recordcheck.commands._context import AppContext


@click.command(
    cls=RcCommand,
    examples="""\
  recordcheck validate response.json payload.json
  recordcheck validate response.json payload.json --schema booking
  recordcheck validate response.json payload.json --schema schemas/booking.yaml
  recordcheck --json validate response.json payload.json""",
)
@click.argument("actual", type=click.Path(path_type=Path))
@click.argument("expected", type=click.Path(path_type=Path))
@click.option(
    "-s",
    "--schema",
    "schema_ref",
    default=None,
    help="Built-in schema name or schema file (default: [validation] default_schema).",
)
@click.pass_obj
def validate(app: AppContext, actual: Path, expected: Path, schema_ref: str | None) -> None:
    """Validate ACTUAL against EXPECTED; exits 1 on any type or value error."""
    from recordcheck.services.validate import ValidationService

    app.emit(ValidationService(app.settings).validate_files(actual, expected, schema=schema_ref))
