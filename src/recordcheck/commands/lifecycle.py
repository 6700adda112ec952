"""Command: run the booking API lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordcheck.commands._base import RcCommand

if TYPE_CHECKING:
    from recordcheck.commands._context import AppContext


@click.command(
    cls=RcCommand,
    examples="""\
  recordcheck lifecycle
  recordcheck lifecycle --base-url https://restful-booker.herokuapp.com
  RECORDCHECK_API__USERNAME=admin RECORDCHECK_API__PASSWORD=password123 recordcheck lifecycle
  recordcheck --json -v lifecycle --seed 7""",
)
@click.option("--base-url", default=None, help="Override [api] base_url.")
@click.option("--seed", type=int, default=None, help="Seed for generated payloads.")
@click.pass_obj
def lifecycle(app: AppContext, base_url: str | None, seed: int | None) -> None:
    """Auth, create, read, update, and delete a booking, validating each response."""
    from recordcheck.services.lifecycle import LifecycleService

    app.emit(LifecycleService(app.settings).run(base_url=base_url, seed=seed))
