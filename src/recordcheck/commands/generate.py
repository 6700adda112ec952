"""Command group: generate expected-side test data."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordcheck.commands._base import RcGroup

if TYPE_CHECKING:
    from recordcheck.commands._context import AppContext


@click.group(cls=RcGroup)
def generate() -> None:
    """Generate test payloads."""


@generate.command(
    "booking",
    examples="""\
  recordcheck generate booking
  recordcheck generate booking --count 5 --seed 42
  recordcheck -q generate booking > payload.json""",
)
@click.option("-n", "--count", type=click.IntRange(min=1), default=1, help="Payloads to generate.")
@click.option("--seed", type=int, default=None, help="Seed for reproducible output.")
@click.pass_obj
def booking(app: AppContext, count: int, seed: int | None) -> None:
    """Generate booking payloads."""
    from recordcheck.services.generate import GenerateService

    app.emit(GenerateService(app.settings).booking(count=count, seed=seed))
