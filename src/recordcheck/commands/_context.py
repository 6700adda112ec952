"""AppContext — shared Click context for all commands.

Created once by the root CLI group; subcommands receive it through
``@click.pass_obj``.  Owns logging setup and result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordcheck.config.logging import configure_logging
from recordcheck.output.formatters import OutputSettings, format_result
from recordcheck.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from recordcheck.config.settings import RecordcheckSettings
    from recordcheck.services.result import ServiceResult


class AppContext:
    """Settings plus output routing for one CLI invocation."""

    def __init__(self, settings: RecordcheckSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult and exit non-zero on failure.

        * Success: stdout, exit 0.  Warnings go to stderr in human mode.
        * Failure: stderr (stdout in ``--json`` mode), exit 1.
        """
        output_settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=output_settings)
        if not output_settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
            return
        click.echo(output, err=not output_settings.json_output)
        raise SystemExit(1)
