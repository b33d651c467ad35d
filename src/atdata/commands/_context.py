"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from atdata.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from atdata.config.settings import AtdataSettings
    from atdata.services.convert import ConvertService
    from atdata.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: AtdataSettings) -> None:
        self.settings = settings

        from atdata.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def converter(self) -> ConvertService:
        from atdata.services.convert import ConvertService

        return ConvertService(self.settings.config)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult.

        * Success: stdout, normal return.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
