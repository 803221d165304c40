"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides the lazily built service and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ctkit.output.formatters import format_result

if TYPE_CHECKING:
    from ctkit.config.settings import CtkitSettings
    from ctkit.services.content_types import ContentTypeService
    from ctkit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The database-backed service is created on first use so ``--help``,
    ``--version`` and ``check`` never touch the database.
    """

    def __init__(self, settings: CtkitSettings) -> None:
        self.settings = settings
        self._service: ContentTypeService | None = None

        from ctkit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ContentTypeService:
        """Service backed by the configured SQLite database."""
        if self._service is None:
            from ctkit.services.content_types import ContentTypeService

            self._service = ContentTypeService.from_settings(self.settings)
        return self._service

    def offline_service(self) -> ContentTypeService:
        """Service without persistence, for commands that only inspect files."""
        from ctkit.services.content_types import ContentTypeService

        return ContentTypeService(validation=self.settings.validation)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result, json_output=self.settings.json_output, verbose=self.settings.verbose
        )
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
