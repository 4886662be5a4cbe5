"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the lazily built SkeletonService and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtoinit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dtoinit.config.settings import DtoInitSettings
    from dtoinit.services.result import ServiceResult
    from dtoinit.services.skeleton import SkeletonService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The service is created on first use so ``--help`` and ``--version``
    never import user code or build accessors.
    """

    def __init__(self, settings: DtoInitSettings) -> None:
        self.settings = settings
        self._service: SkeletonService | None = None

        from dtoinit.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, quiet=settings.quiet
        )

    @property
    def service(self) -> SkeletonService:
        """The skeleton service (created lazily on first access)."""
        if self._service is None:
            from dtoinit.services.skeleton import SkeletonService

            self._service = SkeletonService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            indent=self.settings.output.indent,
            sort_keys=self.settings.output.sort_keys,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
