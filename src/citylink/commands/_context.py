"""AppContext — shared state for one citylink invocation.

Created by the root command and stored in ``click.Context.obj``.
Provides lazy service construction and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from citylink.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from citylink.config.settings import CityLinkSettings
    from citylink.services.reachability import ReachabilityService
    from citylink.services.result import ServiceResult


class AppContext:
    """Settings, logging setup and the reachability service for one run."""

    def __init__(self, settings: CityLinkSettings) -> None:
        self.settings = settings
        self._service: ReachabilityService | None = None

        from citylink.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from citylink.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> ReachabilityService:
        """The reachability service (created on first access)."""
        if self._service is None:
            from citylink.services.reachability import ReachabilityService

            self._service = ReachabilityService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            path_separator=self.settings.output.path_separator,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
