"""Output mode dispatch for ServiceResult.

The CLI shows results to humans (Rich renderers), to scripts
(``--quiet``) or to machines (``--json``, one object per line).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from citylink.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from citylink.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output switches taken from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    path_separator: str = "=>"


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the human renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json()
    if settings.quiet:
        return render_quiet(result, path_separator=settings.path_separator)
    return render_result(
        result,
        verbose=settings.verbose,
        path_separator=settings.path_separator,
    )
