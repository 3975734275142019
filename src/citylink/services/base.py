"""BaseService — shared plumbing for citylink services.

Every service receives the frozen :class:`CityLinkSettings` at
construction time and loads matrices through :meth:`_load_matrix` so the
configured size ceiling and encoding apply everywhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from citylink.infrastructure.matrix_file import read_matrix_file
from citylink.services.telemetry import trace_span

if TYPE_CHECKING:
    from pathlib import Path

    from citylink.config.settings import CityLinkSettings
    from citylink.domain.matrix import AdjacencyMatrix

log = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ReachabilityService(BaseService):
            def inspect(self, path: Path) -> ServiceResult:
                with self._load_matrix(path) as matrix:
                    ...
    """

    def __init__(self, settings: CityLinkSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> CityLinkSettings:
        return self._settings

    def _load_matrix(self, path: Path) -> AdjacencyMatrix:
        """Read the matrix at *path*; the caller owns (and releases) it."""
        with trace_span("load_matrix") as span:
            matrix = read_matrix_file(
                path,
                max_vertices=self._settings.matrix.max_vertices,
                encoding=self._settings.output.encoding,
            )
            if span:
                span.record_matrix(matrix)
        log.debug("matrix.loaded", path=str(path), vertices=matrix.n)
        return matrix
