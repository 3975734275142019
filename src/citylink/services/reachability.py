"""ReachabilityService — inspect, route and closure queries over a matrix file.

Each operation loads its own matrix, runs one engine operation and
releases every matrix it allocated before returning.  Domain errors come
back as ``ServiceResult(ok=False)`` with the error's code.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from citylink.domain.closure import ClosureEngine
from citylink.domain.errors import CityLinkError
from citylink.domain.pathfinder import find_path
from citylink.infrastructure.matrix_file import derived_output_path, write_closure_file
from citylink.services.base import BaseService
from citylink.services.result import ServiceResult
from citylink.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class ReachabilityService(BaseService):
    """Answers reachability questions about one adjacency-matrix file."""

    # ------------------------------------------------------------------
    # inspect — echo the neighbour table
    # ------------------------------------------------------------------

    @traced
    def inspect(self, path: Path) -> ServiceResult:
        """Load the matrix and return its rows."""
        try:
            with self._load_matrix(path) as matrix:
                rows = matrix.rows()
                size = matrix.n
        except CityLinkError as exc:
            log.warning("inspect.failed", path=str(path), code=str(exc.code))
            return ServiceResult.failure("inspect", exc)

        return ServiceResult(
            ok=True,
            op="inspect",
            data={"source": str(path), "size": size, "rows": rows},
        )

    # ------------------------------------------------------------------
    # route — one witness path via DFS
    # ------------------------------------------------------------------

    @traced
    def route(self, path: Path, source: int, destination: int) -> ServiceResult:
        """Find one path from *source* to *destination*.

        An unreachable destination is a successful answer with
        ``exists=False``; only bad input or bad vertices fail.
        """
        try:
            with self._load_matrix(path) as matrix:
                with trace_span("search") as span:
                    found = find_path(matrix, source, destination)
                    if span:
                        span.counters.vertices = matrix.n
        except CityLinkError as exc:
            log.warning("route.failed", path=str(path), code=str(exc.code))
            return ServiceResult.failure("route", exc)

        vertices = found or []
        log.debug(
            "route.found" if found else "route.missing",
            source=source,
            destination=destination,
            length=max(len(vertices) - 1, 0),
        )
        return ServiceResult(
            ok=True,
            op="route",
            data={
                "source": str(path),
                "source_vertex": source,
                "destination_vertex": destination,
                "exists": found is not None,
                "path": vertices,
                "length": max(len(vertices) - 1, 0),
            },
        )

    # ------------------------------------------------------------------
    # closure — full transitive closure, collected
    # ------------------------------------------------------------------

    @traced
    def closure(self, path: Path) -> ServiceResult:
        """Compute the transitive closure and return the edges in discovery order."""
        try:
            with self._load_matrix(path) as matrix:
                engine = ClosureEngine(matrix)
                with trace_span("fixpoint") as span:
                    edges = [[u, w] for u, w in engine]
                    if span:
                        span.record_closure(engine)
        except CityLinkError as exc:
            log.warning("closure.failed", path=str(path), code=str(exc.code))
            return ServiceResult.failure("closure", exc)

        log.debug("closure.complete", edges=engine.count, passes=engine.passes)
        return ServiceResult(
            ok=True,
            op="closure",
            data={
                "source": str(path),
                "count": engine.count,
                "passes": engine.passes,
                "edges": edges,
            },
        )

    # ------------------------------------------------------------------
    # write_closure — stream the closure into out-<input>
    # ------------------------------------------------------------------

    @traced
    def write_closure(self, path: Path) -> ServiceResult:
        """Stream the closure into the derived output file as edges are found."""
        output = derived_output_path(path, self._settings.output.prefix)
        try:
            with self._load_matrix(path) as matrix:
                engine = ClosureEngine(matrix)
                with trace_span("write") as span:
                    write_closure_file(output, engine, encoding=self._settings.output.encoding)
                    if span:
                        span.record_closure(engine)
        except CityLinkError as exc:
            log.warning(
                "closure.write_failed", path=str(path), output=str(output), code=str(exc.code)
            )
            return ServiceResult.failure("write_closure", exc)

        log.debug("closure.written", output=str(output), edges=engine.count)
        return ServiceResult(
            ok=True,
            op="write_closure",
            data={
                "source": str(path),
                "output": str(output),
                "count": engine.count,
                "passes": engine.passes,
            },
        )
