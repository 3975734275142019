"""Timing spans for reachability operations.

Every service operation is wrapped in :func:`traced`, which binds the
operation name into the structlog context for the duration of the call.
With ``--verbose`` it also times the call and collects child spans
(``load_matrix``, ``search``, ``fixpoint``, ``write``).  Each child
records the matrix size and closure counters it observed.  The tree ends
up in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

import structlog

from citylink.services.result import ServiceResult

if TYPE_CHECKING:
    from citylink.domain.closure import ClosureEngine
    from citylink.domain.matrix import AdjacencyMatrix

log = structlog.get_logger("citylink.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Counters:
    """What one span saw of the matrix and the closure engine."""

    vertices: int | None = None
    edges: int | None = None
    passes: int | None = None
    direct: int | None = None
    derived: int | None = None

    def as_dict(self) -> dict[str, int]:
        return {
            f.name: value
            for f in fields(self)
            if (value := getattr(self, f.name)) is not None
        }


@dataclass
class Span:
    """Timed node in an operation's span tree."""

    name: str
    children: list[Span] = field(default_factory=list)
    counters: Counters = field(default_factory=Counters)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def record_matrix(self, matrix: AdjacencyMatrix) -> None:
        self.counters.vertices = matrix.n
        self.counters.edges = matrix.edge_count()

    def record_closure(self, engine: ClosureEngine) -> None:
        self.counters.passes = engine.passes
        self.counters.direct = engine.direct
        self.counters.derived = engine.derived

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if counters := self.counters.as_dict():
            result["counters"] = counters
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child of the current operation span.

    Yields None outside a traced operation or while telemetry is off.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


def traced[**P](func: Callable[P, ServiceResult]) -> Callable[P, ServiceResult]:
    """Mark a service method as a citylink operation.

    The method name becomes the ``op`` field of every log line emitted
    during the call.  When telemetry is on, the span tree is attached to
    the returned result.
    """
    op = func.__name__

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ServiceResult:
        with structlog.contextvars.bound_contextvars(op=op):
            if not _enabled.get():
                return func(*args, **kwargs)

            span = Span(name=op)
            token = _current_span.set(span)
            try:
                result = func(*args, **kwargs)
            finally:
                span.end()
                _current_span.reset(token)

            log.debug(
                "operation.timed",
                duration_ms=round(span.duration_ms, 2),
                ok=result.ok,
                steps=[child.name for child in span.children],
            )
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on (AppContext does this for ``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
