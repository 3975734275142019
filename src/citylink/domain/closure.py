"""Closure Engine — transitive closure by monotone fixpoint iteration.

Starting from a copy of the adjacency matrix, each pass composes the
previous pass's reachability with the adjacency relation until a pass
adds nothing.  Edges are yielded the moment they are discovered:

1. every direct edge, row-major;
2. then, pass by pass, every new ``(u, w)`` in ``u, v, w`` ascending
   order, where ``previous[u][v]`` and ``adjacency[v][w]``.

The emission order is part of the contract; consumers (file output,
tests) rely on it.

INVARIANT: ``(u, u)`` is never derived.  A self-loop in the input is
still emitted with the direct edges.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from citylink.domain.matrix import AdjacencyMatrix

logger = logging.getLogger(__name__)

type ClosureEdge = tuple[int, int]

CLOSURE_HEADER = "R* table"


class ClosureEngine:
    """One closure computation over a read-only adjacency matrix.

    The edge sequence is lazy and can be consumed only once.  Counters
    are updated while it is consumed.

    Attributes:
        passes: Fixpoint passes run so far (the last one adds nothing).
        direct: Edges emitted by the initial pass.
        derived: Edges added by the fixpoint passes.
    """

    def __init__(self, adjacency: AdjacencyMatrix) -> None:
        self._adjacency = adjacency
        self._consumed = False
        self.passes = 0
        self.direct = 0
        self.derived = 0

    @property
    def count(self) -> int:
        return self.direct + self.derived

    def __iter__(self) -> Iterator[ClosureEdge]:
        return self.edges()

    def edges(self) -> Iterator[ClosureEdge]:
        """Yield closure edges in discovery order.

        Raises:
            RuntimeError: the sequence was already requested.
        """
        if self._consumed:
            raise RuntimeError("Closure sequence can only be consumed once")
        self._consumed = True
        return self._run()

    def _run(self) -> Iterator[ClosureEdge]:
        adjacency = self._adjacency
        n = adjacency.n
        # Adjacency is read-only for the whole computation.
        successors = [adjacency.successors(v) for v in range(n)]

        with adjacency.copy() as closure, AdjacencyMatrix.create(n) as previous:
            for edge in closure.edges():
                self.direct += 1
                yield edge

            changed = True
            while changed:
                changed = False
                self.passes += 1
                closure.copy_into(previous)
                for u in range(n):
                    for v in previous.successors(u):
                        for w in successors[v]:
                            if u != w and not closure[u, w]:
                                closure[u, w] = True
                                changed = True
                                self.derived += 1
                                yield (u, w)
                logger.debug("Closure pass %d complete (%d edges so far)", self.passes, self.count)


def iter_closure(adjacency: AdjacencyMatrix) -> Iterator[ClosureEdge]:
    """Lazily yield the transitive closure of *adjacency* in discovery order."""
    return ClosureEngine(adjacency).edges()


def compute_closure(adjacency: AdjacencyMatrix) -> list[ClosureEdge]:
    """Collect the full closure sequence into a list."""
    return list(iter_closure(adjacency))


def format_edge(edge: ClosureEdge) -> str:
    """Render an edge as ``u -> w``."""
    u, w = edge
    return f"{u} -> {w}"
