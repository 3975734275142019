"""Path Finder — depth-first search with backtracking.

Finds *one* path between two vertices, not necessarily the shortest:
neighbours are tried in increasing index order and the first path that
reaches the destination wins.

The search state (visited marks, in-progress path, frame stack) lives in
a :class:`SearchState` owned by a single :func:`find_path` call.  Frames
are kept on an explicit stack instead of the interpreter's call stack, so
a long chain of cities cannot hit the recursion limit; the visiting order
and the returned path are exactly those of the recursive formulation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from citylink.domain.matrix import AdjacencyMatrix

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Visited set, path buffer and frame stack for one search."""

    visited: bytearray
    path: list[int] = field(default_factory=list)
    frames: list[Iterator[int]] = field(default_factory=list)
    expanded: int = 0

    @classmethod
    def for_size(cls, n: int) -> SearchState:
        return cls(visited=bytearray(n))

    def enter(self, vertex: int, adjacency: AdjacencyMatrix) -> None:
        """Mark *vertex*, extend the path, and open a frame over its neighbours."""
        self.visited[vertex] = 1
        self.path.append(vertex)
        self.frames.append(iter(adjacency.successors(vertex)))
        self.expanded += 1

    def backtrack(self) -> None:
        """Close the top frame and release its vertex."""
        self.frames.pop()
        vertex = self.path.pop()
        self.visited[vertex] = 0

    def next_unvisited(self) -> int | None:
        """Advance the top frame to its next unvisited neighbour."""
        for vertex in self.frames[-1]:
            if not self.visited[vertex]:
                return vertex
        return None


def find_path(adjacency: AdjacencyMatrix, source: int, destination: int) -> list[int] | None:
    """Return a path ``[source, ..., destination]`` or None if unreachable.

    Raises:
        InvalidVertexError: *source* or *destination* is outside ``[0, N)``.
    """
    adjacency.validate_vertex(source, label="source")
    adjacency.validate_vertex(destination, label="destination")

    state = SearchState.for_size(adjacency.n)
    state.enter(source, adjacency)
    if source == destination:
        return list(state.path)

    while state.frames:
        vertex = state.next_unvisited()
        if vertex is None:
            state.backtrack()
            continue
        state.enter(vertex, adjacency)
        if vertex == destination:
            logger.debug(
                "Path %d -> %d found after expanding %d vertices",
                source,
                destination,
                state.expanded,
            )
            return list(state.path)

    logger.debug(
        "No path %d -> %d after expanding %d vertices", source, destination, state.expanded
    )
    return None


def format_path(path: list[int], separator: str = "=>") -> str:
    """Render a path as ``v0=>v1=>...=>vk``."""
    return separator.join(str(vertex) for vertex in path)
