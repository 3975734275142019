"""Matrix Store — owned N×N boolean matrices.

One contiguous ``bytearray`` of N² cells plus the dimension N.  Every
operation that needs a matrix creates its own and releases it when done,
either explicitly via :meth:`AdjacencyMatrix.release` or by scoping the
matrix in a ``with`` block.

INVARIANT: a live matrix is always square and fully initialized.
N never changes after construction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import TracebackType

from citylink.domain.errors import (
    AllocationError,
    InvalidVertexError,
    MalformedInputError,
    MatrixReleasedError,
)

logger = logging.getLogger(__name__)


class AdjacencyMatrix:
    """Square boolean matrix indexed by ``(row, column)``.

    Usage::

        with AdjacencyMatrix.create(3) as m:
            m.load([0, 1, 0, 0, 0, 1, 0, 0, 0])
            assert m[0, 1]
    """

    def __init__(self, n: int, *, max_vertices: int | None = None) -> None:
        if n < 0:
            msg = f"Matrix dimension must be non-negative, got {n}"
            raise MalformedInputError(msg, n=n)
        if max_vertices is not None and n > max_vertices:
            msg = f"Cannot allocate a {n}x{n} matrix (limit is {max_vertices} vertices)"
            raise AllocationError(msg, n=n, max_vertices=max_vertices)
        try:
            cells = bytearray(n * n)
        except MemoryError as exc:
            msg = f"Out of memory allocating a {n}x{n} matrix"
            raise AllocationError(msg, n=n) from exc
        self._n = n
        self._cells: bytearray | None = cells

    @classmethod
    def create(cls, n: int, *, max_vertices: int | None = None) -> AdjacencyMatrix:
        """Allocate an n×n matrix with every entry false."""
        return cls(n, max_vertices=max_vertices)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    @property
    def released(self) -> bool:
        return self._cells is None

    def release(self) -> None:
        """Drop the backing store. Safe to call more than once."""
        self._cells = None

    def __enter__(self) -> AdjacencyMatrix:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def _live(self) -> bytearray:
        if self._cells is None:
            raise MatrixReleasedError("Matrix used after release")
        return self._cells

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        """Number of vertices."""
        return self._n

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, key: tuple[int, int]) -> bool:
        i, j = key
        return bool(self._live()[i * self._n + j])

    def __setitem__(self, key: tuple[int, int], value: bool) -> None:
        i, j = key
        self._live()[i * self._n + j] = 1 if value else 0

    def validate_vertex(self, vertex: int, *, label: str = "vertex") -> None:
        """Raise :class:`InvalidVertexError` unless ``0 <= vertex < N``."""
        if not 0 <= vertex < self._n:
            msg = f"{label.capitalize()} {vertex} is outside [0, {self._n})"
            raise InvalidVertexError(msg, vertex=vertex, label=label, n=self._n)

    def successors(self, vertex: int) -> list[int]:
        """Vertices with a direct edge from *vertex*, in increasing order."""
        cells = self._live()
        start = vertex * self._n
        row = cells[start : start + self._n]
        return [j for j, cell in enumerate(row) if cell]

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield every true cell as ``(row, column)`` in row-major order."""
        cells = self._live()
        n = self._n
        for index, cell in enumerate(cells):
            if cell:
                yield divmod(index, n)

    def rows(self) -> list[list[int]]:
        """The matrix as nested lists of 0/1 integers."""
        cells = self._live()
        n = self._n
        return [list(cells[i * n : (i + 1) * n]) for i in range(n)]

    def edge_count(self) -> int:
        return sum(self._live())

    # ------------------------------------------------------------------
    # Filling and copying
    # ------------------------------------------------------------------

    def load(self, values: Iterable[int]) -> AdjacencyMatrix:
        """Fill the matrix row-major from *values*.

        Only the first N² values are consumed. Each must be 0 or 1.

        Raises:
            MalformedInputError: fewer than N² values, or a value other
                than 0 or 1.
        """
        cells = self._live()
        total = self._n * self._n
        it = iter(values)
        for index in range(total):
            try:
                value = next(it)
            except StopIteration:
                row, col = divmod(index, self._n)
                msg = (
                    f"Failed to read the adjacency matrix: expected {total} values, "
                    f"got {index} (missing cell [{row}][{col}])"
                )
                raise MalformedInputError(msg, expected=total, read=index) from None
            if value not in (0, 1):
                row, col = divmod(index, self._n)
                msg = (
                    f"Failed to read the adjacency matrix: cell [{row}][{col}] "
                    f"must be 0 or 1, got {value}"
                )
                raise MalformedInputError(msg, row=row, column=col, value=value)
            cells[index] = value
        logger.debug("Loaded %dx%d matrix", self._n, self._n)
        return self

    def copy(self) -> AdjacencyMatrix:
        """Independent matrix with the same N and contents."""
        clone = AdjacencyMatrix(self._n)
        clone._cells = bytearray(self._live())
        return clone

    def copy_into(self, target: AdjacencyMatrix) -> None:
        """Overwrite *target* with this matrix's contents (same N)."""
        if target.n != self._n:
            msg = f"Cannot copy a {self._n}x{self._n} matrix into {target.n}x{target.n}"
            raise ValueError(msg)
        target._live()[:] = self._live()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{self.edge_count()} edges"
        return f"AdjacencyMatrix(n={self._n}, {state})"
