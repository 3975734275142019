"""Parsing of the flat textual matrix format.

The format is a stream of tokens separated by ASCII whitespace: the
vertex count N followed by N² cells, row-major.  Line breaks carry no
meaning and tokens after the last cell are ignored.  Every number is a
plain ASCII decimal with an optional sign; digit separators and
non-ASCII digits are rejected.

Examples:
    >>> m = parse_matrix("3\\n0 1 0\\n0 0 1\\n0 0 0\\n")
    >>> m.rows()
    [[0, 1, 0], [0, 0, 1], [0, 0, 0]]
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from citylink.domain.errors import MalformedInputError
from citylink.domain.matrix import AdjacencyMatrix

_TOKEN = re.compile(r"[^ \t\n\r\f\v]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def tokenize(text: str) -> Iterator[str]:
    """Split *text* on ASCII whitespace, lazily."""
    for match in _TOKEN.finditer(text):
        yield match.group()


def parse_int(token: str) -> int | None:
    """``int(token)`` for a plain ASCII decimal such as ``-3``, else None."""
    return int(token) if _INTEGER.fullmatch(token) else None


def _cell_values(tokens: Iterator[str], n: int) -> Iterator[int]:
    for index, token in enumerate(tokens):
        value = parse_int(token)
        if value is None:
            row, col = divmod(index, n)
            msg = (
                f"Failed to read the adjacency matrix: "
                f"cell [{row}][{col}] ({token!r}) is not an integer"
            )
            raise MalformedInputError(msg, token=token, row=row, column=col)
        yield value


def read_matrix(tokens: Iterable[str], *, max_vertices: int | None = None) -> AdjacencyMatrix:
    """Build an :class:`AdjacencyMatrix` from a token stream.

    Raises:
        MalformedInputError: N missing, not an integer, or negative;
            or the cells are truncated or invalid.
        AllocationError: N exceeds *max_vertices* or memory runs out.
    """
    it = iter(tokens)
    first = next(it, None)
    if first is None:
        raise MalformedInputError("Failed to read the number of cities: input is empty")
    n = parse_int(first)
    if n is None:
        msg = f"Failed to read the number of cities: {first!r} is not an integer"
        raise MalformedInputError(msg, token=first)
    if n < 0:
        msg = f"Failed to read the number of cities: {n} is negative"
        raise MalformedInputError(msg, n=n)

    matrix = AdjacencyMatrix.create(n, max_vertices=max_vertices)
    try:
        matrix.load(_cell_values(it, n))
    except MalformedInputError:
        matrix.release()
        raise
    return matrix


def parse_matrix(text: str, *, max_vertices: int | None = None) -> AdjacencyMatrix:
    """Parse the full text of a matrix file."""
    return read_matrix(tokenize(text), max_vertices=max_vertices)

