"""Matrix file I/O.

Reading turns an ``OSError`` into :class:`FileAccessError` and bytes that
do not decode into :class:`MalformedInputError`, then hands the text to
:mod:`citylink.domain.reader`.  Closure output goes to a file
derived from the input name (``out-`` prefix, same directory).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from citylink.domain.closure import CLOSURE_HEADER, ClosureEdge, format_edge
from citylink.domain.errors import FileAccessError, MalformedInputError
from citylink.domain.matrix import AdjacencyMatrix
from citylink.domain.reader import parse_matrix


def read_matrix_file(
    path: Path,
    *,
    max_vertices: int | None = None,
    encoding: str = "utf-8",
) -> AdjacencyMatrix:
    """Load the adjacency matrix stored at *path*.

    Raises:
        FileAccessError: the file cannot be opened.
        MalformedInputError: the contents are not *encoding* text, or
            not a valid matrix.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Unable to open the input file {path} for reading: {exc}"
        raise FileAccessError(msg, path=str(path)) from exc
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        msg = (
            f"Failed to read the adjacency matrix: byte {exc.start} of {path} "
            f"is not valid {encoding}"
        )
        raise MalformedInputError(msg, path=str(path), offset=exc.start) from exc
    return parse_matrix(text, max_vertices=max_vertices)


def derived_output_path(input_path: Path, prefix: str = "out-") -> Path:
    """``data/cities.txt`` -> ``data/out-cities.txt``."""
    return input_path.with_name(f"{prefix}{input_path.name}")


def write_closure_file(
    path: Path,
    edges: Iterable[ClosureEdge],
    *,
    encoding: str = "utf-8",
) -> int:
    """Stream the closure header and *edges* into *path*.

    Edges are written as they arrive.  Returns the number of edges written.

    Raises:
        FileAccessError: the output file cannot be opened or written.
    """
    count = 0
    try:
        with path.open("w", encoding=encoding) as fh:
            fh.write(f"{CLOSURE_HEADER}\n")
            for edge in edges:
                fh.write(f"{format_edge(edge)}\n")
                count += 1
    except OSError as exc:
        msg = f"Error opening the output file {path}: {exc}"
        raise FileAccessError(msg, path=str(path)) from exc
    return count
