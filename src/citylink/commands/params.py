"""Custom Click parameter types."""

from __future__ import annotations

from typing import Any

import click

from citylink.domain.reader import parse_int


class VertexPairType(click.ParamType):
    """``SRC,DST`` -> ``(src, dst)``, two integers separated by a comma.

    Integers follow the matrix file's rules (ASCII digits, optional
    sign).  Only the syntax is checked here; range checks need the loaded
    matrix and happen in the path finder.
    """

    name = "SRC,DST"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> tuple[int, int]:
        if isinstance(value, tuple):
            return value
        parts = [parse_int(part.strip()) for part in str(value).split(",")]
        if len(parts) != 2 or None in parts:
            self.fail(f"Invalid source and destination cities: {value}", param, ctx)
        source, destination = parts
        return source, destination


VERTEX_PAIR = VertexPairType()
