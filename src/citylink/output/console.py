"""Rich Console factory and theme for citylink output.

Consoles render into a StringIO buffer so renderers can return plain
strings.  In non-TTY environments (tests, pipes) Rich leaves out color
codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CITYLINK_THEME = Theme(
    {
        "cl.ok": "bold green",
        "cl.error": "bold red",
        "cl.op": "bold cyan",
        "cl.header": "bold",
        "cl.vertex": "bold blue",
        "cl.edge": "dim",
        "cl.missing": "yellow",
        "cl.path": "dim",
        "cl.key": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CITYLINK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
