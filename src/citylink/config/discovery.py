"""Locate the citylink.toml that applies to an invocation.

Precedence: ``-c/--config`` (must exist), then ``$CITYLINK_CONFIG``,
then the nearest ``citylink.toml`` in the working directory or one of
its parents.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import click

CONFIG_FILENAME = "citylink.toml"
CONFIG_ENV_VAR = "CITYLINK_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the implicit config file, or None.

    ``$CITYLINK_CONFIG`` replaces the walk-up search entirely; if it
    names a missing file no config applies.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    candidates = (directory / CONFIG_FILENAME for directory in _walk_up(start or Path.cwd()))
    return next((path for path in candidates if path.is_file()), None)


def resolve_config(explicit: str | None, search_from: Path | None = None) -> Path | None:
    """Apply ``--config`` if given, otherwise fall back to :func:`find_config`.

    Raises:
        click.ClickException: *explicit* does not name a file.
    """
    if not explicit:
        return find_config(search_from)
    path = Path(explicit)
    if not path.is_file():
        msg = f"Config file not found: {explicit}"
        raise click.ClickException(msg)
    return path
