"""Logging for citylink: one stderr handler for structlog and stdlib loggers.

Domain modules log through ``logging.getLogger(__name__)``; services and
telemetry log through structlog.  Both are rendered by the same
``ProcessorFormatter`` on the ``citylink`` logger, so stdout never
carries anything but results.

Every record carries the context of the invocation: the input file
(:func:`bind_invocation`) and the running operation (bound by
:func:`citylink.services.telemetry.traced`).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.types import Processor

LOGGER_NAME = "citylink"


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler on the ``citylink`` logger tree.

    Safe to call more than once; the previous handler is replaced.
    Loggers outside ``citylink`` are left alone.
    """
    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def bind_invocation(input_path: Path) -> None:
    """Start a fresh log context for one run over *input_path*."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(input=str(input_path))
