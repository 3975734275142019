"""Error taxonomy for the reachability engine.

Every domain failure derives from :class:`CityLinkError` and carries an
:class:`ErrorCode`.  The service layer turns these into
``ServiceError(code=...)`` payloads; nothing below the service layer
prints or exits.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable machine-readable error codes."""

    FILE_ACCESS = "FILE_ACCESS"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    INVALID_VERTEX = "INVALID_VERTEX"
    ALLOCATION = "ALLOCATION"
    RELEASED = "RELEASED"


class CityLinkError(Exception):
    """Base class for all citylink domain errors."""

    code: ErrorCode

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class FileAccessError(CityLinkError):
    """An input or output file could not be opened."""

    code = ErrorCode.FILE_ACCESS


class MalformedInputError(CityLinkError):
    """The matrix token stream is truncated or holds invalid values."""

    code = ErrorCode.MALFORMED_INPUT


class InvalidVertexError(CityLinkError):
    """A vertex index lies outside ``[0, N)``."""

    code = ErrorCode.INVALID_VERTEX


class AllocationError(CityLinkError):
    """Matrix storage could not be obtained."""

    code = ErrorCode.ALLOCATION


class MatrixReleasedError(CityLinkError):
    """A matrix was used after :meth:`AdjacencyMatrix.release`."""

    code = ErrorCode.RELEASED
