"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: service operations return ServiceResult; domain errors are
reported through ``error``, never raised to the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from citylink.domain.errors import CityLinkError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CityLinkError) -> ServiceError:
        return cls(code=str(exc.code), message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Return type for every reachability operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"inspect"``, ``"route"``, ...).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry span tree).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: CityLinkError) -> ServiceResult:
        """Wrap a domain error as a failed result."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
