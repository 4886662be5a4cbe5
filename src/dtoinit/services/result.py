"""ServiceResult and ServiceError — the CLI-facing service contract.

INVARIANT: All SkeletonService methods return ServiceResult.
Library callers use :mod:`dtoinit.services.initializer` directly and get
exceptions instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from dtoinit.domain.errors import DtoInitError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DtoInitError) -> ServiceError:
        detail: dict[str, Any] = {"type": exc.type_name}
        if exc.__cause__ is not None:
            detail["cause"] = type(exc.__cause__).__name__
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"skeleton"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues (cycle truncations).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
