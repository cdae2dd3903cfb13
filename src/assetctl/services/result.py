"""ServiceResult and ServiceError — the contract every service returns.

INVARIANT: Clean, category runs, and builds all return ServiceResult.
Per-file transformation failures are warnings on an ``ok`` result;
only failures that stop a run from happening at all set ``ok=False``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes for fatal (ok=False) results.
CLEAN_FAILED = "CLEAN_FAILED"
SOURCE_ROOT_MISSING = "SOURCE_ROOT_MISSING"
CATEGORY_DISABLED = "CATEGORY_DISABLED"
UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
PROCESSOR_CRASHED = "PROCESSOR_CRASHED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation ran to completion.
        op: Name of the operation (``"build"``, ``"css"``, ``"clean"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues, including per-file failures.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
