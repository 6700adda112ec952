"""ServiceResult and ServiceError — the return contract of every service.

INVARIANT: Service methods return ServiceResult; they do not raise for
expected failures (missing files, bad schemas, unreachable APIs).
The CLI renders results and maps ``ok`` to the process exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes
FILE_NOT_FOUND = "FILE_NOT_FOUND"
INVALID_JSON = "INVALID_JSON"
INVALID_SCHEMA = "INVALID_SCHEMA"
RECORD_INVALID = "RECORD_INVALID"
INVALID_COUNT = "INVALID_COUNT"
CONFIG_MISSING = "CONFIG_MISSING"
API_UNREACHABLE = "API_UNREACHABLE"
STEP_FAILED = "STEP_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"validate"``, ``"lifecycle"``, ...).
        data: Operation payload.  Failed validations still carry their report.
        warnings: Non-fatal issues.
        error: Structured error when ``ok`` is False.
        meta: Optional metadata (telemetry spans in verbose mode).
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
        *,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
