"""ServiceResult — what every service operation returns to the CLI.

The core renderer raises :class:`~rxvmgen.domain.errors.RxvmgenError`
subclasses; the service layer catches them and reports a failed result
with a stable error ``code`` instead, so the CLI never sees exceptions
for bad input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    Attributes:
        code: Stable identifier (``INVALID_INPUT``, ``TEMPLATE_ERROR``,
            ``READ_ERROR``, ``WRITE_ERROR``).
        message: Human-readable explanation.
        detail: Extra context such as the source path or template name.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"render"`` or ``"inspect"``); selects the
            human renderer.
        data: Payload on success.
        warnings: Non-fatal issues, printed to stderr.
        error: Set when ``ok`` is False.
        meta: Extra information; ``meta["telemetry"]`` holds the span
            tree in verbose runs.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
