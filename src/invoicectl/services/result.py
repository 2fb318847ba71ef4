"""Result objects passed from services to the CLI.

Expected failures (unreadable CSV, invalid entries, nothing to bill, PDF
errors) come back as ``ServiceResult(ok=False, error=...)``; services do
not raise for them. A broken template is reported as a warning on an
``ok`` result.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code`` plus context in ``detail``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name, ``"build_invoice"``, ``"export_html"`` or ``"export_pdf"``.
        data: Payload of a successful operation.
        warnings: Problems that did not stop the operation.
        error: Failure details when ``ok`` is False.
        meta: Extra run data; ``meta["telemetry"]`` under ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Failed result for *op* carrying a :class:`ServiceError`."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
