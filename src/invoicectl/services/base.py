"""BaseService: common foundation for invoicectl services.

Every service receives the run's :class:`InvoiceSettings` at construction
time and reads client, company, rate, and billing rules from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from invoicectl.services.result import ServiceResult

if TYPE_CHECKING:
    from invoicectl.config.settings import InvoiceSettings

log = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class InvoiceService(BaseService):
            def build_invoice(self, csv_path: Path) -> ServiceResult:
                rate = self._settings.hourly_rate
                ...
    """

    def __init__(self, settings: InvoiceSettings) -> None:
        self._settings = settings

    def _fail(self, op: str, code: str, message: str, **detail: object) -> ServiceResult:
        """Log and return a failed result."""
        log.error("service.failed", op=op, code=code, message=message, **detail)
        return ServiceResult.failure(op, code, message, **detail)
