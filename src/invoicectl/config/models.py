"""Pydantic configuration models with code-baked defaults.

Sparse JSON contract: defaults baked here, ``config.json`` only needs
``client``, ``company`` and ``hourlyRate``. Keys are camelCase in the file
and snake_case in Python.
"""

from __future__ import annotations

from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


class _Section(BaseModel):
    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class ClientConfig(_Section):
    """``client`` section: who the invoice is billed to.

    Extra keys (address, email, ...) are kept and end up in ``bill_to``.
    """

    model_config = {**_Section.model_config, "extra": "allow"}

    name: str = ""
    code: str = ""


class CompanyConfig(_Section):
    """``company`` section: who the invoice is from.

    Extra keys (address, email, ...) are kept and handed to the template.
    """

    model_config = {**_Section.model_config, "extra": "allow"}

    name: str = ""


class BillingConfig(_Section):
    """``billing`` section: fee and project defaults."""

    service_fee: Decimal = Decimal("25")
    default_project: str = "C&C"
    placeholder_project: str = "-"
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value == "UTC":
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone: {value}"
            raise ValueError(msg) from exc
        return value

