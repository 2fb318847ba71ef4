"""Tests for the config section models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from invoicectl.config.models import BillingConfig, ClientConfig, CompanyConfig


class TestClientConfig:
    def test_defaults(self) -> None:
        assert ClientConfig() == ClientConfig(name="", code="")

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            ClientConfig().name = "x"  # type: ignore[misc]

    def test_extra_keys_kept(self) -> None:
        client = ClientConfig.model_validate(
            {"name": "ACME Corp", "code": "ACME", "address": "2 Side St"}
        )
        assert client.model_dump() == {"name": "ACME Corp", "code": "ACME", "address": "2 Side St"}


class TestCompanyConfig:
    def test_extra_keys_kept(self) -> None:
        company = CompanyConfig.model_validate(
            {"name": "Jane Doe", "address": "1 Main St", "email": "jane@example.com"}
        )
        assert company.model_dump() == {
            "name": "Jane Doe",
            "address": "1 Main St",
            "email": "jane@example.com",
        }


class TestBillingConfig:
    def test_defaults(self) -> None:
        billing = BillingConfig()
        assert billing.service_fee == Decimal("25")
        assert billing.default_project == "C&C"
        assert billing.placeholder_project == "-"
        assert billing.timezone == "UTC"

    def test_camel_case_aliases(self) -> None:
        billing = BillingConfig.model_validate(
            {"serviceFee": "12.50", "defaultProject": "Ops", "placeholderProject": "none"}
        )
        assert billing.service_fee == Decimal("12.50")
        assert billing.default_project == "Ops"
        assert billing.placeholder_project == "none"

    def test_named_timezone_accepted(self) -> None:
        assert BillingConfig(timezone="Europe/Berlin").timezone == "Europe/Berlin"

    def test_unknown_timezone_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown timezone"):
            BillingConfig(timezone="Mars/Olympus")
