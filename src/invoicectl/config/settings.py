"""Unified settings: CLI flags, env vars and JSON config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``INVOICECTL_*`` prefix
  3. JSON file: ``config.json`` discovered via walk-up
  4. Code defaults baked into the section models

Uses Pydantic Settings v2 with a custom :class:`JsonSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`invoicectl.config.discovery`.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from invoicectl.config.discovery import find_config, load_config_data
from invoicectl.config.models import BillingConfig, ClientConfig, CompanyConfig


class JsonSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``config.json`` file."""

    def __init__(self, settings_cls: type[BaseSettings], json_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if json_path and json_path.is_file():
            try:
                self._data = load_config_data(json_path)
            except ValueError as exc:
                msg = f"Invalid JSON in {json_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full JSON data dict for Pydantic to merge."""
        return self._data


# JSON path for the InvoiceSettings currently being constructed on this thread.
_tls = threading.local()


class InvoiceSettings(BaseSettings):
    """Unified settings for one ``invoicectl`` run.

    Merges CLI flags, environment variables, the JSON config, and
    code-baked defaults into a single frozen object.

    Attributes:
        config_path: The JSON file actually loaded, or None.
        template: Jinja2 HTML template; None uses the packaged default.
        archive_dir: Directory receiving the HTML and PDF files.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "INVOICECTL_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Output locations ---
    template: Path | None = None
    archive_dir: Path = Path("archive")

    # --- JSON sections ---
    client: ClientConfig = Field(default_factory=ClientConfig)
    company: CompanyConfig = Field(default_factory=CompanyConfig)
    hourly_rate: Decimal = Decimal("0")
    billing: BillingConfig = Field(default_factory=BillingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the JSON source between env vars and defaults."""
        json_path = getattr(_tls, "json_path", None)
        return (
            init_settings,
            env_settings,
            JsonSettingsSource(settings_cls, json_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_root: Path | None = None,
        **cli_flags: Any,
    ) -> InvoiceSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* or discovers ``config.json`` by
        walking up from *search_root*. CLI flags that are None are dropped
        so they never mask env vars or the JSON file.

        Raises:
            click.ClickException: An explicit config path does not exist, or
                the merged settings fail validation.
        """
        json_path: Path | None
        if config_path:
            json_path = Path(config_path)
            if not json_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            json_path = find_config(search_root)

        overrides = {key: value for key, value in cli_flags.items() if value is not None}

        _tls.json_path = json_path
        try:
            return cls(config_path=json_path, **overrides)
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.json_path = None
