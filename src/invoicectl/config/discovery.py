"""Locating and reading ``config.json``.

Lookup order: the ``INVOICECTL_CONFIG`` environment variable, then the
nearest ``config.json`` in the start directory or any of its parents.
An explicit ``--config`` path bypasses both (see ``InvoiceSettings``).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_snake

CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "INVOICECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for a run started in *start*, or None.

    When ``INVOICECTL_CONFIG`` is set it is authoritative: a path that does
    not name a file yields None rather than falling back to the search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config_data(path: Path) -> dict[str, Any]:
    """Parse *path* and snake_case its top-level keys.

    Section keys (``serviceFee`` inside ``billing``) are left alone; the
    section models accept their camelCase aliases.

    Raises:
        ValueError: Invalid JSON, or a document that is not an object.
    """
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        msg = f"{path} must contain a JSON object"
        raise ValueError(msg)
    return {to_snake(key): value for key, value in data.items()}
