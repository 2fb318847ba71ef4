"""Jinja2 template loading for the HTML invoice.

A configured template file takes precedence; otherwise the packaged
``templates/invoice.html`` is used.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, PackageLoader, Template, select_autoescape

DEFAULT_TEMPLATE = "invoice.html"


def build_template_environment(template_path: Path | None = None) -> Environment:
    """Build a Jinja2 environment for *template_path* or the packaged default."""
    if template_path is not None:
        loader = FileSystemLoader(str(template_path.parent))
    else:
        loader = PackageLoader("invoicectl", "templates")
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "htm"]),
        keep_trailing_newline=True,
    )


def load_template(template_path: Path | None = None) -> Template:
    """Load and compile the invoice template.

    Raises:
        jinja2.TemplateNotFound: The template file does not exist.
        jinja2.TemplateSyntaxError: The template does not compile.
    """
    env = build_template_environment(template_path)
    name = template_path.name if template_path is not None else DEFAULT_TEMPLATE
    return env.get_template(name)


def render_html(template: Template, invoice: dict[str, Any]) -> str:
    """Render *template* with a single ``invoice`` binding."""
    return template.render(invoice=invoice)
