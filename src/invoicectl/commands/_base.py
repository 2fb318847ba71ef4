"""Click command class for the ``invoicectl`` entry point.

``--help`` stays short; sample invocations live behind ``--examples``,
which prints them and exits before any argument is validated.
"""

from __future__ import annotations

from typing import Any

import click


class InvoiceCommand(click.Command):
    """A ``click.Command`` taking an ``examples`` block of sample invocations."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(self._examples_option())

    def _examples_option(self) -> click.Option:
        return click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_examples,
            help="Show usage examples and exit.",
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
