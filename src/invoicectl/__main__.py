"""Allow ``python -m invoicectl``."""

from invoicectl.cli import cli

if __name__ == "__main__":
    cli()
