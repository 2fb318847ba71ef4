"""invoicectl: turn a time-tracking CSV export into a billing invoice."""

__version__ = "0.1.0"
