"""takt: a personal work-time ledger."""

__version__ = "0.3.0"
