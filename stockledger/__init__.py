"""Stock ledger service: atomic material stock movements per project."""

__version__ = "1.0.0"
