"""Unity batch build runner with live log following."""

__version__ = "0.1.0"
