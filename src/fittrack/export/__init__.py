"""Output formatters."""

from fittrack.export.formatters import JSONFormatter, TableFormatter

__all__ = ["TableFormatter", "JSONFormatter"]
