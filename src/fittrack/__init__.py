"""Personal fitness log backed by a spreadsheet web app."""

__version__ = "0.1.0"
