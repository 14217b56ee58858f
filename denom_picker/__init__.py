"""Ecash denomination picker: selection, formatting and note preview service."""

__version__ = "0.1.0"
