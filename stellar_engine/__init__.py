"""Closed-form stellar evolution engine."""

__version__ = "0.1.0"
