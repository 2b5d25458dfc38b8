"""Helpers for Messages databases, property lists and typedstream data."""

__version__ = "0.1.0"