"""Yo-Yo Champion progression engine."""

__version__ = "0.1.0"
