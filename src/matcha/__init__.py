"""Matcha - dating application data-access API."""

__version__ = "0.1.0"
