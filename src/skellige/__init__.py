"""Skellige - git helpers with a single error type."""

__version__ = "0.1.0"
