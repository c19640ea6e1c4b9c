"""Exception types raised by pdf2array."""

from __future__ import annotations


class ParseError(RuntimeError):
    """Raised when a document cannot be decoded into text fragments."""


class InvalidOptions(ValueError):
    """Raised when an option is out of range or of the wrong type."""


__all__ = ["InvalidOptions", "ParseError"]
