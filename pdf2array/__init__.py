"""Reconstruct rows and columns of text from PDF pages."""

from __future__ import annotations

from importlib import metadata

from .api import apply_filters, extract_rows, pdf2array
from .config import FooterOptions, Pdf2ArrayOptions, SliceOptions, SuperscriptOptions
from .errors import InvalidOptions, ParseError
from .footers import strip_footers
from .logging_config import configure_logging
from .models import Fragment, Row
from .rows import build_rows
from .slicing import apply_slice
from .superscripts import strip_superscripts
from .utils import rows_to_array

__all__ = [
    "Fragment",
    "FooterOptions",
    "InvalidOptions",
    "ParseError",
    "Pdf2ArrayOptions",
    "Row",
    "SliceOptions",
    "SuperscriptOptions",
    "apply_filters",
    "apply_slice",
    "build_rows",
    "configure_logging",
    "extract_rows",
    "pdf2array",
    "rows_to_array",
    "strip_footers",
    "strip_superscripts",
    "__version__",
]

try:  # pragma: no cover - metadata only available when installed
    __version__ = metadata.version("pdf2array")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local dev
    __version__ = "1.0.0"
