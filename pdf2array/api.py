"""Public facing API for turning PDF text into rows of strings."""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Union

from ._extract import DocumentSource, iter_page_fragments, open_document
from .config import Pdf2ArrayOptions
from .footers import strip_footers
from .logging_config import get_logger, verbose_logging
from .models import Row
from .rows import build_rows
from .slicing import apply_slice
from .superscripts import strip_superscripts
from .utils import rows_to_array

logger = get_logger(__name__)

OptionsLike = Union[Pdf2ArrayOptions, Mapping[str, Any], None]


def apply_filters(rows: Sequence[Row], options: Pdf2ArrayOptions) -> List[Row]:
    """Run the enabled filters in their fixed order: footers, superscripts, slice."""
    result = list(rows)
    if options.strip_footers:
        before = len(result)
        result = strip_footers(result, options.strip_footers)
        logger.debug("footer filter: %d -> %d rows", before, len(result))
    if options.strip_superscript:
        before = len(result)
        result = strip_superscripts(result, options.strip_superscript)
        logger.debug("superscript filter: %d -> %d rows", before, len(result))
    if options.slice:
        result = apply_slice(result, options.slice)
    return result


def extract_rows(data: DocumentSource, options: OptionsLike = None, **kwargs: Any) -> List[Row]:
    """Read ``data`` and return its filtered rows.

    Raises:
        ParseError: The document cannot be decoded.
        InvalidOptions: An option is out of range.
    """
    opts = Pdf2ArrayOptions.from_value(options, **kwargs)
    with verbose_logging(opts.verbose):
        document = open_document(data)
        try:
            rows = build_rows(iter_page_fragments(document, opts.pages), opts.pages)
            logger.debug("built %d rows from %d pages", len(rows), document.page_count)
        finally:
            # documents handed in by the caller stay open
            if document is not data:
                document.close()
        return apply_filters(rows, opts)


def pdf2array(data: DocumentSource, options: OptionsLike = None, **kwargs: Any) -> List[List[str]]:
    """Load a PDF and return its text arranged into a 2-d array.

    Args:
        data: PDF bytes or an open ``pymupdf.Document``.
        options: :class:`Pdf2ArrayOptions` or an equivalent mapping. Mapping
            keys may use camelCase (``stripFooters``).
        **kwargs: Individual options, overriding ``options``.

    Returns:
        One list of fragment texts per row, in reading order.
    """
    return rows_to_array(extract_rows(data, options, **kwargs))


__all__ = ["apply_filters", "extract_rows", "pdf2array", "rows_to_array"]
