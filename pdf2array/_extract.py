"""PyMuPDF-backed source of positioned text fragments."""

from __future__ import annotations

from typing import Collection, Iterator, List, Optional, Tuple, Union

import pymupdf  # type: ignore

from .errors import ParseError
from .logging_config import get_logger
from .models import Fragment

logger = get_logger(__name__)

DocumentSource = Union[bytes, bytearray, memoryview, "pymupdf.Document"]


def open_document(data: DocumentSource) -> "pymupdf.Document":
    """Open PDF bytes, raising :class:`ParseError` if they cannot be decoded."""
    if isinstance(data, pymupdf.Document):
        document = data
    else:
        if not data:
            raise ParseError("Empty document")
        try:
            document = pymupdf.open(stream=bytes(data), filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise ParseError(f"Cannot open document: {exc}") from exc

    if document.needs_pass:
        if document is not data:
            document.close()
        raise ParseError("Document is encrypted and needs a password")
    return document


def page_fragments(page: "pymupdf.Page") -> List[Fragment]:
    """Return every non-blank text span on ``page`` as a :class:`Fragment`.

    PyMuPDF measures y downwards from the top of the page; fragments use the
    span's baseline measured upwards from the bottom so that larger y means
    higher on the page.
    """
    page_height = page.rect.height
    fragments: List[Fragment] = []
    text = page.get_text("dict", flags=pymupdf.TEXTFLAGS_TEXT)
    for block in text.get("blocks", []):
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                span_text = span.get("text", "")
                if not span_text.strip():
                    continue
                x0, _, x1, _ = span["bbox"]
                _, baseline = span["origin"]
                fragments.append(
                    Fragment(
                        text=span_text,
                        x=float(x0),
                        y=float(page_height - baseline),
                        width=float(x1 - x0),
                        height=float(span["size"]),
                    )
                )
    return fragments


def iter_page_fragments(
    document: "pymupdf.Document",
    page_numbers: Optional[Collection[int]] = None,
) -> Iterator[Tuple[int, List[Fragment]]]:
    """Yield ``(page_index, fragments)`` for the selected 1-based pages."""
    for index in range(document.page_count):
        if page_numbers is not None and index + 1 not in page_numbers:
            continue
        try:
            page = document.load_page(index)
            fragments = page_fragments(page)
        except (RuntimeError, ValueError) as exc:
            raise ParseError(f"Cannot read page {index + 1}: {exc}") from exc
        logger.debug("page %d: %d fragments", index, len(fragments))
        yield index, fragments


__all__ = ["open_document", "iter_page_fragments", "page_fragments"]
