"""Builders for test fragments, rows and small PDFs.

Fragments use the library's coordinate convention (y grows upwards). The PDF
builders take baselines measured from the top of the page, the way PyMuPDF
places text.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import pymupdf  # type: ignore

from pdf2array.models import Fragment, Row

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
FONT = "helv"

# (text, x, baseline from the top of the page, font size)
TextSpec = Tuple[str, float, float, float]


def frag(text: str, x: float, y: float, width: float = 10.0, height: float = 10.0) -> Fragment:
    """Shorthand for a fragment."""
    return Fragment(text=text, x=x, y=y, width=width, height=height)


def make_row(items: Sequence[Fragment], page: int = 0, row_number: int = 0) -> Row:
    """A row holding ``items`` with the first item's baseline."""
    return Row(
        page=page,
        row_number=row_number,
        y=items[0].y,
        items=list(items),
        xs=[item.x for item in items],
    )


def make_rows(rows: Iterable[Tuple[int, Sequence[Fragment]]]) -> List[Row]:
    """Rows numbered by position from ``(page, items)`` pairs."""
    return [make_row(items, page, idx) for idx, (page, items) in enumerate(rows)]


def text_length(text: str, fontsize: float) -> float:
    """Advance width of ``text`` in the fixture font."""
    return pymupdf.get_text_length(text, fontname=FONT, fontsize=fontsize)


class PDFTestFixtures:
    """Create in-memory PDFs for end-to-end tests."""

    def __init__(self, width: float = PAGE_WIDTH, height: float = PAGE_HEIGHT):
        """Remember the page size used for every generated page."""
        self.width = width
        self.height = height

    def build(self, pages: Sequence[Sequence[TextSpec]]) -> bytes:
        """Return PDF bytes with one page per entry of ``pages``."""
        doc = pymupdf.open()
        try:
            for specs in pages:
                page = doc.new_page(width=self.width, height=self.height)
                for text, x, baseline, size in specs:
                    page.insert_text((x, baseline), text, fontname=FONT, fontsize=size)
            return doc.tobytes()
        finally:
            doc.close()

    def with_footers(self, bodies: Sequence[str]) -> bytes:
        """One page per body line, each closed by a ``Page N`` footer."""
        return self.build(
            [
                [(body, 72, 100, 12), (f"Page {n}", 72, 760, 9)]
                for n, body in enumerate(bodies, start=1)
            ]
        )

    def with_superscript(self) -> bytes:
        """A single ``Intro`` line followed by a raised footnote marker."""
        intro_width = text_length("Intro", 10)
        return self.build([[("Intro", 72, 100, 10), ("1", 72 + intro_width, 98, 4)]])


def get_fixtures() -> PDFTestFixtures:
    """Factory function to get the fixtures manager."""
    return PDFTestFixtures()
