"""End-to-end tests for turning PDF documents into arrays."""

from __future__ import annotations

import pymupdf  # type: ignore
import pytest

from pdf2array import ParseError, Pdf2ArrayOptions, apply_filters, extract_rows, pdf2array
from pdf2array.rows import build_rows
from tests.pdf_fixtures import PDFTestFixtures, frag

BODIES = ["Alpha", "Beta", "Gamma", "Delta"]


@pytest.mark.integration
class TestPdf2Array:
    """Documents generated with PyMuPDF and read back."""

    def test_rows_in_reading_order(self, pdf_fixtures: PDFTestFixtures):
        data = pdf_fixtures.build(
            [[("second line", 72, 140, 12), ("first line", 72, 100, 12), ("third line", 72, 180, 12)]]
        )
        assert pdf2array(data) == [["first line"], ["second line"], ["third line"]]

    def test_footers_kept_by_default(self, pdf_fixtures: PDFTestFixtures):
        array = pdf2array(pdf_fixtures.with_footers(BODIES))
        assert array[-1] == ["Page 4"]
        assert len(array) == 8

    def test_strip_footers(self, pdf_fixtures: PDFTestFixtures):
        data = pdf_fixtures.with_footers(BODIES)
        assert pdf2array(data, stripFooters=True) == [[body] for body in BODIES]

    def test_page_selection(self, pdf_fixtures: PDFTestFixtures):
        data = pdf_fixtures.with_footers(BODIES)
        rows = extract_rows(data, pages=[2, 4])
        assert [row.texts() for row in rows] == [["Beta"], ["Page 2"], ["Delta"], ["Page 4"]]
        assert [row.page for row in rows] == [1, 1, 3, 3]
        assert [row.row_number for row in rows] == [0, 1, 2, 3]

    def test_strip_superscript(self, pdf_fixtures: PDFTestFixtures):
        data = pdf_fixtures.with_superscript()
        flat = [text for row in pdf2array(data) for text in row]
        assert "1" in flat

        assert pdf2array(data, {"stripSuperscript": True}) == [["Intro"]]

    def test_accepts_open_document(self, pdf_fixtures: PDFTestFixtures):
        doc = pymupdf.open(stream=pdf_fixtures.with_footers(BODIES[:2]), filetype="pdf")
        try:
            assert pdf2array(doc, Pdf2ArrayOptions(pages=[1])) == [["Alpha"], ["Page 1"]]
        finally:
            doc.close()

    def test_verbose_option(self, pdf_fixtures: PDFTestFixtures, caplog: pytest.LogCaptureFixture):
        data = pdf_fixtures.with_footers(BODIES)
        with caplog.at_level("DEBUG", logger="pdf2array"):
            pdf2array(data, strip_footers=True, verbose=True)
        assert any("removing footer" in message for message in caplog.messages)

    @pytest.mark.parametrize("data", [b"", b"this is not a pdf"])
    def test_parse_error(self, data):
        with pytest.raises(ParseError):
            pdf2array(data)

    def test_password_protected_document(self, pdf_fixtures: PDFTestFixtures):
        doc = pymupdf.open(stream=pdf_fixtures.with_footers(BODIES[:1]), filetype="pdf")
        try:
            data = doc.tobytes(
                encryption=pymupdf.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user"
            )
        finally:
            doc.close()
        with pytest.raises(ParseError, match="password"):
            pdf2array(data)


@pytest.mark.smoke
def test_filter_chain_on_fragments():
    """The filters run in order on caller-supplied fragments."""
    pages = []
    for page, body in enumerate(BODIES):
        pages.append(
            (
                page,
                [
                    frag(body, 0, 700, width=40),
                    frag("*", 40, 703, width=2, height=4),
                    frag(f"{body} total", 0, 680, width=40),
                    frag(str(page * 10), 200, 680, width=20),
                    frag(f"Page {page + 1}", 100, 20, width=40),
                ],
            )
        )
    rows = build_rows(pages)
    options = Pdf2ArrayOptions(strip_footers=True, strip_superscript=True, slice=True)
    result = [row.texts() for row in apply_filters(rows, options)]

    assert result == [
        row
        for page, body in enumerate(BODIES)
        for row in ([body], [f"{body} total", str(page * 10)])
    ]
