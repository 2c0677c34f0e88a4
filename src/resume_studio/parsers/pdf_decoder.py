"""PDF decoding capability: raw bytes to per-page glyph runs."""

from __future__ import annotations

import logging
from typing import Protocol

import fitz  # pymupdf

from resume_studio.errors import ExtractionError
from resume_studio.parsers.glyph_lines import GlyphRun

logger = logging.getLogger(__name__)

_TEXT_BLOCK = 0


class PdfDecoder(Protocol):
    def decode(self, pdf_bytes: bytes) -> list[list[GlyphRun]]:
        """Return one list of glyph runs per page, in page order."""
        ...


class PyMuPdfDecoder:
    """Decode PDF text spans with PyMuPDF.

    PyMuPDF measures y downward from the top of the page; runs are
    flipped so that larger y is higher on the page.
    """

    def decode(self, pdf_bytes: bytes) -> list[list[GlyphRun]]:
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise ExtractionError(f"Could not open PDF: {exc}") from exc

        try:
            if doc.needs_pass:
                raise ExtractionError("PDF is password protected")
            if doc.page_count == 0:
                raise ExtractionError("PDF has no pages")
            pages = []
            for page in doc:
                pages.append(self._page_runs(page))
        except (RuntimeError, ValueError) as exc:
            raise ExtractionError(f"Could not decode PDF: {exc}") from exc
        finally:
            doc.close()

        logger.debug("Decoded %d pages", len(pages))
        return pages

    def _page_runs(self, page: fitz.Page) -> list[GlyphRun]:
        height = page.rect.height
        runs: list[GlyphRun] = []
        for block in page.get_text("dict")["blocks"]:
            if block.get("type") != _TEXT_BLOCK:
                continue
            for line in block["lines"]:
                for span in line["spans"]:
                    x0, y0, x1, y1 = span["bbox"]
                    origin_x, origin_y = span["origin"]
                    runs.append(
                        GlyphRun(
                            text=span["text"],
                            x=origin_x,
                            y=height - origin_y,
                            width=x1 - x0,
                            height=y1 - y0,
                        )
                    )
        return runs
