"""PDF drawing capability used by the page renderer, backed by fpdf2."""

from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Protocol

from fpdf import FPDF

logger = logging.getLogger(__name__)

PAGE_FORMAT = "A4"

# Unicode-capable TTF fonts per core family: (regular, bold, italic), first match wins.
UNICODE_FONT_CANDIDATES: dict[str, list[tuple[str, str, str]]] = {
    "helvetica": [
        (
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Oblique.ttf",
        ),
        (
            "/usr/share/fonts/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
            "/usr/share/fonts/dejavu/DejaVuSans-Oblique.ttf",
        ),
        (
            "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Italic.ttf",
        ),
        (
            "/System/Library/Fonts/Supplemental/Arial.ttf",
            "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
            "/System/Library/Fonts/Supplemental/Arial Italic.ttf",
        ),
        ("C:/Windows/Fonts/arial.ttf", "C:/Windows/Fonts/arialbd.ttf", "C:/Windows/Fonts/ariali.ttf"),
    ],
    "courier": [
        (
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono-Bold.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono-Oblique.ttf",
        ),
        (
            "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationMono-Bold.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationMono-Italic.ttf",
        ),
        ("C:/Windows/Fonts/cour.ttf", "C:/Windows/Fonts/courbd.ttf", "C:/Windows/Fonts/couri.ttf"),
    ],
}

# Core PDF fonts only cover latin-1; map common typographic characters first.
_LATIN1_FALLBACKS = str.maketrans(
    {
        "\u2022": "\u00b7",
        "\u2013": "-",
        "\u2014": "-",
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u2026": "...",
    }
)


class PdfWriter(Protocol):
    """Drawing surface in millimetres with the origin at the top-left corner."""

    def add_page(self) -> None: ...

    def set_font(self, family: str, style: str, size: float) -> None: ...

    def set_text_color(self, hex_color: str) -> None: ...

    def set_draw_color(self, hex_color: str) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def text(self, x: float, y: float, text: str) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def text_width(self, text: str) -> float: ...

    def output(self) -> bytes: ...


def locate_fonts(candidates: dict[str, list[tuple[str, str, str]]]) -> dict[str, dict[str, str]]:
    """Pick the first installed candidate per family as a style -> path map.

    A missing bold or italic file falls back to the regular file.
    """
    found: dict[str, dict[str, str]] = {}
    for family, options in candidates.items():
        for regular, bold, italic in options:
            if not Path(regular).exists():
                continue
            found[family] = {
                "": regular,
                "B": bold if Path(bold).exists() else regular,
                "I": italic if Path(italic).exists() else regular,
            }
            break
    return found


@lru_cache(maxsize=1)
def find_unicode_fonts() -> dict[str, dict[str, str]]:
    """Search for Unicode-capable TTF fonts on the system."""
    return locate_fonts(UNICODE_FONT_CANDIDATES)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    value = hex_color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class FpdfWriter:
    """PdfWriter over an fpdf2 document; pages are broken by the caller."""

    def __init__(self, fonts: dict[str, dict[str, str]] | None = None) -> None:
        self.pdf = FPDF(orientation="P", unit="mm", format=PAGE_FORMAT)
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(0, 0, 0)
        self._families: dict[str, str] = {}
        for family, styles in (find_unicode_fonts() if fonts is None else fonts).items():
            self._register_font(family, styles)

    def _register_font(self, family: str, styles: dict[str, str]) -> None:
        name = f"unicode-{family}"
        try:
            for style in ("", "B", "I"):
                self.pdf.add_font(name, style, styles.get(style, styles[""]))
        except Exception:
            logger.debug("Failed to load font for %s: %s", family, styles, exc_info=True)
            return
        self._families[family] = name

    def add_page(self) -> None:
        self.pdf.add_page()

    def set_font(self, family: str, style: str, size: float) -> None:
        family = self._families.get(family.lower(), family)
        self.pdf.set_font(family, style=style, size=size)

    def set_text_color(self, hex_color: str) -> None:
        self.pdf.set_text_color(*hex_to_rgb(hex_color))

    def set_draw_color(self, hex_color: str) -> None:
        self.pdf.set_draw_color(*hex_to_rgb(hex_color))

    def set_line_width(self, width: float) -> None:
        self.pdf.set_line_width(width)

    def text(self, x: float, y: float, text: str) -> None:
        self.pdf.text(x, y, self._safe_text(text))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.pdf.line(x1, y1, x2, y2)

    def text_width(self, text: str) -> float:
        return self.pdf.get_string_width(self._safe_text(text))

    def output(self) -> bytes:
        buf = BytesIO()
        self.pdf.output(buf)
        return buf.getvalue()

    def _safe_text(self, text: str) -> str:
        """Ensure text is encodable by the current font. Replace if needed."""
        if self.pdf.is_ttf_font:
            return text
        text = text.translate(_LATIN1_FALLBACKS)
        return text.encode("latin-1", errors="replace").decode("latin-1")
