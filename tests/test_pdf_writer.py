"""Tests for the fpdf2-backed PdfWriter."""

import pytest

from resume_studio.export.pdf_renderer import render_pdf
from resume_studio.export.pdf_writer import FpdfWriter, find_unicode_fonts, hex_to_rgb, locate_fonts
from resume_studio.parsers.resume_parser import extract_pdf_text

needs_unicode_font = pytest.mark.skipif(
    "helvetica" not in find_unicode_fonts(), reason="no Unicode TTF font installed"
)


def test_hex_to_rgb():
    assert hex_to_rgb("#3B82F6") == (59, 130, 246)


class TestLocateFonts:
    def test_first_installed_candidate_wins(self, tmp_path):
        for name in ("b.ttf", "b-bold.ttf", "c.ttf"):
            (tmp_path / name).write_bytes(b"")
        candidates = {
            "helvetica": [
                (str(tmp_path / "a.ttf"), str(tmp_path / "a-bold.ttf"), str(tmp_path / "a-it.ttf")),
                (str(tmp_path / "b.ttf"), str(tmp_path / "b-bold.ttf"), str(tmp_path / "b-it.ttf")),
                (str(tmp_path / "c.ttf"), str(tmp_path / "c.ttf"), str(tmp_path / "c.ttf")),
            ]
        }
        fonts = locate_fonts(candidates)
        assert fonts["helvetica"] == {
            "": str(tmp_path / "b.ttf"),
            "B": str(tmp_path / "b-bold.ttf"),
            "I": str(tmp_path / "b.ttf"),
        }

    def test_nothing_installed(self, tmp_path):
        missing = str(tmp_path / "missing.ttf")
        assert locate_fonts({"courier": [(missing, missing, missing)]}) == {}


class TestCoreFonts:
    def test_non_latin1_text_replaced(self):
        writer = FpdfWriter(fonts={})
        writer.add_page()
        writer.set_font("helvetica", "", 10)
        assert writer._safe_text("Łódź • “x” – y") == "?ód? · \"x\" - y"

    def test_unloadable_font_falls_back_to_core(self, tmp_path):
        broken = tmp_path / "broken.ttf"
        broken.write_bytes(b"not a font")
        writer = FpdfWriter(fonts={"helvetica": {"": str(broken)}})
        writer.add_page()
        writer.set_font("helvetica", "B", 12)
        writer.text(20, 20, "Jane Doe")
        assert writer.output()[:4] == b"%PDF"


@needs_unicode_font
class TestUnicodeFonts:
    def test_text_kept_verbatim(self):
        writer = FpdfWriter()
        writer.add_page()
        writer.set_font("helvetica", "B", 12)
        assert writer._safe_text("Łódź →") == "Łódź →"

    def test_non_latin1_name_survives_round_trip(self):
        pdf = render_pdf("Łukasz Żółć\nl@example.com\n## Summary\nKraków → Berlin")
        text = extract_pdf_text(pdf)
        assert "Łukasz Żółć" in text
        assert "Kraków" in text
