"""Tests for resume file parsing and text cleanup."""

import pytest

from resume_studio.parsers.resume_parser import clean_markdown, parse_resume


class TestParseResume:
    def test_parse_txt(self, tmp_path):
        f = tmp_path / "resume.txt"
        f.write_text("Jane Doe\n\n\n\nEngineer", encoding="utf-8")
        assert parse_resume(f) == "Jane Doe\n\nEngineer"

    def test_parse_md(self, tmp_path, sample_markdown):
        f = tmp_path / "resume.md"
        f.write_text(sample_markdown, encoding="utf-8")
        assert parse_resume(f) == sample_markdown.strip()

    def test_parse_pdf(self, tmp_path, make_pdf):
        f = tmp_path / "resume.pdf"
        f.write_bytes(make_pdf([[(72, 72, "Jane Doe"), (72, 100, "Engineer")]]))
        assert parse_resume(f) == "Jane Doe\nEngineer"

    def test_parse_docx(self, tmp_path):
        from docx import Document

        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("")
        doc.add_paragraph("Engineer")
        f = tmp_path / "resume.docx"
        doc.save(str(f))
        assert parse_resume(f) == "Jane Doe\nEngineer"

    def test_unsupported_format(self, tmp_path):
        f = tmp_path / "resume.rtf"
        f.write_text("x")
        with pytest.raises(ValueError, match="Unsupported file format"):
            parse_resume(f)


class TestCleanMarkdown:
    def test_invisible_characters_removed(self):
        assert clean_markdown("\ufeffJa\u200bne\u00ad Doe") == "Jane Doe"

    def test_decorative_bullets(self):
        assert clean_markdown("● Python\n  ▪ Go") == "- Python\n  - Go"

    def test_space_runs_collapsed(self):
        assert clean_markdown("Senior    engineer   ") == "Senior engineer"

    def test_blank_line_runs(self):
        assert clean_markdown("a\n\n\n\n\nb") == "a\n\nb"

    def test_tab_indent_expanded(self):
        assert clean_markdown("- a\n\t- b") == "- a\n    - b"
