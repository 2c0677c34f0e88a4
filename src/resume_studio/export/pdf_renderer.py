"""Cursor-based layout of a resume document onto fixed-size PDF pages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from resume_studio.errors import RenderError
from resume_studio.export.pdf_writer import FpdfWriter, PdfWriter
from resume_studio.export.templates import (
    DEFAULT_TEMPLATE,
    HeaderAlignment,
    Template,
    TemplateId,
    TitleDecoration,
    resolve_template,
)
from resume_studio.parsers.markdown_structure import (
    ResumeDocument,
    parse_resume_markdown,
    sanitize_bullets,
)
from resume_studio.parsers.markdown_tokens import (
    InlineSpan,
    MarkdownLexer,
    SpanStyle,
    SubsetMarkdownLexer,
    Token,
    TokenType,
)

logger = logging.getLogger(__name__)

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0
LINE_HEIGHT = 5.0
CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2
LIST_INDENT = 5.0
BULLET_GAP = 4.0
BULLET = "•"
PREFIX_GLYPH = ">> "
BODY_FONT = "helvetica"


@dataclass(frozen=True)
class FontSizes:
    header_title: float = 21
    body: float = 10.8
    contact: float = 9.6


FONT_SIZES = FontSizes()

_STYLE_FLAGS = {SpanStyle.NORMAL: "", SpanStyle.BOLD: "B", SpanStyle.ITALIC: "I"}


@dataclass
class RenderCursor:
    """Vertical position (mm from the page top) and 1-based page index."""

    y: float = MARGIN
    page: int = 1


class RenderSession:
    """One layout pass. Owns its writer and cursor; not reusable."""

    def __init__(self, writer: PdfWriter, template: Template, lexer: MarkdownLexer):
        self.writer = writer
        self.template = template
        self.lexer = lexer
        self.cursor = RenderCursor()
        self._list_level = 0

    def ensure_page(self) -> None:
        if self.cursor.y > PAGE_HEIGHT - MARGIN:
            self.writer.add_page()
            self.cursor = RenderCursor(y=MARGIN, page=self.cursor.page + 1)

    def render(self, document: ResumeDocument) -> RenderCursor:
        self.writer.add_page()
        self._render_header(document)
        for key in self.template.section_order:
            body = document.sections.get(key)
            if not body:
                continue
            self._render_section_title(self.template.section_title(key))
            self.render_markdown(body, MARGIN, CONTENT_WIDTH)
            self.cursor.y += 4
        return self.cursor

    # -- header ---------------------------------------------------------

    def _render_header(self, document: ResumeDocument) -> None:
        t = self.template
        self.writer.set_font(t.font_family, "B", FONT_SIZES.header_title)
        self.writer.set_text_color(t.palette.primary)
        self._draw_header_line(document.header_name)
        self.cursor.y += 8

        self.writer.set_font(t.font_family, "", FONT_SIZES.contact)
        self.writer.set_text_color(t.palette.gray_text)
        self._draw_header_line(document.header_contact)
        self.cursor.y += t.header_spacing

        if t.header_rule:
            self.writer.set_draw_color(t.palette.border_color)
            self.writer.set_line_width(t.rule_width)
            self.writer.line(MARGIN, self.cursor.y, PAGE_WIDTH - MARGIN, self.cursor.y)
            self.cursor.y += 10

    def _draw_header_line(self, text: str) -> None:
        if not text:
            return
        x = MARGIN
        if self.template.header_alignment == HeaderAlignment.CENTER:
            x = (PAGE_WIDTH - self.writer.text_width(text)) / 2
        self.writer.text(x, self.cursor.y, text)

    # -- section titles -------------------------------------------------

    def _render_section_title(self, title: str) -> None:
        t = self.template
        if t.title_decoration == TitleDecoration.VERTICAL_ACCENT_BAR:
            self.cursor.y += 4
        self.ensure_page()
        self.writer.set_font(BODY_FONT, "B", t.title_font_size)
        self.writer.set_text_color(t.palette.color(t.title_color))

        decorate = _DECORATIONS[t.title_decoration]
        decorate(self, title)

    def _title_plain(self, title: str) -> None:
        self.writer.text(MARGIN, self.cursor.y, title)
        self.cursor.y += 8

    def _title_underline(self, title: str) -> None:
        t = self.template
        self.writer.text(MARGIN, self.cursor.y, title)
        self.cursor.y += 2
        self.writer.set_draw_color(t.palette.border_color)
        self.writer.set_line_width(t.rule_width)
        self.writer.line(MARGIN, self.cursor.y, PAGE_WIDTH - MARGIN, self.cursor.y)
        self.cursor.y += 8

    def _title_prefix(self, title: str) -> None:
        self.writer.text(MARGIN, self.cursor.y, PREFIX_GLYPH)
        self.writer.text(MARGIN + self.writer.text_width(PREFIX_GLYPH), self.cursor.y, title)
        self.cursor.y += 8

    def _title_vertical_bar(self, title: str) -> None:
        t = self.template
        y = self.cursor.y
        self.writer.set_draw_color(t.palette.accent)
        self.writer.set_line_width(1)
        self.writer.line(MARGIN, y - 4, MARGIN, y + 4)
        self.writer.text(MARGIN + 3, y, title)
        self.cursor.y += 8

    # -- body -----------------------------------------------------------

    def render_markdown(self, body: str, x: float, max_width: float) -> float:
        """Lay out one section body starting at the current cursor."""
        self._render_tokens(self.lexer.tokenize(body), x, max_width)
        return self.cursor.y

    def _render_tokens(self, tokens: Sequence[Token], x: float, max_width: float) -> None:
        for token in tokens:
            self.ensure_page()
            indent = x + self._list_level * LIST_INDENT
            effective_width = max_width - self._list_level * LIST_INDENT

            if token.type == TokenType.PARAGRAPH:
                self._body_style()
                self.render_inline(token.spans, x, max_width)
                self.cursor.y += 1
            elif token.type == TokenType.LIST:
                self._list_level += 1
                self._render_tokens(token.tokens, x, max_width)
                self._list_level -= 1
                if self._list_level == 0:
                    self.cursor.y += 3
            elif token.type == TokenType.LIST_ITEM:
                self._body_style()
                self.writer.text(indent, self.cursor.y, BULLET)
                self.render_inline(token.spans, indent + BULLET_GAP, effective_width - BULLET_GAP)
                self._render_tokens(token.tokens, x, max_width)
                self.cursor.y -= 1
            elif token.type == TokenType.OTHER and token.text:
                self._body_style()
                self.writer.set_text_color(self.template.palette.secondary)
                self.render_inline(
                    (InlineSpan(SpanStyle.NORMAL, token.text),), x, max_width
                )

    def _body_style(self) -> None:
        self.writer.set_font(BODY_FONT, "", FONT_SIZES.body)
        self.writer.set_text_color(self.template.palette.primary)

    def render_inline(self, spans: Sequence[InlineSpan], x: float, max_width: float) -> float:
        """Draw styled words left to right, wrapping at ``x + max_width``.

        Each word is measured and drawn with a trailing space.
        """
        words = [
            (word, span.style)
            for span in spans
            for word in span.text.split(" ")
            if word
        ]
        cursor_x = x
        for word, style in words:
            self.ensure_page()
            self.writer.set_font(BODY_FONT, _STYLE_FLAGS[style], FONT_SIZES.body)
            text = word + " "
            width = self.writer.text_width(text)
            if cursor_x + width > x + max_width:
                cursor_x = x
                self.cursor.y += LINE_HEIGHT
                self.ensure_page()
            self.writer.text(cursor_x, self.cursor.y, text)
            cursor_x += width

        self.cursor.y += LINE_HEIGHT
        return self.cursor.y


_DECORATIONS: dict[TitleDecoration, Callable[[RenderSession, str], None]] = {
    TitleDecoration.PLAIN_BOLD: RenderSession._title_plain,
    TitleDecoration.UNDERLINE_BAR: RenderSession._title_underline,
    TitleDecoration.PREFIX_GLYPH: RenderSession._title_prefix,
    TitleDecoration.VERTICAL_ACCENT_BAR: RenderSession._title_vertical_bar,
}


def render_document(
    document: ResumeDocument,
    template: Template,
    writer: PdfWriter,
    lexer: MarkdownLexer | None = None,
) -> RenderCursor:
    """Lay out a parsed document onto ``writer`` and return the final cursor."""
    session = RenderSession(writer, template, lexer or SubsetMarkdownLexer())
    return session.render(document)


def render_pdf(
    resume_markdown: str,
    template_id: TemplateId | str = DEFAULT_TEMPLATE,
    *,
    writer_factory: Callable[[], PdfWriter] = FpdfWriter,
    lexer: MarkdownLexer | None = None,
) -> bytes:
    """Convert resume markdown to PDF bytes.

    Raises RenderError if layout or writing fails; the half-built
    document is discarded.
    """
    template = resolve_template(template_id)
    document = parse_resume_markdown(sanitize_bullets(resume_markdown))
    try:
        writer = writer_factory()
        cursor = render_document(document, template, writer, lexer)
        data = writer.output()
    except Exception as exc:
        logger.error("PDF generation failed", exc_info=True)
        raise RenderError(f"Could not generate PDF: {exc}") from exc
    logger.info("Rendered %s resume: %d pages", template.id.value, cursor.page)
    return data


def pdf_filename(filename: str) -> str:
    """Append ``.pdf`` unless the name already ends with it (any case)."""
    return filename if filename.lower().endswith(".pdf") else f"{filename}.pdf"


def save_pdf(
    resume_markdown: str,
    template_id: TemplateId | str,
    filename: str,
    output_dir: str | Path | None = None,
    **render_kwargs,
) -> Path:
    """Render and write the PDF; nothing is written if rendering fails."""
    data = render_pdf(resume_markdown, template_id, **render_kwargs)
    path = Path(pdf_filename(filename))
    if output_dir is not None:
        path = Path(output_dir) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
