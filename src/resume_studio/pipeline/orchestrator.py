"""Document pipeline: PDF extraction -> completion service -> PDF generation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from resume_studio.export.pdf_renderer import render_pdf, save_pdf
from resume_studio.export.pdf_writer import FpdfWriter, PdfWriter
from resume_studio.export.templates import TemplateId
from resume_studio.models.analysis import AnalysisResult
from resume_studio.models.resume import ResumeData
from resume_studio.parsers.markdown_tokens import MarkdownLexer, SubsetMarkdownLexer
from resume_studio.parsers.pdf_decoder import PdfDecoder, PyMuPdfDecoder
from resume_studio.parsers.resume_parser import extract_pdf_text
from resume_studio.pipeline.resume_analyzer import ResumeAnalyzer
from resume_studio.pipeline.resume_builder import ResumeBuilder

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Wires the document collaborators together; every one is injectable."""

    def __init__(
        self,
        decoder: PdfDecoder | None = None,
        writer_factory: Callable[[], PdfWriter] | None = None,
        lexer: MarkdownLexer | None = None,
        *,
        builder: ResumeBuilder | None = None,
        analyzer: ResumeAnalyzer | None = None,
    ):
        self.decoder = decoder or PyMuPdfDecoder()
        self.writer_factory = writer_factory or FpdfWriter
        self.lexer = lexer or SubsetMarkdownLexer()
        self.builder = builder
        self.analyzer = analyzer

    def extract_text(self, pdf_bytes: bytes) -> str:
        """PDF bytes to reading-order plain text. Raises ExtractionError."""
        return extract_pdf_text(pdf_bytes, self.decoder)

    def render(self, resume_markdown: str, template_id: TemplateId | str) -> bytes:
        """Resume Markdown to PDF bytes. Raises RenderError."""
        return render_pdf(
            resume_markdown,
            template_id,
            writer_factory=self.writer_factory,
            lexer=self.lexer,
        )

    def save(
        self,
        resume_markdown: str,
        template_id: TemplateId | str,
        filename: str,
        output_dir: str | Path | None = None,
    ) -> Path:
        """Render and save; the file is only written after a successful render."""
        path = save_pdf(
            resume_markdown,
            template_id,
            filename,
            output_dir,
            writer_factory=self.writer_factory,
            lexer=self.lexer,
        )
        logger.info("Saved resume PDF: %s", path)
        return path

    async def build(self, resume_data: ResumeData, target_role: str) -> str:
        """Generate resume Markdown for ``target_role`` from structured data."""
        return await self._require_builder().write(resume_data, target_role)

    async def analyze(self, pdf_bytes: bytes) -> tuple[str, AnalysisResult]:
        """Extract an uploaded resume and score it."""
        text = self.extract_text(pdf_bytes)
        analysis = await self._require_analyzer().analyze(text)
        return text, analysis

    async def suggest_keywords(self, resume_text: str, target_role: str) -> list[str]:
        """ATS keywords for a finished resume; empty when the service fails."""
        return await self._require_builder().suggest_keywords(resume_text, target_role)

    async def import_resume(self, pdf_bytes: bytes) -> ResumeData:
        """Extract an uploaded resume into structured data for editing."""
        text = self.extract_text(pdf_bytes)
        return await self._require_builder().import_resume(text)

    async def rectify(self, resume_text: str, analysis: AnalysisResult) -> ResumeData:
        return await self._require_analyzer().rectify(resume_text, analysis)

    def _require_builder(self) -> ResumeBuilder:
        if self.builder is None:
            raise RuntimeError("DocumentPipeline has no ResumeBuilder configured")
        return self.builder

    def _require_analyzer(self) -> ResumeAnalyzer:
        if self.analyzer is None:
            raise RuntimeError("DocumentPipeline has no ResumeAnalyzer configured")
        return self.analyzer
