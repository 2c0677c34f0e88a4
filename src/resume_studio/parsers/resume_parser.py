import logging
import re
from pathlib import Path

from resume_studio.parsers.glyph_lines import assemble_text
from resume_studio.parsers.pdf_decoder import PdfDecoder, PyMuPdfDecoder

logger = logging.getLogger(__name__)

_INVISIBLE_CHARS = r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]"
_DECORATIVE_BULLETS = "●•◦◆■▪★○"


def parse_resume(file_path: str | Path) -> str:
    """Parse a resume file (PDF, DOCX, TXT, MD) and return clean plain text."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return extract_pdf_text(path.read_bytes())
    elif suffix in (".docx", ".doc"):
        return _parse_docx(path)
    elif suffix in (".txt", ".md"):
        return clean_markdown(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def extract_pdf_text(pdf_bytes: bytes, decoder: PdfDecoder | None = None) -> str:
    """Extract reading-order text from a PDF.

    Raises ExtractionError when the document cannot be decoded; there is
    no partial result.
    """
    decoder = decoder or PyMuPdfDecoder()
    pages = decoder.decode(pdf_bytes)
    text = assemble_text(pages)
    logger.info("Extracted %d characters from %d pages", len(text), len(pages))
    return text


def clean_markdown(text: str) -> str:
    """Clean word-processor export artifacts from a plain-text resume.

    Handles: invisible unicode, decorative bullet glyphs, runs of
    spaces and excessive blank lines.
    """
    text = text.lstrip("\ufeff")
    text = re.sub(_INVISIBLE_CHARS, "", text)

    text = re.sub(rf"^(\s*)[{_DECORATIVE_BULLETS}]\s*", r"\1- ", text, flags=re.MULTILINE)

    cleaned_lines = []
    for line in text.splitlines():
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        cleaned_lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(cleaned_lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())
