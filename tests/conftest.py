"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from unittest.mock import AsyncMock

import fitz
import pytest

from resume_studio.clients.llm_client import LLMClient, LLMResponse
from resume_studio.models.analysis import AnalysisResult, Keyword, ScoreBreakdown, SkillGap
from resume_studio.models.resume import Education, Experience, Project, ResumeData

SAMPLE_MARKDOWN = """Jane Doe
jane@example.com | 555-1234
## Summary
Senior engineer with 5 years experience.
## Skills
- Python
- Go
"""


@dataclass
class DrawnText:
    page: int
    x: float
    y: float
    text: str
    font: tuple[str, str, float]
    color: str | None


@dataclass
class DrawnLine:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    color: str | None
    width: float


@dataclass
class RecordingWriter:
    """PdfWriter fake that records draw calls with a fixed-width font metric."""

    page: int = 0
    font: tuple[str, str, float] = ("helvetica", "", 10.8)
    text_color: str | None = None
    draw_color: str | None = None
    line_width: float = 0.2
    ops: list = field(default_factory=list)

    def add_page(self) -> None:
        self.page += 1

    def set_font(self, family: str, style: str, size: float) -> None:
        self.font = (family, style, size)

    def set_text_color(self, hex_color: str) -> None:
        self.text_color = hex_color

    def set_draw_color(self, hex_color: str) -> None:
        self.draw_color = hex_color

    def set_line_width(self, width: float) -> None:
        self.line_width = width

    def text(self, x: float, y: float, text: str) -> None:
        self.ops.append(DrawnText(self.page, x, y, text, self.font, self.text_color))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.ops.append(DrawnLine(self.page, x1, y1, x2, y2, self.draw_color, self.line_width))

    def text_width(self, text: str) -> float:
        return len(text) * self.font[2] * 0.2

    def output(self) -> bytes:
        return b"%PDF-recorded"

    @property
    def texts(self) -> list[DrawnText]:
        return [op for op in self.ops if isinstance(op, DrawnText)]

    @property
    def lines(self) -> list[DrawnLine]:
        return [op for op in self.ops if isinstance(op, DrawnLine)]

    def words(self) -> list[str]:
        return [t.text.strip() for t in self.texts]


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def make_pdf():
    """Build a PDF with PyMuPDF: one list of (x, y_from_top, text) per page."""

    def _make(pages: list[list[tuple[float, float, str]]]) -> bytes:
        doc = fitz.open()
        for lines in pages:
            page = doc.new_page()
            for x, y, text in lines:
                page.insert_text((x, y), text, fontsize=11)
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def sample_resume_data() -> ResumeData:
    return ResumeData(
        full_name="Jane Doe",
        email="jane@example.com",
        phone="555-1234",
        summary="Senior engineer with 5 years experience.",
        skills="Python, Go, Kubernetes",
        experience=[
            Experience(
                role="Backend Engineer",
                company="Acme",
                duration="2020 - Present",
                responsibilities="- Built payment APIs\n- Cut latency by 40%",
            )
        ],
        education=[Education(degree="BSc Computer Science", institution="State University", graduation_year="2019")],
        projects=[
            Project(name="Tracker", description="Job tracker used by 2k users", technologies="React, FastAPI")
        ],
    )


@pytest.fixture
def sample_analysis() -> AnalysisResult:
    return AnalysisResult(
        ats_score=72,
        score_breakdown=[
            ScoreBreakdown(category="Keyword Optimization", score=65),
            ScoreBreakdown(category="Impact Quantification", score=70),
        ],
        strengths=["Clear structure"],
        weaknesses=["Few metrics"],
        suggestions=["Quantify achievements"],
        keywords=[Keyword(keyword="Python", frequency=4)],
        skills_gap=[SkillGap(skill="Docker", importance=4, category="Technical")],
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client
