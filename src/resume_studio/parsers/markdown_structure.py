"""Structural split of a resume Markdown document into header and sections."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

HEADING_PREFIX = "## "

_STAR_BULLET = re.compile(r"^([ \t]*)\*[ \t]", re.MULTILINE)


class ResumeDocument(BaseModel):
    """Header plus ordered section bodies keyed by lowercased title."""

    header_name: str = ""
    header_contact: str = ""
    sections: dict[str, str] = Field(default_factory=dict)
    preamble: str = ""  # text between the contact line and the first heading

    def section(self, key: str) -> str:
        return self.sections.get(key, "")


def sanitize_bullets(markdown: str) -> str:
    """Rewrite ``*`` bullet markers to ``-`` so they never read as emphasis.

    Only a line-leading ``*`` followed by a space or tab is touched;
    ``**Bold**`` at the start of a line is left alone.
    """
    return _STAR_BULLET.sub(r"\1- ", markdown)


def _heading_starts(lines: list[str]) -> list[int]:
    return [i for i, line in enumerate(lines) if line.startswith(HEADING_PREFIX)]


def parse_resume_markdown(markdown: str) -> ResumeDocument:
    """Split resume Markdown into name, contact line and sections.

    Line 0 is the name and line 1 the contact line. The rest is cut at
    every line starting with ``## ``. A repeated heading overwrites the
    earlier body. Unknown headings are kept; templates decide what to show.
    """
    lines = markdown.split("\n")
    header_name = lines[0].strip() if lines else ""
    header_contact = lines[1].strip() if len(lines) > 1 else ""
    rest = lines[2:]

    starts = _heading_starts(rest)
    first = starts[0] if starts else len(rest)
    preamble = "\n".join(rest[:first]).strip()

    sections: dict[str, str] = {}
    bounds = starts + [len(rest)]
    for start, end in zip(bounds, bounds[1:]):
        chunk = rest[start:end]
        key = chunk[0][len(HEADING_PREFIX):].strip().lower()
        body = "\n".join(chunk[1:]).strip()
        if not key and not body:
            continue
        sections[key] = body

    return ResumeDocument(
        header_name=header_name,
        header_contact=header_contact,
        sections=sections,
        preamble=preamble,
    )
