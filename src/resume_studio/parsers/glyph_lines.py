"""Reading-order text reconstruction from positioned PDF glyph runs.

PDF decoders report text as runs placed at absolute page coordinates,
in content-stream order rather than reading order. This module sorts
the runs top-to-bottom, left-to-right, groups them into visual lines
and decides where word spaces belong.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

# Baseline jitter (page units) tolerated between runs of one printed line.
SAME_LINE_TOLERANCE = 4.0
# A vertical jump larger than this fraction of the run height starts a new line.
LINE_BREAK_FACTOR = 0.7
# A horizontal gap larger than this fraction of a character width is a space.
SPACE_GAP_FACTOR = 0.25

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class GlyphRun:
    """A piece of text at a fixed position; larger y is higher on the page."""

    text: str
    x: float
    y: float
    width: float
    height: float

    @property
    def x_end(self) -> float:
        return self.x + self.width

    @property
    def char_width(self) -> float:
        return self.width / max(1, len(self.text))


def _reading_order(a: GlyphRun, b: GlyphRun) -> int:
    if abs(a.y - b.y) > SAME_LINE_TOLERANCE:
        return -1 if a.y > b.y else 1
    if a.x == b.x:
        return 0
    return -1 if a.x < b.x else 1


def sort_runs(runs: Iterable[GlyphRun]) -> list[GlyphRun]:
    """Sort runs by descending baseline, breaking same-line ties by ascending x."""
    return sorted(runs, key=cmp_to_key(_reading_order))


def _clean_line(line: str) -> str:
    return _WHITESPACE_RUN.sub(" ", line).strip()


def assemble_page_lines(runs: Sequence[GlyphRun]) -> list[str]:
    """Turn one page of glyph runs into its visual lines.

    A page without runs yields a single empty line so that blank pages
    still occupy a slot in the document.
    """
    if not runs:
        return [""]

    ordered = sort_runs(runs)
    first = ordered[0]
    lines: list[str] = []
    current = first.text
    last_y = first.y
    last_x_end = first.x_end

    for run in ordered[1:]:
        if abs(run.y - last_y) > run.height * LINE_BREAK_FACTOR:
            lines.append(current)
            current = run.text
        elif run.x - last_x_end > run.char_width * SPACE_GAP_FACTOR:
            current += " " + run.text
        else:
            # Kerned fragments of one word arrive without a space glyph.
            current += run.text
        last_y = run.y
        last_x_end = run.x_end

    lines.append(current)
    return [_clean_line(line) for line in lines]


def assemble_text(pages: Iterable[Sequence[GlyphRun]]) -> str:
    """Assemble every page in order: lines joined by newline, pages by a blank line."""
    page_texts = ["\n".join(assemble_page_lines(runs)) for runs in pages]
    return "\n\n".join(page_texts).strip()
