"""Exception hierarchy for the document pipeline."""

from __future__ import annotations


class ResumeStudioError(Exception):
    """Base class for all resume-studio failures."""


class ExtractionError(ResumeStudioError):
    """The PDF could not be decoded into text (malformed, encrypted or empty)."""


class RenderError(ResumeStudioError):
    """Laying out or writing the PDF failed; no output was produced."""


class CompletionError(ResumeStudioError):
    """The text completion service failed or returned an unusable reply."""
