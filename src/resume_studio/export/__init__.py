"""PDF and HTML export for resume-studio."""
from resume_studio.export.html_preview import render_html_preview
from resume_studio.export.pdf_renderer import render_pdf, save_pdf
from resume_studio.export.templates import AVAILABLE_TEMPLATES, TemplateId, get_template

__all__ = [
    "AVAILABLE_TEMPLATES",
    "TemplateId",
    "get_template",
    "render_html_preview",
    "render_pdf",
    "save_pdf",
]
