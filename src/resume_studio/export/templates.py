"""Compiled-in visual templates for PDF and HTML output.

A template is pure data: which sections appear and in what order, how
the header is aligned, the palette and the section-title decoration.
The renderer dispatches on the decoration and reads everything else
from here.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class TemplateId(str, Enum):
    CLASSIC = "classic"
    PROFESSIONAL = "professional"
    TECHNICAL = "technical"
    MODERN = "modern"


class HeaderAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"


class TitleDecoration(str, Enum):
    PLAIN_BOLD = "plain_bold"
    UNDERLINE_BAR = "underline_bar"
    PREFIX_GLYPH = "prefix_glyph"
    VERTICAL_ACCENT_BAR = "vertical_accent_bar"


class TitleCase(str, Enum):
    CAPITALIZE = "capitalize"
    UPPER = "upper"


class PaletteRole(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCENT = "accent"
    ACCENT_VARIANT = "accent_variant"
    GRAY_TEXT = "gray_text"
    BORDER_COLOR = "border_color"


class Palette(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str = "#1F2937"
    secondary: str = "#4B5563"
    accent: str = "#3B82F6"
    accent_variant: str = "#60A5FA"
    gray_text: str = "#9CA3AF"
    border_color: str = "#4B5563"

    def color(self, role: PaletteRole) -> str:
        return getattr(self, PaletteRole(role).value)


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: TemplateId
    name: str
    description: str
    section_order: tuple[str, ...]
    header_alignment: HeaderAlignment = HeaderAlignment.LEFT
    font_family: str = "helvetica"
    palette: Palette = Palette()
    title_decoration: TitleDecoration = TitleDecoration.PLAIN_BOLD
    title_case: TitleCase = TitleCase.CAPITALIZE
    title_color: PaletteRole = PaletteRole.ACCENT
    title_font_size: float = 13.2
    rule_width: float = 0.2
    header_spacing: float = 12.0
    header_rule: bool = False

    def section_title(self, key: str) -> str:
        title = key[:1].upper() + key[1:]
        if self.title_case == TitleCase.UPPER:
            return title.upper()
        return title


STANDARD_ORDER = ("summary", "skills", "experience", "projects", "education")

_TEMPLATES: dict[TemplateId, Template] = {
    TemplateId.CLASSIC: Template(
        id=TemplateId.CLASSIC,
        name="ATS-Optimized (Classic)",
        description="A clean, single-column layout proven to pass all resume scanners.",
        section_order=STANDARD_ORDER,
        header_alignment=HeaderAlignment.CENTER,
        title_decoration=TitleDecoration.UNDERLINE_BAR,
        title_color=PaletteRole.ACCENT_VARIANT,
        title_font_size=15,
        rule_width=0.2,
        header_spacing=12,
    ),
    TemplateId.PROFESSIONAL: Template(
        id=TemplateId.PROFESSIONAL,
        name="Professional",
        description="A sophisticated single-column design with clean lines and section breaks.",
        section_order=STANDARD_ORDER,
        palette=Palette(border_color="#374151"),
        title_decoration=TitleDecoration.UNDERLINE_BAR,
        title_case=TitleCase.UPPER,
        title_color=PaletteRole.GRAY_TEXT,
        title_font_size=12,
        rule_width=0.5,
        header_spacing=10,
    ),
    TemplateId.TECHNICAL: Template(
        id=TemplateId.TECHNICAL,
        name="Technical",
        description="A scannable format that prioritizes Skills and Projects for technical roles.",
        section_order=("summary", "skills", "projects", "experience", "education"),
        font_family="courier",
        title_decoration=TitleDecoration.PREFIX_GLYPH,
        title_color=PaletteRole.ACCENT,
        header_spacing=12,
    ),
    TemplateId.MODERN: Template(
        id=TemplateId.MODERN,
        name="Modern",
        description="A stylish, ATS-friendly single-column format with a clean, contemporary feel.",
        section_order=("summary", "experience", "projects", "skills", "education"),
        palette=Palette(accent_variant="#93C5FD"),
        title_decoration=TitleDecoration.VERTICAL_ACCENT_BAR,
        title_color=PaletteRole.ACCENT_VARIANT,
        header_spacing=8,
        header_rule=True,
    ),
}

AVAILABLE_TEMPLATES = tuple(t.value for t in TemplateId)
DEFAULT_TEMPLATE = TemplateId.CLASSIC


def get_template(template_id: TemplateId | str) -> Template:
    """Look up a template; unknown ids raise ValueError."""
    try:
        key = TemplateId(template_id)
    except ValueError:
        raise ValueError(
            f"Unknown template: {template_id!r} (available: {', '.join(AVAILABLE_TEMPLATES)})"
        ) from None
    return _TEMPLATES[key]


def list_templates() -> list[Template]:
    """All templates in declaration order."""
    return list(_TEMPLATES.values())


def resolve_template(template_id: TemplateId | str) -> Template:
    """Like get_template, but unknown ids fall back to the default template."""
    try:
        return get_template(template_id)
    except ValueError:
        logger.warning("Unknown template %r, using %s", template_id, DEFAULT_TEMPLATE.value)
        return _TEMPLATES[DEFAULT_TEMPLATE]
