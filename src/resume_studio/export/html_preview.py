"""Themed HTML preview of a resume, sharing the PDF path's section rules.

Section bodies go through the same lexer as the PDF renderer, so lists,
paragraphs and emphasis are recognised identically in both outputs.
"""

from __future__ import annotations

import re

from jinja2 import Environment
from markupsafe import Markup

from resume_studio.export.templates import DEFAULT_TEMPLATE, Template, TemplateId, resolve_template
from resume_studio.parsers.markdown_structure import parse_resume_markdown, sanitize_bullets
from resume_studio.parsers.markdown_tokens import (
    MarkdownLexer,
    SpanStyle,
    SubsetMarkdownLexer,
    Token,
    TokenType,
)

TECH_LABEL = "Technologies:"

SECTION_TEMPLATE = """\
{%- macro spans(items) -%}
{%- for s in items -%}
{%- if s.style == SpanStyle.BOLD -%}<strong>{{ s.text }}</strong>
{%- elif s.style == SpanStyle.ITALIC -%}<em>{{ s.text }}</em>
{%- else -%}{{ s.text }}{%- endif -%}
{%- endfor -%}
{%- endmacro -%}
{%- macro blocks(tokens, tags=False) -%}
{%- for token in tokens -%}
{%- if token.type == TokenType.PARAGRAPH -%}
{%- set techs = tech_tags(token) if tags else None -%}
{%- if techs -%}
<div class="tech-tags-container">{% for tech in techs %}<span class="tech-tag">{{ tech }}</span>{% endfor %}</div>
{%- else -%}
<p>{{ spans(token.spans) }}</p>
{%- endif -%}
{%- elif token.type == TokenType.LIST -%}
<ul>{{ blocks(token.tokens) }}</ul>
{%- elif token.type == TokenType.LIST_ITEM -%}
<li>{{ spans(token.spans) }}{{ blocks(token.tokens) }}</li>
{%- elif token.type == TokenType.OTHER and token.text -%}
<p class="subheading">{{ token.text }}</p>
{%- endif %}
{% endfor -%}
{%- endmacro -%}
{{ blocks(tokens, tags_enabled) }}"""

BASE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<style>
body { font-family: {{ font_stack }}; color: {{ t.palette.primary }}; max-width: 800px; margin: 2rem auto; line-height: 1.5; }
.resume-header { text-align: {{ t.header_alignment.value }}; margin-bottom: 1.5rem; }
.resume-header h1 { font-size: 1.75rem; margin: 0; }
.resume-header p { font-size: 0.8rem; color: {{ t.palette.gray_text }}; margin: 0.25rem 0 0; }
h2 { font-size: 1.1rem; color: {{ title_color }}; margin: 1.25rem 0 0.5rem; }
{% if t.title_decoration.value == "underline_bar" %}h2 { border-bottom: {{ rule_px }}px solid {{ t.palette.border_color }}; }{% endif %}
{% if t.title_decoration.value == "prefix_glyph" %}h2::before { content: ">> "; }{% endif %}
{% if t.title_decoration.value == "vertical_accent_bar" %}h2 { border-left: 3px solid {{ t.palette.accent }}; padding-left: 0.5rem; }{% endif %}
{% if t.title_case.value == "upper" %}h2 { text-transform: uppercase; }{% endif %}
.subheading { color: {{ t.palette.secondary }}; font-weight: 600; margin-bottom: 0.25rem; }
.tech-tags-container { display: flex; flex-wrap: wrap; gap: 0.25rem; }
.tech-tag { background: {{ t.palette.accent }}; color: #fff; border-radius: 9999px; padding: 0 0.5rem; font-size: 0.75rem; }
</style>
</head>
<body>
<div class="resume-header">
<h1>{{ name }}</h1>
<p>{{ contact }}</p>
</div>
{% for title, html in sections %}
<section>
<h2>{{ title }}</h2>
{{ html }}
</section>
{% endfor %}
</body>
</html>
"""


def tech_tags(token: Token) -> list[str] | None:
    """Technologies listed by a ``**Technologies:** a, b`` paragraph, else None."""
    if not token.spans:
        return None
    first = token.spans[0]
    if first.style != SpanStyle.BOLD or first.text.strip() != TECH_LABEL:
        return None
    rest = "".join(span.text for span in token.spans[1:])
    return [tech.strip() for tech in re.split(r",\s*", rest) if tech.strip()]


_env = Environment(autoescape=True)
_env.globals.update(SpanStyle=SpanStyle, TokenType=TokenType, tech_tags=tech_tags)
_section_template = _env.from_string(SECTION_TEMPLATE)
_page_template = _env.from_string(BASE_TEMPLATE)


def section_to_html(key: str, body: str, lexer: MarkdownLexer | None = None) -> Markup:
    """Convert one section body to HTML; project tech lines become tags."""
    tokens = (lexer or SubsetMarkdownLexer()).tokenize(body)
    html = _section_template.render(
        tokens=tokens,
        tags_enabled=key == "projects",
    )
    return Markup(html)


def render_html_preview(
    resume_markdown: str,
    template_id: TemplateId | str = DEFAULT_TEMPLATE,
    title: str = "Resume",
    lexer: MarkdownLexer | None = None,
) -> str:
    """Convert resume markdown to a themed standalone HTML page."""
    template: Template = resolve_template(template_id)
    document = parse_resume_markdown(sanitize_bullets(resume_markdown))
    sections = [
        (template.section_title(key), section_to_html(key, document.sections[key], lexer))
        for key in template.section_order
        if document.sections.get(key)
    ]
    font_stack = "'Courier New', monospace" if template.font_family == "courier" else "Helvetica, Arial, sans-serif"
    return _page_template.render(
        title=title,
        t=template,
        font_stack=Markup(font_stack),
        title_color=template.palette.color(template.title_color),
        rule_px=1 if template.rule_width < 0.5 else 2,
        name=document.header_name,
        contact=document.header_contact,
        sections=sections,
    )
