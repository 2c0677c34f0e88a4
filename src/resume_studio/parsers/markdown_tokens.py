"""Block and inline tokenizer for the resume Markdown subset.

Supported: paragraphs, unordered lists (``-`` or ``*`` markers) with one
nested level, and inline ``**bold**``, ``*italic*`` and ``_italic_``
spans. Everything else (tables, links, code, deeper headings) comes
through as plain text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class TokenType(str, Enum):
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    SPACE = "space"
    OTHER = "other"


class SpanStyle(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


@dataclass(frozen=True)
class InlineSpan:
    style: SpanStyle
    text: str


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str = ""
    spans: tuple[InlineSpan, ...] = ()
    tokens: tuple[Token, ...] = field(default=())


class MarkdownLexer(Protocol):
    def tokenize(self, body: str) -> list[Token]: ...


_LIST_LINE = re.compile(r"^(?P<indent>[ \t]*)[-*][ \t]+(?P<text>.*\S)")
_ATX_HEADING = re.compile(r"^\s{0,3}#{1,6}\s+")
_INLINE = re.compile(
    r"\*\*(?P<bold>.+?)\*\*"
    r"|\*(?P<star>[^*\s](?:[^*]*?[^*\s])?)\*"
    r"|(?<!\w)_(?P<under>[^_\s](?:[^_]*?[^_\s])?)_(?!\w)"
)


def tokenize_inline(text: str) -> tuple[InlineSpan, ...]:
    """Split text into leaf spans; unmatched markers stay as plain text."""
    spans: list[InlineSpan] = []
    pos = 0
    for match in _INLINE.finditer(text):
        if match.start() > pos:
            spans.append(InlineSpan(SpanStyle.NORMAL, text[pos : match.start()]))
        if match.group("bold") is not None:
            spans.append(InlineSpan(SpanStyle.BOLD, match.group("bold")))
        else:
            spans.append(InlineSpan(SpanStyle.ITALIC, match.group("star") or match.group("under")))
        pos = match.end()
    if pos < len(text):
        spans.append(InlineSpan(SpanStyle.NORMAL, text[pos:]))
    return tuple(spans)


def _indent_width(indent: str) -> int:
    return len(indent.replace("\t", "    "))


class _ItemBuilder:
    def __init__(self, text: str):
        self.lines = [text]
        self.children: list[str] = []  # raw text of nested items

    def build(self) -> Token:
        text = " ".join(self.lines)
        nested: tuple[Token, ...] = ()
        if self.children:
            items = tuple(
                Token(TokenType.LIST_ITEM, text=child, spans=tokenize_inline(child))
                for child in self.children
            )
            nested = (Token(TokenType.LIST, tokens=items),)
        return Token(TokenType.LIST_ITEM, text=text, spans=tokenize_inline(text), tokens=nested)


class SubsetMarkdownLexer:
    """Deterministic lexer for the subset used in resume section bodies."""

    def tokenize(self, body: str) -> list[Token]:
        tokens: list[Token] = []
        paragraph: list[str] = []
        items: list[_ItemBuilder] = []
        base_indent = 0

        def flush_paragraph() -> None:
            if paragraph:
                text = " ".join(paragraph)
                tokens.append(Token(TokenType.PARAGRAPH, text=text, spans=tokenize_inline(text)))
                paragraph.clear()

        def flush_list() -> None:
            if items:
                tokens.append(Token(TokenType.LIST, tokens=tuple(i.build() for i in items)))
                items.clear()

        def add_space() -> None:
            if tokens and tokens[-1].type != TokenType.SPACE:
                tokens.append(Token(TokenType.SPACE))

        blank = False
        for raw in body.split("\n"):
            line = raw.rstrip()
            if not line.strip():
                flush_paragraph()
                blank = True
                continue

            bullet = _LIST_LINE.match(line)
            indented = line[:1] in (" ", "\t")
            if blank:
                # A blank line inside a list only ends it if no item follows.
                if not (items and (bullet or indented)):
                    flush_list()
                    add_space()
                blank = False

            if bullet:
                flush_paragraph()
                indent = _indent_width(bullet.group("indent"))
                text = bullet.group("text").strip()
                if items and indent > base_indent:
                    items[-1].children.append(text)
                else:
                    if not items:
                        base_indent = indent
                    items.append(_ItemBuilder(text))
                continue

            stripped = line.strip()
            if items and indented:
                target = items[-1]
                if target.children:
                    target.children[-1] += " " + stripped
                else:
                    target.lines.append(stripped)
                continue

            flush_list()
            if _ATX_HEADING.match(line):
                flush_paragraph()
                text = _ATX_HEADING.sub("", line).strip()
                tokens.append(Token(TokenType.OTHER, text=text))
                continue
            paragraph.append(stripped)

        flush_paragraph()
        flush_list()
        return tokens


def tokenize(body: str) -> list[Token]:
    """Tokenize a section body with the default subset lexer."""
    return SubsetMarkdownLexer().tokenize(body)
