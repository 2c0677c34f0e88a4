"""Tests for the resume Markdown subset tokenizer."""

from resume_studio.parsers.markdown_tokens import (
    InlineSpan,
    SpanStyle,
    SubsetMarkdownLexer,
    TokenType,
    tokenize,
    tokenize_inline,
)


def types(tokens):
    return [t.type for t in tokens]


class TestInline:
    def test_plain_text(self):
        assert tokenize_inline("just text") == (InlineSpan(SpanStyle.NORMAL, "just text"),)

    def test_bold_and_italic(self):
        spans = tokenize_inline("**Lead** engineer at *Acme* and _Beta_")
        assert spans == (
            InlineSpan(SpanStyle.BOLD, "Lead"),
            InlineSpan(SpanStyle.NORMAL, " engineer at "),
            InlineSpan(SpanStyle.ITALIC, "Acme"),
            InlineSpan(SpanStyle.NORMAL, " and "),
            InlineSpan(SpanStyle.ITALIC, "Beta"),
        )

    def test_snake_case_is_not_italic(self):
        assert tokenize_inline("use snake_case_names") == (
            InlineSpan(SpanStyle.NORMAL, "use snake_case_names"),
        )

    def test_spaced_asterisks_stay_plain(self):
        assert tokenize_inline("5 * 3 * 2") == (InlineSpan(SpanStyle.NORMAL, "5 * 3 * 2"),)

    def test_unclosed_bold_stays_plain(self):
        spans = tokenize_inline("**Technologies: Go")
        assert "".join(s.text for s in spans) == "**Technologies: Go"
        assert all(s.style == SpanStyle.NORMAL for s in spans)

    def test_links_degrade_to_text(self):
        spans = tokenize_inline("[site](https://example.com)")
        assert spans == (InlineSpan(SpanStyle.NORMAL, "[site](https://example.com)"),)


class TestBlocks:
    def test_paragraph_lines_join(self):
        tokens = tokenize("Senior engineer\nwith 5 years.")
        assert types(tokens) == [TokenType.PARAGRAPH]
        assert tokens[0].text == "Senior engineer with 5 years."

    def test_list_items(self):
        tokens = tokenize("- Python\n* Go")
        assert types(tokens) == [TokenType.LIST]
        items = tokens[0].tokens
        assert [i.type for i in items] == [TokenType.LIST_ITEM, TokenType.LIST_ITEM]
        assert [i.text for i in items] == ["Python", "Go"]

    def test_bold_line_is_not_a_list(self):
        tokens = tokenize("**Technologies:** React, Go")
        assert types(tokens) == [TokenType.PARAGRAPH]
        assert tokens[0].spans[0] == InlineSpan(SpanStyle.BOLD, "Technologies:")

    def test_paragraph_then_list(self):
        tokens = tokenize("**Engineer**, Acme\n- Built APIs\n- Cut costs")
        assert types(tokens) == [TokenType.PARAGRAPH, TokenType.LIST]

    def test_unindented_line_ends_list(self):
        tokens = tokenize("- Built APIs\n**Technologies:** Go")
        assert types(tokens) == [TokenType.LIST, TokenType.PARAGRAPH]

    def test_indented_line_continues_item(self):
        tokens = tokenize("- Built APIs\n  serving 1M users")
        assert tokens[0].tokens[0].text == "Built APIs serving 1M users"

    def test_nested_list(self):
        tokens = tokenize("- Acme\n  - built\n  - shipped\n- Beta")
        items = tokens[0].tokens
        assert [i.text for i in items] == ["Acme", "Beta"]
        nested = items[0].tokens
        assert [t.type for t in nested] == [TokenType.LIST]
        assert [i.text for i in nested[0].tokens] == ["built", "shipped"]

    def test_deeper_nesting_flattens_to_one_level(self):
        tokens = tokenize("- a\n  - b\n    - c")
        nested = tokens[0].tokens[0].tokens[0]
        assert [i.text for i in nested.tokens] == ["b", "c"]
        assert all(not i.tokens for i in nested.tokens)

    def test_blank_line_between_items_keeps_one_list(self):
        tokens = tokenize("- a\n\n- b")
        assert types(tokens) == [TokenType.LIST]
        assert len(tokens[0].tokens) == 2

    def test_blank_line_separates_paragraphs(self):
        tokens = tokenize("one\n\n\ntwo")
        assert types(tokens) == [TokenType.PARAGRAPH, TokenType.SPACE, TokenType.PARAGRAPH]

    def test_subheading_degrades_to_other(self):
        tokens = tokenize("### Acme Corp\n- built")
        assert types(tokens) == [TokenType.OTHER, TokenType.LIST]
        assert tokens[0].text == "Acme Corp"

    def test_table_degrades_to_paragraph_text(self):
        tokens = tokenize("| a | b |\n|---|---|")
        assert types(tokens) == [TokenType.PARAGRAPH]
        assert "| a | b |" in tokens[0].text

    def test_empty_body(self):
        assert tokenize("") == []

    def test_deterministic(self):
        body = "Intro *x*\n- a\n  - b\n\n**c**"
        lexer = SubsetMarkdownLexer()
        assert lexer.tokenize(body) == lexer.tokenize(body)
