#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_utils.py
"""Unit tests for AST utility functions."""

import pytest

from mdcanon.ast import TreeBuilder, dump, extract_text


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text()."""

    def test_formatting_dropped(self):
        """Test that nested formatting contributes only its text."""
        b = TreeBuilder("a *b **c***")
        nodes = [b.text("a "), b.emphasis(1, b.text("b "), b.emphasis(2, b.text("c")))]
        assert extract_text(nodes, b.source) == b"a b c"

    def test_line_breaks_become_spaces(self):
        """Test that soft and hard breaks become single spaces."""
        b = TreeBuilder("a\nb  \nc")
        para = b.paragraph(b.text("a", soft=True), b.text("b", hard=True), b.text("c"))
        assert extract_text(para, b.source) == b"a b c"

    def test_autolink_and_raw_html(self):
        """Test that autolinks give their label and raw HTML nothing."""
        b = TreeBuilder("<b>x</b> <https://e.com>")
        nodes = [b.raw_html("<b>"), b.text("x"), b.raw_html("</b>"), b.text(" "), b.autolink("https://e.com")]
        assert extract_text(nodes, b.source) == b"x https://e.com"

    def test_strings(self):
        """Test that synthesized strings are included."""
        b = TreeBuilder("")
        assert extract_text(b.paragraph(b.string("&"), b.string("x")), b.source) == b"&x"


@pytest.mark.unit
class TestDump:
    """Tests for dump()."""

    def test_outline(self):
        """Test the indented outline format."""
        b = TreeBuilder("# hi\n\n```py\nx\n```\n")
        doc = b.document(b.heading(1, b.text("hi")), b.fenced_code_block("py", "x\n", blank_before=True))
        assert dump(doc, b.source) == (
            "Document\n"
            "  Heading level=1\n"
            "    Text segment=b'hi'\n"
            "  FencedCodeBlock lines=b'x\\n' info=b'py' blank_before=True\n"
        )

    def test_indent(self):
        """Test a custom indentation width."""
        b = TreeBuilder("")
        out = dump(b.document(b.bullet_list(b.item())), b.source, indent=4)
        assert out.splitlines() == [
            "Document",
            "    List start=1 marker='-' tight=True",
            "        ListItem offset=2",
        ]
