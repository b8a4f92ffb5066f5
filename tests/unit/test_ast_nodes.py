#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes."""

import pytest

from mdcanon.ast import (
    AutoLink,
    BlockQuote,
    Document,
    FencedCodeBlock,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    NodeKind,
    Paragraph,
    Span,
    String,
    Table,
    TableCell,
    TableRow,
    Text,
    get_node_children,
)


@pytest.mark.unit
class TestSpan:
    """Tests for Span."""

    def test_value(self):
        """Test slicing the source."""
        assert Span(2, 9).value(b"# heading") == b"heading"
        assert len(Span(2, 9)) == 7

    def test_invalid_range(self):
        """Test that reversed or negative ranges are rejected."""
        with pytest.raises(ValueError):
            Span(5, 2)
        with pytest.raises(ValueError):
            Span(-1, 2)


@pytest.mark.unit
class TestNodeTags:
    """Tests for kind and block tags."""

    def test_kinds(self):
        """Test that node classes carry their kind."""
        assert Document.kind is NodeKind.DOCUMENT
        assert Heading(level=1).kind is NodeKind.HEADING
        assert Text(segment=Span(0, 0)).kind is NodeKind.TEXT

    def test_block_flags(self):
        """Test block and inline classification."""
        assert Paragraph.is_block
        assert ListItem.is_block
        assert not Text.is_block
        assert not Link.is_block

    def test_heading_level_validated(self):
        """Test that heading levels outside 1-6 are rejected."""
        with pytest.raises(ValueError, match="1-6"):
            Heading(level=7)


@pytest.mark.unit
class TestNodeAccessors:
    """Tests for node helper methods."""

    def test_fenced_code_language(self):
        """Test that the language is the first word of the info string."""
        src = b"```python title=x\n"
        assert FencedCodeBlock(info=Span(3, 17)).language(src) == b"python"
        assert FencedCodeBlock().language(src) == b""

    def test_autolink_email_url(self):
        """Test mailto: handling for email autolinks."""
        src = b"foo@bar.com Mailto:a@b.c"
        assert AutoLink(segment=Span(0, 11), link_type="email").url(src) == b"mailto:foo@bar.com"
        assert AutoLink(segment=Span(12, 24), link_type="email").url(src) == b"Mailto:a@b.c"

    def test_autolink_protocol(self):
        """Test that an inferred protocol is prepended to the url only."""
        src = b"www.example.com"
        link = AutoLink(segment=Span(0, 15), protocol=b"https")
        assert link.url(src) == b"https://www.example.com"
        assert link.label(src) == b"www.example.com"

    def test_image_from_link(self):
        """Test building an image from a link."""
        link = Link(destination="a.png", content=[String(b"alt")], title="t")
        image = Image.from_link(link)
        assert image.destination == "a.png"
        assert image.title == "t"
        assert image.alt_text(b"") == b"alt"


@pytest.mark.unit
class TestGetNodeChildren:
    """Tests for get_node_children()."""

    def test_container_children(self):
        """Test children of block containers."""
        para = Paragraph(content=[String(b"x")])
        assert get_node_children(Document(children=[para])) == [para]
        assert get_node_children(BlockQuote(children=[para])) == [para]

    def test_list_items(self):
        """Test that list items are the children of a list."""
        item = ListItem()
        assert get_node_children(List(ordered=False, items=[item])) == [item]

    def test_table_header_first(self):
        """Test that the header row precedes the body rows."""
        header = TableRow(cells=[TableCell()], is_header=True)
        body = TableRow(cells=[TableCell()])
        assert get_node_children(Table(header=header, rows=[body])) == [header, body]

    def test_leaf(self):
        """Test that leaf nodes have no children."""
        assert get_node_children(Text(segment=Span(0, 1))) == []
