#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/builder.py
"""Builder helper for constructing span-based trees by hand.

Nodes reference their text through spans into a source buffer, which makes
trees tedious to write out directly. :class:`TreeBuilder` locates each text
fragment in the source for you: every lookup searches forward from a cursor
that advances past the previous match, so nested builder calls, evaluated
left to right, resolve fragments in document order.

This is how trees are assembled in tests and by adapters that wrap an
external parser whose output lacks offsets.

"""

from __future__ import annotations

from typing import Optional, Union

from mdcanon.ast.nodes import (
    AutoLink,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RawHTML,
    Span,
    Strikethrough,
    String,
    Table,
    TableCell,
    TableRow,
    TaskCheckBox,
    Text,
    TextBlock,
    ThematicBreak,
)
from mdcanon.constants import DEFAULT_ENCODING, Alignment, AutoLinkType

Fragment = Union[str, bytes]


class TreeBuilder:
    """Build trees whose spans are located by searching the source.

    Parameters
    ----------
    source : str or bytes
        Source document. Text is encoded with ``encoding``.
    encoding : str, default = 'utf-8'
        Encoding used for str source and fragments

    Attributes
    ----------
    source : bytes
        The source buffer spans index into

    Examples
    --------
    Build the tree for a heading followed by a paragraph:

        >>> src = b"# heading\\n\\nthis is *text*\\n"
        >>> b = TreeBuilder(src)
        >>> doc = b.document(
        ...     b.heading(1, b.text("heading")),
        ...     b.paragraph(b.text("this is "), b.emphasis(1, b.text("text")), blank_before=True),
        ... )
        >>> doc.children[1].content[0].segment
        Span(start=11, end=19)

    """

    def __init__(self, source: Fragment, encoding: str = DEFAULT_ENCODING):
        """Initialize the builder with its source buffer."""
        self.encoding = encoding
        self.source: bytes = source.encode(encoding) if isinstance(source, str) else source
        self._cursor = 0

    def _encode(self, fragment: Fragment) -> bytes:
        return fragment.encode(self.encoding) if isinstance(fragment, str) else fragment

    # Cursor

    def span(self, fragment: Fragment) -> Span:
        """Return the span of the next occurrence of ``fragment`` and move past it.

        Raises
        ------
        ValueError
            If ``fragment`` does not occur at or after the cursor

        """
        needle = self._encode(fragment)
        start = self.source.find(needle, self._cursor)
        if start < 0:
            raise ValueError(f"Fragment {needle!r} not found in source after offset {self._cursor}")
        self._cursor = start + len(needle)
        return Span(start, self._cursor)

    def skip(self, fragment: Fragment) -> TreeBuilder:
        """Move the cursor past the next occurrence of ``fragment``."""
        self.span(fragment)
        return self

    # Blocks

    def document(self, *children: Node) -> Document:
        return Document(children=list(children))

    def heading(self, level: int, *content: Node, blank_before: bool = False) -> Heading:
        return Heading(level=level, content=list(content), blank_before=blank_before)

    def paragraph(self, *content: Node, blank_before: bool = False) -> Paragraph:
        return Paragraph(content=list(content), blank_before=blank_before)

    def text_block(self, *content: Node, blank_before: bool = False) -> TextBlock:
        return TextBlock(content=list(content), blank_before=blank_before)

    def blockquote(self, *children: Node, blank_before: bool = False) -> BlockQuote:
        return BlockQuote(children=list(children), blank_before=blank_before)

    def bullet_list(
        self, *items: ListItem, marker: str = "-", tight: bool = True, blank_before: bool = False
    ) -> List:
        return List(ordered=False, items=list(items), marker=marker, tight=tight, blank_before=blank_before)

    def ordered_list(
        self,
        *items: ListItem,
        start: int = 1,
        marker: str = ".",
        tight: bool = True,
        blank_before: bool = False,
    ) -> List:
        return List(
            ordered=True, items=list(items), start=start, marker=marker, tight=tight, blank_before=blank_before
        )

    def item(self, *children: Node, offset: int = 2, blank_before: bool = False) -> ListItem:
        """Build a list item; ``offset`` is the content column relative to the marker."""
        return ListItem(children=list(children), offset=offset, blank_before=blank_before)

    def code_block(self, *lines: Fragment, blank_before: bool = False) -> CodeBlock:
        """Build an indented code block from its content lines (indentation removed)."""
        return CodeBlock(lines=[self.span(line) for line in lines], blank_before=blank_before)

    def fenced_code_block(
        self, info: Optional[Fragment], *lines: Fragment, blank_before: bool = False
    ) -> FencedCodeBlock:
        """Build a fenced code block; ``info`` is located before the content lines."""
        info_span = self.span(info) if info else None
        return FencedCodeBlock(lines=[self.span(line) for line in lines], info=info_span, blank_before=blank_before)

    def html_block(
        self, *lines: Fragment, closure: Optional[Fragment] = None, blank_before: bool = False
    ) -> HTMLBlock:
        spans = [self.span(line) for line in lines]
        closure_span = self.span(closure) if closure else None
        return HTMLBlock(lines=spans, closure=closure_span, blank_before=blank_before)

    def thematic_break(self, blank_before: bool = False) -> ThematicBreak:
        return ThematicBreak(blank_before=blank_before)

    def table(
        self,
        header: TableRow,
        *rows: TableRow,
        alignments: Optional[list[Optional[Alignment]]] = None,
        blank_before: bool = False,
    ) -> Table:
        header.is_header = True
        if alignments is None:
            alignments = [None] * len(header.cells)
        for row in [header, *rows]:
            for cell, alignment in zip(row.cells, alignments):
                cell.alignment = alignment
        return Table(header=header, rows=list(rows), alignments=list(alignments), blank_before=blank_before)

    def row(self, *cells: TableCell) -> TableRow:
        return TableRow(cells=list(cells))

    def cell(self, *content: Node) -> TableCell:
        return TableCell(content=list(content))

    # Inlines

    def text(self, fragment: Fragment, soft: bool = False, hard: bool = False) -> Text:
        """Locate ``fragment`` and wrap it in a Text node."""
        return Text(segment=self.span(fragment), soft_line_break=soft, hard_line_break=hard)

    def string(self, value: Fragment) -> String:
        """Build a String node; it has no span, so the cursor does not move."""
        return String(value=self._encode(value))

    def emphasis(self, level: int, *content: Node) -> Emphasis:
        return Emphasis(level=level, content=list(content))

    def strikethrough(self, *content: Node) -> Strikethrough:
        return Strikethrough(content=list(content))

    def code_span(self, *fragments: Fragment) -> CodeSpan:
        """Build a code span; a fragment may end in the newline of a multi-line span."""
        return CodeSpan(content=[Text(segment=self.span(fragment)) for fragment in fragments])

    def link(self, destination: str, *content: Node, title: Optional[str] = None) -> Link:
        return Link(destination=destination, content=list(content), title=title)

    def image(self, destination: str, *content: Node, title: Optional[str] = None) -> Image:
        return Image(destination=destination, content=list(content), title=title)

    def autolink(
        self, fragment: Fragment, link_type: AutoLinkType = "url", protocol: Optional[Fragment] = None
    ) -> AutoLink:
        protocol_bytes = self._encode(protocol) if protocol else None
        return AutoLink(segment=self.span(fragment), link_type=link_type, protocol=protocol_bytes)

    def raw_html(self, *fragments: Fragment) -> RawHTML:
        return RawHTML(segments=[self.span(fragment) for fragment in fragments])

    def task(self, checked: bool) -> TaskCheckBox:
        return TaskCheckBox(checked=checked)
