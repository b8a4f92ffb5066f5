#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/nodes.py
"""AST node classes for parsed Markdown documents.

This module defines the node hierarchy that the canonicalizer consumes. The
tree is produced by an external CommonMark+GFM parser; nodes never copy
source text, they hold :class:`Span` references into the source buffer that
is passed alongside the tree at render time.

Node Hierarchy
--------------
Every node class carries two class-level tags: ``kind`` (a :class:`NodeKind`,
the key used for handler dispatch) and ``is_block``.

Block-level nodes represent structural document elements:
    - Document, Heading, Paragraph, TextBlock, BlockQuote
    - CodeBlock, FencedCodeBlock, HTMLBlock, ThematicBreak
    - List, ListItem, Table, TableRow, TableCell

Inline nodes represent text formatting:
    - Text, String, Emphasis, CodeSpan
    - Link, Image, AutoLink, RawHTML
    - Strikethrough, TaskCheckBox

Block nodes expose ``blank_before``, set by the parser when a blank line
preceded the node in the source.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from mdcanon.constants import Alignment, AutoLinkType, MAILTO_PREFIX


class NodeKind(str, Enum):
    """Closed set of node kinds used as dispatch keys."""

    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT_BLOCK = "text_block"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    FENCED_CODE_BLOCK = "fenced_code_block"
    HTML_BLOCK = "html_block"
    LIST = "list"
    LIST_ITEM = "list_item"
    THEMATIC_BREAK = "thematic_break"
    TEXT = "text"
    STRING = "string"
    EMPHASIS = "emphasis"
    CODE_SPAN = "code_span"
    LINK = "link"
    IMAGE = "image"
    AUTO_LINK = "auto_link"
    RAW_HTML = "raw_html"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    STRIKETHROUGH = "strikethrough"
    TASK_CHECK_BOX = "task_check_box"


GFM_KINDS = frozenset(
    {
        NodeKind.TABLE,
        NodeKind.TABLE_ROW,
        NodeKind.TABLE_CELL,
        NodeKind.STRIKETHROUGH,
        NodeKind.TASK_CHECK_BOX,
    }
)
"""Node kinds that only exist when the GFM extensions are enabled."""


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` into the source buffer.

    Parameters
    ----------
    start : int
        Offset of the first byte
    end : int
        Offset one past the last byte

    Examples
    --------
    >>> Span(2, 5).value(b"# heading")
    b'hea'

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate that the range is well ordered."""
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def value(self, source: bytes) -> bytes:
        """Return the bytes this span covers in ``source``."""
        return source[self.start : self.end]


class Node:
    """Base class for all AST nodes."""

    kind: ClassVar[NodeKind]
    is_block: ClassVar[bool] = False


# =============================================================================
# Block nodes
# =============================================================================


@dataclass
class Document(Node):
    """Root node of a parsed document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level block nodes

    """

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT
    is_block: ClassVar[bool] = True

    children: list[Node] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class Heading(Node):
    """ATX or setext heading (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    blank_before : bool, default = False
        Whether a blank line preceded the heading

    """

    kind: ClassVar[NodeKind] = NodeKind.HEADING
    is_block: ClassVar[bool] = True

    level: int
    content: list[Node] = field(default_factory=list)
    blank_before: bool = False

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH
    is_block: ClassVar[bool] = True

    content: list[Node] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class TextBlock(Node):
    """Paragraph-like inline container used inside tight list items.

    Unlike :class:`Paragraph`, a text block does not end with a line break of
    its own when it is the last child of its parent.

    """

    kind: ClassVar[NodeKind] = NodeKind.TEXT_BLOCK
    is_block: ClassVar[bool] = True

    content: list[Node] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class BlockQuote(Node):
    """Block quote containing other block nodes."""

    kind: ClassVar[NodeKind] = NodeKind.BLOCK_QUOTE
    is_block: ClassVar[bool] = True

    children: list[Node] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class CodeBlock(Node):
    """Indented code block.

    Parameters
    ----------
    lines : list of Span, default = empty list
        Content lines, each normally including its trailing newline

    """

    kind: ClassVar[NodeKind] = NodeKind.CODE_BLOCK
    is_block: ClassVar[bool] = True

    lines: list[Span] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class FencedCodeBlock(Node):
    """Fenced code block with an optional info string.

    Parameters
    ----------
    lines : list of Span, default = empty list
        Content lines, each normally including its trailing newline
    info : Span or None, default = None
        The info string following the opening fence
    blank_before : bool, default = False
        Whether a blank line preceded the block

    """

    kind: ClassVar[NodeKind] = NodeKind.FENCED_CODE_BLOCK
    is_block: ClassVar[bool] = True

    lines: list[Span] = field(default_factory=list)
    info: Optional[Span] = None
    blank_before: bool = False

    def language(self, source: bytes) -> bytes:
        """Return the language tag: the info string up to its first whitespace.

        Examples
        --------
        >>> src = b"```python title=x"
        >>> FencedCodeBlock(info=Span(3, 17)).language(src)
        b'python'

        """
        if self.info is None:
            return b""
        words = self.info.value(source).split()
        return words[0] if words else b""


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, copied to the output verbatim.

    Parameters
    ----------
    lines : list of Span, default = empty list
        Content lines
    closure : Span or None, default = None
        Closing line for HTML block types that have one (e.g. ``-->``)

    """

    kind: ClassVar[NodeKind] = NodeKind.HTML_BLOCK
    is_block: ClassVar[bool] = True

    lines: list[Span] = field(default_factory=list)
    closure: Optional[Span] = None
    blank_before: bool = False


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for bullet lists
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    marker : str, default = "-"
        ``-``, ``*`` or ``+`` for bullet lists; ``.`` or ``)`` for ordered lists
    tight : bool, default = True
        Whether the list is tight (no blank lines between items)
    blank_before : bool, default = False
        Whether a blank line preceded the list

    """

    kind: ClassVar[NodeKind] = NodeKind.LIST
    is_block: ClassVar[bool] = True

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    marker: str = "-"
    tight: bool = True
    blank_before: bool = False


@dataclass
class ListItem(Node):
    """List item containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item
    offset : int, default = 2
        Column of the item's content relative to the start of its marker
    blank_before : bool, default = False
        Whether a blank line preceded the item (loose lists)

    """

    kind: ClassVar[NodeKind] = NodeKind.LIST_ITEM
    is_block: ClassVar[bool] = True

    children: list[Node] = field(default_factory=list)
    offset: int = 2
    blank_before: bool = False


@dataclass
class ThematicBreak(Node):
    """Thematic break (horizontal rule)."""

    kind: ClassVar[NodeKind] = NodeKind.THEMATIC_BREAK
    is_block: ClassVar[bool] = True

    blank_before: bool = False


@dataclass
class Table(Node):
    """GFM table.

    Parameters
    ----------
    header : TableRow or None, default = None
        Header row; required for a well-formed table
    rows : list of TableRow, default = empty list
        Body rows
    alignments : list of {'left', 'center', 'right'} or None, default = empty list
        Column alignments, one per column
    blank_before : bool, default = False
        Whether a blank line preceded the table

    """

    kind: ClassVar[NodeKind] = NodeKind.TABLE
    is_block: ClassVar[bool] = True

    header: Optional[TableRow] = None
    rows: list[TableRow] = field(default_factory=list)
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class TableRow(Node):
    """Table row containing cells."""

    kind: ClassVar[NodeKind] = NodeKind.TABLE_ROW
    is_block: ClassVar[bool] = True

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    blank_before: bool = False


@dataclass
class TableCell(Node):
    """Table cell containing inline content."""

    kind: ClassVar[NodeKind] = NodeKind.TABLE_CELL
    is_block: ClassVar[bool] = True

    content: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    blank_before: bool = False


# =============================================================================
# Inline nodes
# =============================================================================


@dataclass
class Text(Node):
    """Run of plain text taken from the source.

    Parameters
    ----------
    segment : Span
        Source range of the text, excluding any line ending
    soft_line_break : bool, default = False
        Whether the text is followed by a soft line break
    hard_line_break : bool, default = False
        Whether the text is followed by a hard line break

    """

    kind: ClassVar[NodeKind] = NodeKind.TEXT

    segment: Span
    soft_line_break: bool = False
    hard_line_break: bool = False


@dataclass
class String(Node):
    """Text synthesized by the parser that has no source range."""

    kind: ClassVar[NodeKind] = NodeKind.STRING

    value: bytes = b""


@dataclass
class Emphasis(Node):
    """Emphasis (level 1) or strong emphasis (level 2)."""

    kind: ClassVar[NodeKind] = NodeKind.EMPHASIS

    level: int = 1
    content: list[Node] = field(default_factory=list)


@dataclass
class CodeSpan(Node):
    """Inline code; its children are :class:`Text` nodes."""

    kind: ClassVar[NodeKind] = NodeKind.CODE_SPAN

    content: list[Node] = field(default_factory=list)


@dataclass
class Link(Node):
    """Inline link.

    Parameters
    ----------
    destination : str
        Link destination as parsed (entity references already decoded)
    content : list of Node, default = empty list
        Inline nodes forming the label
    title : str or None, default = None
        Optional link title

    """

    kind: ClassVar[NodeKind] = NodeKind.LINK

    destination: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(Node):
    """Inline image; its inline children form the alt text."""

    kind: ClassVar[NodeKind] = NodeKind.IMAGE

    destination: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None

    @classmethod
    def from_link(cls, link: Link) -> Image:
        """Build an image that shares a link's destination, title and children."""
        return cls(destination=link.destination, content=link.content, title=link.title)

    def alt_text(self, source: bytes) -> bytes:
        """Return the plain text of the image description."""
        from mdcanon.ast.utils import extract_text

        return extract_text(self.content, source)


@dataclass
class AutoLink(Node):
    """Autolink such as ``<https://example.com>`` or a bare GFM ``www.`` link.

    Parameters
    ----------
    segment : Span
        Source range of the link text (without angle brackets)
    link_type : {'url', 'email'}, default = 'url'
        Kind of autolink
    protocol : bytes or None, default = None
        Scheme the parser inferred for links written without one

    """

    kind: ClassVar[NodeKind] = NodeKind.AUTO_LINK

    segment: Span
    link_type: AutoLinkType = "url"
    protocol: Optional[bytes] = None

    def label(self, source: bytes) -> bytes:
        """Return the visible link text."""
        return self.segment.value(source)

    def url(self, source: bytes) -> bytes:
        """Return the link destination.

        A parser-inferred protocol is prepended, and email links without a
        ``mailto:`` scheme (any case) get one.
        """
        value = self.segment.value(source)
        if self.protocol:
            value = self.protocol + b"://" + value
        if self.link_type == "email":
            prefix = MAILTO_PREFIX.encode("ascii")
            if value[: len(prefix)].lower() != prefix:
                value = prefix + value
        return value


@dataclass
class RawHTML(Node):
    """Inline raw HTML, copied to the output verbatim."""

    kind: ClassVar[NodeKind] = NodeKind.RAW_HTML

    segments: list[Span] = field(default_factory=list)


@dataclass
class Strikethrough(Node):
    """GFM strikethrough."""

    kind: ClassVar[NodeKind] = NodeKind.STRIKETHROUGH

    content: list[Node] = field(default_factory=list)


@dataclass
class TaskCheckBox(Node):
    """GFM task list checkbox, the first inline of a task item."""

    kind: ClassVar[NodeKind] = NodeKind.TASK_CHECK_BOX

    checked: bool = False


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node, in document order.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[String(b"Hello"), Emphasis(content=[String(b"world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(
        node,
        (Heading, Paragraph, TextBlock, Emphasis, CodeSpan, Link, Image, Strikethrough, TableCell),
    ):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header is not None:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    # Leaf nodes
    return []
