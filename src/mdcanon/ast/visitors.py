#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/visitors.py
"""Structural validation of parsed trees.

The canonicalizer trusts the tree it is given; :class:`ValidationVisitor`
checks the invariants it relies on beforehand, so a malformed tree fails
fast with a :class:`~mdcanon.exceptions.MalformedTreeError` instead of
producing corrupt output.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdcanon.ast.nodes import (
    GFM_KINDS,
    AutoLink,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    FencedCodeBlock,
    Heading,
    HTMLBlock,
    List,
    ListItem,
    Node,
    NodeKind,
    RawHTML,
    Span,
    String,
    Table,
    TableCell,
    TableRow,
    Text,
    get_node_children,
)
from mdcanon.ast.walk import WalkStatus, walk
from mdcanon.constants import BULLET_LIST_MARKERS, ORDERED_LIST_MARKERS
from mdcanon.exceptions import MalformedTreeError

logger = logging.getLogger(__name__)

# Containers whose children are blocks, and the block kinds that may only
# appear under a specific parent.
_BLOCK_CONTAINERS = frozenset({NodeKind.DOCUMENT, NodeKind.BLOCK_QUOTE, NodeKind.LIST_ITEM})
_RESTRICTED_BLOCKS = frozenset(
    {NodeKind.DOCUMENT, NodeKind.LIST_ITEM, NodeKind.TABLE_ROW, NodeKind.TABLE_CELL}
)
_INLINE_CONTAINERS = frozenset(
    {
        NodeKind.HEADING,
        NodeKind.PARAGRAPH,
        NodeKind.TEXT_BLOCK,
        NodeKind.EMPHASIS,
        NodeKind.LINK,
        NodeKind.IMAGE,
        NodeKind.STRIKETHROUGH,
        NodeKind.TABLE_CELL,
    }
)


class ValidationVisitor:
    """Walk callback that validates tree structure.

    Checks performed:
    - every child is a node, block containers hold blocks, inline
      containers hold inlines
    - lists hold list items, with a marker valid for the list type
    - tables have a header row, rows hold cells
    - code spans hold only text
    - every span lies inside the source buffer
    - extension nodes only appear when GFM is enabled

    Parameters
    ----------
    source_length : int
        Length of the source buffer the spans index into
    gfm : bool, default = True
        Whether GFM extension nodes are allowed
    strict : bool, default = True
        Whether to raise on the first failure. When False, failures are
        collected in ``errors`` and the walk continues.

    Examples
    --------
        >>> from mdcanon.ast.walk import walk
        >>> validator = ValidationVisitor(source_length=len(source), strict=False)
        >>> walk(doc, validator)  # doctest: +SKIP
        >>> validator.errors  # doctest: +SKIP
        []

    """

    def __init__(self, source_length: int, gfm: bool = True, strict: bool = True):
        """Initialize the validator."""
        self.source_length = source_length
        self.gfm = gfm
        self.strict = strict
        self.errors: list[str] = []

    def __call__(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            return WalkStatus.CONTINUE

        if not self.gfm and node.kind in GFM_KINDS:
            self._add_error(f"{type(node).__name__} requires the GFM extensions", node)

        children = get_node_children(node)
        for i, child in enumerate(children):
            if not isinstance(child, Node):
                self._add_error(f"{type(node).__name__} child {i} is not a node: {type(child).__name__}", node)
                # Children that are not nodes cannot be walked.
                return WalkStatus.SKIP_CHILDREN

        if node.kind in _BLOCK_CONTAINERS:
            self._check_blocks(node, children)
        elif node.kind in _INLINE_CONTAINERS:
            self._check_inlines(node, children)

        check = getattr(self, f"_check_{node.kind.value}", None)
        if check is not None:
            check(node)
        return WalkStatus.CONTINUE

    def _add_error(self, message: str, node: Optional[Node] = None) -> None:
        self.errors.append(message)
        if self.strict:
            raise MalformedTreeError(message, node_kind=node.kind.value if node is not None else None)

    def _check_span(self, span: Optional[Span], node: Node, what: str) -> None:
        if span is None:
            return
        if not isinstance(span, Span):
            self._add_error(f"{type(node).__name__} {what} is not a Span", node)
        elif span.end > self.source_length:
            self._add_error(
                f"{type(node).__name__} {what} [{span.start}, {span.end}) exceeds source length {self.source_length}",
                node,
            )

    def _check_blocks(self, node: Node, children: list[Node]) -> None:
        for i, child in enumerate(children):
            if not child.is_block or child.kind in _RESTRICTED_BLOCKS:
                self._add_error(
                    f"{type(node).__name__} can only contain block nodes, but child {i} is {type(child).__name__}",
                    node,
                )

    def _check_inlines(self, node: Node, children: list[Node]) -> None:
        for i, child in enumerate(children):
            if child.is_block:
                self._add_error(
                    f"{type(node).__name__} can only contain inline nodes, but child {i} is {type(child).__name__}",
                    node,
                )

    # Per-kind checks, looked up by node kind value.

    def _check_heading(self, node: Heading) -> None:
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}", node)

    def _check_list(self, node: List) -> None:
        allowed = ORDERED_LIST_MARKERS if node.ordered else BULLET_LIST_MARKERS
        if len(node.marker) != 1 or node.marker not in allowed:
            kind = "ordered" if node.ordered else "bullet"
            self._add_error(f"Invalid {kind} list marker {node.marker!r}", node)
        if node.ordered and node.start < 0:
            self._add_error(f"Ordered list start must be non-negative, got {node.start}", node)
        for i, item in enumerate(node.items):
            if not isinstance(item, ListItem):
                self._add_error(f"List child {i} is {type(item).__name__}, expected ListItem", node)

    def _check_list_item(self, node: ListItem) -> None:
        if node.offset < 0:
            self._add_error(f"List item offset must be non-negative, got {node.offset}", node)

    def _check_table(self, node: Table) -> None:
        if not isinstance(node.header, TableRow):
            self._add_error("Table is missing its header row", node)
        for i, row in enumerate(node.rows):
            if not isinstance(row, TableRow):
                self._add_error(f"Table row {i} is {type(row).__name__}, expected TableRow", node)

    def _check_table_row(self, node: TableRow) -> None:
        for i, cell in enumerate(node.cells):
            if not isinstance(cell, TableCell):
                self._add_error(f"Table row cell {i} is {type(cell).__name__}, expected TableCell", node)

    def _check_code_block(self, node: CodeBlock) -> None:
        for line in node.lines:
            self._check_span(line, node, "line")

    def _check_fenced_code_block(self, node: FencedCodeBlock) -> None:
        for line in node.lines:
            self._check_span(line, node, "line")
        self._check_span(node.info, node, "info string")

    def _check_html_block(self, node: HTMLBlock) -> None:
        for line in node.lines:
            self._check_span(line, node, "line")
        self._check_span(node.closure, node, "closure line")

    def _check_text(self, node: Text) -> None:
        self._check_span(node.segment, node, "segment")

    def _check_string(self, node: String) -> None:
        if not isinstance(node.value, bytes):
            self._add_error(f"String value must be bytes, got {type(node.value).__name__}", node)

    def _check_emphasis(self, node: Emphasis) -> None:
        if node.level not in (1, 2):
            self._add_error(f"Emphasis level must be 1 or 2, got {node.level}", node)

    def _check_code_span(self, node: CodeSpan) -> None:
        for i, child in enumerate(node.content):
            if not isinstance(child, (Text, String)):
                self._add_error(f"CodeSpan child {i} is {type(child).__name__}, expected Text", node)

    def _check_auto_link(self, node: AutoLink) -> None:
        self._check_span(node.segment, node, "segment")
        if node.link_type not in ("url", "email"):
            self._add_error(f"Invalid autolink type {node.link_type!r}", node)

    def _check_raw_html(self, node: RawHTML) -> None:
        for segment in node.segments:
            self._check_span(segment, node, "segment")


def validate_tree(document: Node, source: bytes, gfm: bool = True) -> None:
    """Validate a tree against the node invariants.

    Parameters
    ----------
    document : Node
        Root of the tree, normally a Document
    source : bytes
        Source buffer the tree's spans index into
    gfm : bool, default = True
        Whether GFM extension nodes are allowed

    Raises
    ------
    MalformedTreeError
        On the first violation found

    """
    if not isinstance(document, Document):
        raise MalformedTreeError(f"Tree root must be a Document, got {type(document).__name__}")
    walk(document, ValidationVisitor(len(source), gfm=gfm))
    logger.debug("Tree validation passed")
