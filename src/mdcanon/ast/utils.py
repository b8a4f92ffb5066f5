#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
dump : Format a tree as an indented outline for debugging

Examples
--------
Extract a link label:

    >>> from mdcanon.ast.builder import TreeBuilder
    >>> src = b"[a *b*](x)"
    >>> b = TreeBuilder(src)
    >>> link = b.link("x", b.text("a "), b.emphasis(1, b.text("b")))
    >>> extract_text(link, src)
    b'a b'

"""

from __future__ import annotations

from dataclasses import fields
from typing import Union

from mdcanon.ast.nodes import (
    AutoLink,
    Node,
    Span,
    String,
    Text,
    get_node_children,
)


def extract_text(node_or_nodes: Union[Node, list[Node]], source: bytes) -> bytes:
    """Extract the plain text of a node or list of nodes.

    Text spans and parser-synthesized strings are concatenated in document
    order with all formatting dropped. Line breaks become single spaces.
    Raw HTML contributes nothing.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    source : bytes
        Source buffer the spans index into

    Returns
    -------
    bytes
        Concatenated text content

    """
    nodes = node_or_nodes if isinstance(node_or_nodes, list) else [node_or_nodes]
    parts: list[bytes] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        if isinstance(node, Text):
            parts.append(node.segment.value(source))
            if node.soft_line_break or node.hard_line_break:
                parts.append(b" ")
        elif isinstance(node, String):
            parts.append(node.value)
        elif isinstance(node, AutoLink):
            parts.append(node.label(source))
        else:
            stack.extend(reversed(get_node_children(node)))
    return b"".join(parts)


def _describe(node: Node, source: bytes) -> str:
    attrs: list[str] = []
    for f in fields(node):  # type: ignore[arg-type]
        value = getattr(node, f.name)
        if isinstance(value, list) and (not value or isinstance(value[0], Node)):
            continue
        if isinstance(value, Node):
            continue
        if isinstance(value, Span):
            value = value.value(source)
        elif isinstance(value, list) and isinstance(value[0], Span):
            value = b"".join(span.value(source) for span in value)
        if value is None or value is False:
            continue
        attrs.append(f"{f.name}={value!r}")
    return " ".join([type(node).__name__, *attrs])


def dump(node: Node, source: bytes, indent: int = 2) -> str:
    """Format a tree as an indented outline, one node per line.

    Child lists are shown as nested lines; spans are shown as the bytes they
    cover. Attributes that are None or False are omitted.

    Parameters
    ----------
    node : Node
        Root of the tree to format
    source : bytes
        Source buffer the spans index into
    indent : int, default = 2
        Spaces of indentation per nesting level

    Returns
    -------
    str
        The outline, ending in a newline

    Examples
    --------
        >>> from mdcanon.ast.builder import TreeBuilder
        >>> b = TreeBuilder(b"# hi")
        >>> print(dump(b.document(b.heading(1, b.text("hi"))), b.source), end="")
        Document
          Heading level=1
            Text segment=b'hi'

    """
    lines: list[str] = []
    stack: list[tuple[Node, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        lines.append(" " * (indent * depth) + _describe(current, source))
        stack.extend((child, depth + 1) for child in reversed(get_node_children(current)))
    return "\n".join(lines) + "\n"
