#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/ast/__init__.py
"""Syntax tree model for parsed Markdown documents.

The module consists of several components:

- nodes: node classes and the span type they use to reference source text
- walk: enter/exit traversal and the handler dispatch table
- visitors: structural validation of trees
- builder: span-locating helper for constructing trees by hand
- utils: text extraction and debug dumps

Examples
--------
    >>> from mdcanon.ast import TreeBuilder
    >>> b = TreeBuilder(b"some *text*")
    >>> doc = b.document(b.paragraph(b.text("some "), b.emphasis(1, b.text("text"))))

"""

from mdcanon.ast.builder import TreeBuilder
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
    NodeKind,
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
    get_node_children,
)
from mdcanon.ast.utils import dump, extract_text
from mdcanon.ast.visitors import ValidationVisitor, validate_tree
from mdcanon.ast.walk import HandlerRegistry, NodeHandler, WalkStatus, walk

__all__ = [
    "AutoLink",
    "BlockQuote",
    "CodeBlock",
    "CodeSpan",
    "Document",
    "Emphasis",
    "FencedCodeBlock",
    "HTMLBlock",
    "HandlerRegistry",
    "Heading",
    "Image",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeHandler",
    "NodeKind",
    "Paragraph",
    "RawHTML",
    "Span",
    "Strikethrough",
    "String",
    "Table",
    "TableCell",
    "TableRow",
    "TaskCheckBox",
    "Text",
    "TextBlock",
    "ThematicBreak",
    "TreeBuilder",
    "ValidationVisitor",
    "WalkStatus",
    "dump",
    "extract_text",
    "get_node_children",
    "validate_tree",
    "walk",
]
