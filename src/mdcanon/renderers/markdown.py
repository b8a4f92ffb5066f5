#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/markdown.py
"""Canonical Markdown rendering from a parsed tree.

This module provides the Canonicalizer, which re-emits a parsed Markdown
document as a deterministic, normalized byte stream. Two documents that
differ only in presentation (list numbering, thematic break spelling, list
indentation, fence style) render to the same bytes.

The tree is walked depth-first with an enter and an exit call per node. Each
node kind is rendered by a handler from a :class:`HandlerRegistry`; handlers
share a small amount of traversal state (quote depth, the list context stack,
the ancestor stack). Line prefixes for block quotes and list items are
produced by a :class:`LineWriter`.

"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import IO, Optional, cast

from mdcanon.ast.nodes import (
    AutoLink,
    BlockQuote,
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
    RawHTML,
    String,
    Table,
    TableRow,
    TaskCheckBox,
    Text,
    TextBlock,
    get_node_children,
)
from mdcanon.ast.utils import extract_text
from mdcanon.ast.visitors import validate_tree
from mdcanon.ast.walk import HandlerRegistry, WalkStatus, walk
from mdcanon.constants import (
    BLOCKQUOTE_PREFIX,
    CODE_FENCE_CHAR,
    CODE_FENCE_MIN_LENGTH,
    EMPHASIS_CHAR,
    HARD_LINE_BREAK,
    HEADING_CHAR,
    LIST_INDENT_WIDTH,
    STRIKETHROUGH_DELIMITER,
    TABLE_DELIMITERS,
    TASK_CHECKED,
    TASK_UNCHECKED,
    THEMATIC_BREAK,
)
from mdcanon.exceptions import OutputWriteError, RenderingError
from mdcanon.options.markdown import CanonicalizerOptions
from mdcanon.renderers._line_writer import ContainerFrame, LineWriter
from mdcanon.renderers.base import BaseRenderer
from mdcanon.utils.escape import escape_html, escape_inline_code, escape_url, longest_run
from mdcanon.utils.io_utils import OutputTarget, is_binary_stream, write_content

logger = logging.getLogger(__name__)

CONTINUE = WalkStatus.CONTINUE
SKIP_CHILDREN = WalkStatus.SKIP_CHILDREN

# Blocks that would be misread when placed directly under a paragraph line:
# "---" turns the paragraph into a setext heading, and a table would take
# the paragraph's last line as its header.
_SEPARATE_FROM_PARAGRAPH = frozenset({NodeKind.THEMATIC_BREAK, NodeKind.TABLE})
# Once the paragraph's container has closed, "---" can no longer underline
# it, but an unprefixed table row would still continue it lazily.
_SEPARATE_FROM_CLOSED_PARAGRAPH = frozenset({NodeKind.TABLE})


@dataclass
class _ListContext:
    """Numbering and indentation state of one open list."""

    ordered: bool
    marker: str
    next_position: int
    lead: int


class Canonicalizer(BaseRenderer):
    """Render a parsed Markdown tree to canonical Markdown bytes.

    Canonical form:

    - headings are ATX (``# Title``)
    - emphasis uses ``*``, strong emphasis ``**``
    - ordered lists are renumbered consecutively from their start number
    - nested list markers sit 4 columns deeper per nesting level
    - thematic breaks are ``---``
    - code blocks are fenced with backticks
    - links are inline ``[label](destination)`` with escaped label and destination
    - exactly one blank line separates blocks that were separated in the source

    Parameters
    ----------
    options : CanonicalizerOptions or None, default = None
        Rendering options

    Examples
    --------
        >>> from mdcanon.ast.builder import TreeBuilder
        >>> src = b"# heading\\n\\n***\\n"
        >>> b = TreeBuilder(src)
        >>> doc = b.document(b.heading(1, b.text("heading")), b.thematic_break(blank_before=True))
        >>> Canonicalizer().render_to_bytes(doc, src)
        b'# heading\\n\\n---\\n'

    Notes
    -----
    An instance resets its traversal state at the start of every render, so
    it can be reused for many documents, but not from two threads at once.

    """

    def __init__(self, options: CanonicalizerOptions | None = None):
        """Initialize the canonicalizer and build its handler table."""
        BaseRenderer._validate_options_type(options, CanonicalizerOptions, "Canonicalizer")
        options = options or CanonicalizerOptions()
        BaseRenderer.__init__(self, options)
        self.options: CanonicalizerOptions = options
        self._handlers = HandlerRegistry()
        self.register_handlers(self._handlers)
        self._reset(b"", None)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def register_handlers(self, registry: HandlerRegistry) -> None:
        """Register a handler for every node kind this renderer supports.

        Subclasses may override this to add or replace handlers.

        Parameters
        ----------
        registry : HandlerRegistry
            Table to populate

        """
        registry.register(NodeKind.DOCUMENT, self._render_document)
        registry.register(NodeKind.HEADING, self._render_heading)
        registry.register(NodeKind.PARAGRAPH, self._render_paragraph)
        registry.register(NodeKind.TEXT_BLOCK, self._render_text_block)
        registry.register(NodeKind.BLOCK_QUOTE, self._render_block_quote)
        registry.register(NodeKind.CODE_BLOCK, self._render_code_block)
        registry.register(NodeKind.FENCED_CODE_BLOCK, self._render_code_block)
        registry.register(NodeKind.HTML_BLOCK, self._render_html_block)
        registry.register(NodeKind.LIST, self._render_list)
        registry.register(NodeKind.LIST_ITEM, self._render_list_item)
        registry.register(NodeKind.THEMATIC_BREAK, self._render_thematic_break)

        registry.register(NodeKind.TEXT, self._render_text)
        registry.register(NodeKind.STRING, self._render_string)
        registry.register(NodeKind.EMPHASIS, self._render_emphasis)
        registry.register(NodeKind.CODE_SPAN, self._render_code_span)
        registry.register(NodeKind.LINK, self._render_link)
        registry.register(NodeKind.IMAGE, self._render_image)
        registry.register(NodeKind.AUTO_LINK, self._render_auto_link)
        registry.register(NodeKind.RAW_HTML, self._render_raw_html)

        if self.options.gfm:
            registry.register(NodeKind.TABLE, self._render_table)
            registry.register(NodeKind.TABLE_ROW, self._render_table_row)
            registry.register(NodeKind.TABLE_CELL, self._render_table_cell)
            registry.register(NodeKind.STRIKETHROUGH, self._render_strikethrough)
            registry.register(NodeKind.TASK_CHECK_BOX, self._render_task_check_box)

    def render(self, doc: Document, source: bytes, output: OutputTarget) -> None:
        """Render the document as canonical Markdown.

        Binary streams receive the output as it is produced. File paths and
        text streams receive the finished document.

        Parameters
        ----------
        doc : Document
            Root of the parsed tree
        source : bytes
            Source buffer the tree's spans index into
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        MalformedTreeError
            If tree validation is enabled and the tree is malformed
        RenderingError
            If the tree contains a node kind with no registered handler
        OutputWriteError
            If the output rejects a write

        """
        if self.options.validate_tree:
            validate_tree(doc, source, gfm=self.options.gfm)

        if not isinstance(output, (str, bytes)) and hasattr(output, "write") and is_binary_stream(output):
            self._render_stream(doc, source, cast(IO[bytes], output))
            return

        buffer = BytesIO()
        self._render_stream(doc, source, buffer)
        try:
            write_content(buffer.getvalue(), output, encoding=self.options.encoding)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to write canonical output: {e}")
            raise OutputWriteError(original_error=e) from e

    @property
    def quote_depth(self) -> int:
        """Nesting depth of the innermost open block quote, -1 outside quotes."""
        return self._quote_depth

    @property
    def list_depth(self) -> int:
        """Nesting depth of the innermost open list, -1 outside lists."""
        return len(self._lists) - 1

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _reset(self, source: bytes, sink: Optional[IO[bytes]]) -> None:
        self._source = source
        self._writer: Optional[LineWriter] = LineWriter(sink) if sink is not None else None
        self._quote_depth = -1
        self._lists: list[_ListContext] = []
        self._containers: list[ContainerFrame] = []
        self._tables: list[Table] = []
        self._ancestors: list[Node] = []
        self._separate_next: frozenset[NodeKind] = frozenset()
        self._heading_depth = 0
        self._open_fence = b""

    def _render_stream(self, doc: Document, source: bytes, sink: IO[bytes]) -> None:
        self._reset(source, sink)
        writer = cast(LineWriter, self._writer)
        logger.debug(f"Canonicalizing document ({len(source)} source bytes)")
        try:
            walk(doc, self._visit)
            writer.flush()
            logger.debug(f"Canonicalized document: {writer.bytes_written} bytes written")
        finally:
            self._reset(b"", None)

    def _visit(self, node: Node, entering: bool) -> WalkStatus:
        handler = self._handlers.get(node.kind)
        if handler is None:
            raise RenderingError(
                f"No handler registered for node kind '{node.kind.value}'", rendering_stage="dispatch"
            )

        if entering:
            if node.is_block:
                self._pre_render(node)
            self._ancestors.append(node)
            return handler(node, True)

        status = handler(node, False)
        self._ancestors.pop()
        return status

    def _pre_render(self, node: Node) -> None:
        """Emit the blank line that separates a block from its predecessor."""
        separate = self._separate_next
        self._separate_next = frozenset()
        if getattr(node, "blank_before", False) or node.kind in separate:
            self._out.blank_line()

    @property
    def _out(self) -> LineWriter:
        if self._writer is None:
            raise RenderingError("Canonicalizer is not rendering", rendering_stage="output")
        return self._writer

    def _parent(self) -> Optional[Node]:
        # The node being handled is on top of the ancestor stack.
        return self._ancestors[-2] if len(self._ancestors) >= 2 else None

    def _decode(self, data: bytes) -> str:
        return data.decode(self.options.encoding, errors="surrogateescape")

    def _encode(self, text: str) -> bytes:
        return text.encode(self.options.encoding, errors="surrogateescape")

    # ------------------------------------------------------------------
    # Block handlers
    # ------------------------------------------------------------------

    def _render_document(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            self._out.ensure_newline()
        return CONTINUE

    def _render_heading(self, node: Node, entering: bool) -> WalkStatus:
        heading = cast(Heading, node)
        if entering:
            self._heading_depth += 1
            marker = HEADING_CHAR * heading.level
            self._out.write(marker + b" " if heading.content else marker)
        else:
            self._heading_depth -= 1
            self._out.ensure_newline()
        return CONTINUE

    def _render_paragraph(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            self._out.ensure_newline()
            self._separate_next = _SEPARATE_FROM_PARAGRAPH
        return CONTINUE

    def _render_text_block(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            return CONTINUE

        text_block = cast(TextBlock, node)
        parent = self._parent()
        siblings = get_node_children(parent) if parent is not None else []
        is_last_child = not siblings or siblings[-1] is text_block
        if text_block.content and not is_last_child:
            self._out.ensure_newline()
        self._separate_next = _SEPARATE_FROM_PARAGRAPH
        return CONTINUE

    def _render_block_quote(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._quote_depth += 1
            self._containers.append(self._out.push(BLOCKQUOTE_PREFIX))
        else:
            self._close_container()
            self._quote_depth -= 1
        return CONTINUE

    def _close_container(self) -> None:
        frame = self._containers.pop()
        if self._separate_next:
            self._separate_next = _SEPARATE_FROM_CLOSED_PARAGRAPH
        if frame.pending:
            # Empty container: its marker alone on a line.
            self._out.newline()
        self._out.ensure_newline()
        self._out.pop()

    def _render_code_block(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            self._out.write(self._open_fence + b"\n")
            self._open_fence = b""
            return SKIP_CHILDREN

        code = cast(FencedCodeBlock, node)
        content = b"".join(line.value(self._source) for line in code.lines)
        language = code.language(self._source) if isinstance(code, FencedCodeBlock) else b""

        fence_char = CODE_FENCE_CHAR
        if CODE_FENCE_CHAR.encode() in language:
            # Backtick fences cannot carry an info string containing backticks.
            fence_char = "~"
        fence_length = max(CODE_FENCE_MIN_LENGTH, longest_run(self._decode(content), fence_char) + 1)
        if fence_length > CODE_FENCE_MIN_LENGTH:
            logger.debug(f"Lengthened code fence to {fence_length} characters")

        self._open_fence = self._encode(fence_char * fence_length)
        self._out.ensure_newline()
        self._out.write(self._open_fence + language + b"\n")
        self._out.write(content)
        self._out.ensure_newline()
        return SKIP_CHILDREN

    def _render_html_block(self, node: Node, entering: bool) -> WalkStatus:
        html_block = cast(HTMLBlock, node)
        if entering:
            for line in html_block.lines:
                self._out.write(line.value(self._source))
        else:
            if html_block.closure is not None:
                self._out.write(html_block.closure.value(self._source))
            self._out.ensure_newline()
        return SKIP_CHILDREN

    def _render_list(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            self._lists.pop()
            return CONTINUE

        lst = cast(List, node)
        lead = 0
        if isinstance(self._parent(), ListItem) and self._lists:
            parent_frame = self._containers[-1]
            parent_lead = self._lists[-1].lead
            if parent_frame.pending:
                # The list opens its parent item: indent by widening the item.
                parent_frame.widen(parent_lead + LIST_INDENT_WIDTH)
            else:
                lead = max(0, LIST_INDENT_WIDTH - (parent_frame.width - parent_lead))

        self._lists.append(_ListContext(ordered=lst.ordered, marker=lst.marker, next_position=lst.start, lead=lead))
        return CONTINUE

    def _render_list_item(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            self._close_container()
            return CONTINUE

        item = cast(ListItem, node)
        context = self._lists[-1]
        if context.ordered:
            marker = f"{context.next_position}{context.marker}"
            context.next_position += 1
        else:
            marker = context.marker

        padding = min(4, max(1, item.offset - len(marker)))
        first_line = b" " * context.lead + self._encode(marker) + b" " * padding
        self._containers.append(self._out.push(first_line, b" " * len(first_line)))
        return CONTINUE

    def _render_thematic_break(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._out.write(THEMATIC_BREAK + b"\n")
        return CONTINUE

    # ------------------------------------------------------------------
    # Inline handlers
    # ------------------------------------------------------------------

    def _render_text(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            return CONTINUE

        text = cast(Text, node)
        self._out.write(text.segment.value(self._source))
        if text.hard_line_break or text.soft_line_break:
            if self._heading_depth:
                # Headings are single-line.
                self._out.write(b" ")
            elif text.hard_line_break:
                self._out.write(HARD_LINE_BREAK)
            else:
                self._out.write(b"\n")
        return CONTINUE

    def _render_string(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._out.write(cast(String, node).value)
        return CONTINUE

    def _render_emphasis(self, node: Node, entering: bool) -> WalkStatus:
        self._out.write(EMPHASIS_CHAR * cast(Emphasis, node).level)
        return CONTINUE

    def _render_code_span(self, node: Node, entering: bool) -> WalkStatus:
        if not entering:
            return SKIP_CHILDREN

        children = cast(CodeSpan, node).content
        parts: list[bytes] = []
        for i, child in enumerate(children):
            if isinstance(child, Text):
                value = child.segment.value(self._source)
                if child.soft_line_break or child.hard_line_break:
                    value += b"\n"
            else:
                value = cast(String, child).value
            if value.endswith(b"\n"):
                value = value[:-1].rstrip(b"\r")
                if i < len(children) - 1:
                    value += b" "
            parts.append(value)

        code, delimiter = escape_inline_code(self._decode(b"".join(parts)).replace("\n", " "))
        self._out.write(self._encode(f"{delimiter}{code}{delimiter}"))
        return SKIP_CHILDREN

    def _write_link(self, label: bytes, destination: str) -> None:
        # Decoding entities first keeps already-escaped labels stable.
        escaped_label = escape_html(html.unescape(self._decode(label)))
        self._out.write(self._encode(f"[{escaped_label}]({escape_url(destination)})"))

    def _render_link(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            link = cast(Link, node)
            self._write_link(extract_text(link.content, self._source), link.destination)
        return SKIP_CHILDREN

    def _render_image(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            image = cast(Image, node)
            self._out.write(b"!")
            self._write_link(image.alt_text(self._source), image.destination)
        return SKIP_CHILDREN

    def _render_auto_link(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            auto_link = cast(AutoLink, node)
            self._write_link(auto_link.label(self._source), self._decode(auto_link.url(self._source)))
        return SKIP_CHILDREN

    def _render_raw_html(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            for segment in cast(RawHTML, node).segments:
                self._out.write(segment.value(self._source))
        return SKIP_CHILDREN

    # ------------------------------------------------------------------
    # GFM extension handlers
    # ------------------------------------------------------------------

    def _render_table(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._tables.append(cast(Table, node))
        else:
            self._tables.pop()
        return CONTINUE

    def _render_table_row(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._out.write(b"|")
            return CONTINUE

        row = cast(TableRow, node)
        table = self._tables[-1]
        self._out.newline()
        if row.is_header or table.header is row:
            columns = max(len(table.alignments), len(row.cells))
            alignments = list(table.alignments) + [None] * (columns - len(table.alignments))
            delimiter_row = "|" + "".join(f" {TABLE_DELIMITERS[alignment]} |" for alignment in alignments)
            self._out.write(self._encode(delimiter_row) + b"\n")
        return CONTINUE

    def _render_table_cell(self, node: Node, entering: bool) -> WalkStatus:
        self._out.write(b" " if entering else b" |")
        return CONTINUE

    def _render_strikethrough(self, node: Node, entering: bool) -> WalkStatus:
        self._out.write(STRIKETHROUGH_DELIMITER)
        return CONTINUE

    def _render_task_check_box(self, node: Node, entering: bool) -> WalkStatus:
        if entering:
            self._out.write(TASK_CHECKED if cast(TaskCheckBox, node).checked else TASK_UNCHECKED)
        return CONTINUE
