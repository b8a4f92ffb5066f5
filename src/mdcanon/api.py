#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/api.py
"""Convenience functions for canonicalizing parsed documents."""

from __future__ import annotations

import logging
from typing import Optional

from mdcanon.ast.nodes import Document
from mdcanon.options.markdown import CanonicalizerOptions
from mdcanon.renderers.markdown import Canonicalizer
from mdcanon.utils.io_utils import OutputTarget

logger = logging.getLogger(__name__)


def canonicalize(document: Document, source: bytes, options: Optional[CanonicalizerOptions] = None) -> bytes:
    """Render a parsed document as canonical Markdown.

    Parameters
    ----------
    document : Document
        Root of the tree produced by a CommonMark/GFM parser
    source : bytes
        Source buffer the tree's spans index into
    options : CanonicalizerOptions, optional
        Rendering options. Defaults to GFM with tree validation.

    Returns
    -------
    bytes
        Canonical Markdown, ending with a newline unless the document is empty

    Raises
    ------
    MalformedTreeError
        If the tree violates the node invariants
    RenderingError
        If the tree contains a node kind with no handler

    Examples
    --------
        >>> from mdcanon.ast import TreeBuilder
        >>> src = b"1. a\\n1. b\\n"
        >>> b = TreeBuilder(src)
        >>> doc = b.document(b.ordered_list(b.item(b.text_block(b.text("a")), offset=3),
        ...                                 b.item(b.text_block(b.text("b")), offset=3)))
        >>> canonicalize(doc, src)
        b'1. a\\n2. b\\n'

    """
    return Canonicalizer(options).render_to_bytes(document, source)


def canonicalize_to(
    document: Document,
    source: bytes,
    output: OutputTarget,
    options: Optional[CanonicalizerOptions] = None,
) -> None:
    """Render a parsed document as canonical Markdown into ``output``.

    Parameters
    ----------
    document : Document
        Root of the parsed tree
    source : bytes
        Source buffer the tree's spans index into
    output : str, Path, IO[bytes] or IO[str]
        File path or stream receiving the output
    options : CanonicalizerOptions, optional
        Rendering options

    Raises
    ------
    OutputWriteError
        If the output rejects a write; anything already written is incomplete

    """
    logger.debug(f"Canonicalizing into {type(output).__name__}")
    Canonicalizer(options).render(document, source, output)
