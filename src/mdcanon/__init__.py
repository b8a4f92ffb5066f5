"""mdcanon - canonical Markdown rendering for parsed documents.

mdcanon takes the syntax tree an external CommonMark/GFM parser produced for
a Markdown file, together with the file's bytes, and writes the document
back out in one deterministic normalized form. Documents that differ only in
presentation canonicalize to identical bytes, which makes the output suitable
for diffing, hashing, and change detection before syncing documentation to a
hosting service.

Canonical Form
--------------
- ATX headings, ``*``/``**`` emphasis, ``---`` thematic breaks
- ordered lists renumbered from their start number
- nested list markers 4 columns deeper per level
- backtick-fenced code blocks
- inline links with escaped labels and percent-escaped destinations
- GFM tables, strikethrough and task lists (optional)

Requirements
------------
- Python 3.10+
- A Markdown parser that produces the tree (not included)

Examples
--------
    >>> from mdcanon import canonicalize
    >>> from mdcanon.ast import TreeBuilder
    >>> src = b"Title\\n=====\\n"
    >>> b = TreeBuilder(src)
    >>> canonicalize(b.document(b.heading(1, b.text("Title"))), src)
    b'# Title\\n'

"""

__version__ = "1.0.0"

from mdcanon.api import canonicalize, canonicalize_to
from mdcanon.exceptions import (
    InvalidOptionsError,
    MalformedTreeError,
    MdCanonError,
    OutputWriteError,
    RenderingError,
    ValidationError,
)
from mdcanon.options import CanonicalizerOptions
from mdcanon.renderers.markdown import Canonicalizer

__all__ = [
    "Canonicalizer",
    "CanonicalizerOptions",
    "InvalidOptionsError",
    "MalformedTreeError",
    "MdCanonError",
    "OutputWriteError",
    "RenderingError",
    "ValidationError",
    "__version__",
    "canonicalize",
    "canonicalize_to",
]
