#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class for renderers that turn a parsed
document tree, together with the source bytes its spans point into, into an
output byte stream.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO

from mdcanon.ast.nodes import Document
from mdcanon.exceptions import InvalidOptionsError
from mdcanon.options.base import BaseRendererOptions
from mdcanon.utils.io_utils import OutputTarget


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Subclasses implement :meth:`render`; byte and string output are derived
    from it.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options if options is not None else BaseRendererOptions()

    @abstractmethod
    def render(self, doc: Document, source: bytes, output: OutputTarget) -> None:
        """Render the document to the given output.

        Parameters
        ----------
        doc : Document
            Root of the tree to render
        source : bytes
            Source buffer the tree's spans index into
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If rendering fails
        OutputWriteError
            If the output rejects a write

        """
        pass

    def render_to_bytes(self, doc: Document, source: bytes) -> bytes:
        """Render the document and return the output bytes."""
        buffer = BytesIO()
        self.render(doc, source, buffer)
        return buffer.getvalue()

    def render_to_string(self, doc: Document, source: bytes) -> str:
        """Render the document and return the output decoded with the configured encoding."""
        return self.render_to_bytes(doc, source).decode(self.options.encoding, errors="surrogateescape")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
