#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown canonicalization."""
# src/mdcanon/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from mdcanon.constants import DEFAULT_GFM, DEFAULT_VALIDATE_TREE
from mdcanon.options.base import BaseRendererOptions


@dataclass(frozen=True)
class CanonicalizerOptions(BaseRendererOptions):
    """Options controlling how a parsed tree is re-emitted as canonical Markdown.

    The canonical layout itself (marker spellings, indentation, blank lines)
    is fixed; these options only select which node kinds are accepted and how
    strictly the tree is checked.

    Parameters
    ----------
    gfm : bool, default True
        Register handlers for the GitHub Flavored Markdown extension nodes
        (tables, strikethrough, task checkboxes). When False those nodes are
        rejected.
    validate_tree : bool, default True
        Check the tree against the node invariants before rendering and raise
        MalformedTreeError on the first violation.
    encoding : str, default 'utf-8'
        Text encoding of the source buffer.

    Examples
    --------
    Render CommonMark only:
        >>> options = CanonicalizerOptions(gfm=False)

    """

    gfm: bool = field(
        default=DEFAULT_GFM,
        metadata={
            "help": "Enable GFM extension nodes (tables, strikethrough, task lists)",
            "importance": "core",
        },
    )
    validate_tree: bool = field(
        default=DEFAULT_VALIDATE_TREE,
        metadata={
            "help": "Validate the tree structure before rendering",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
