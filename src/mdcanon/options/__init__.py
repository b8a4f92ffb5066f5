#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdcanon renderers.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy.
"""

from __future__ import annotations

from mdcanon.options.base import BaseRendererOptions, CloneFrozenMixin
from mdcanon.options.markdown import CanonicalizerOptions

__all__ = [
    "BaseRendererOptions",
    "CanonicalizerOptions",
    "CloneFrozenMixin",
]
