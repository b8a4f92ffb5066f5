#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdcanon/renderers/__init__.py
"""Renderers that turn parsed trees into output bytes.

Available renderers:
- Canonicalizer: re-emit a tree as canonical Markdown
"""

from mdcanon.renderers.base import BaseRenderer
from mdcanon.renderers.markdown import Canonicalizer

__all__ = ["BaseRenderer", "Canonicalizer"]
