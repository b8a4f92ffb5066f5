#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/__init__.py
"""Utility modules for the mdcanon package."""

from mdcanon.utils.escape import escape_html, escape_inline_code, escape_url
from mdcanon.utils.io_utils import write_content

__all__ = [
    "escape_html",
    "escape_inline_code",
    "escape_url",
    "write_content",
]
