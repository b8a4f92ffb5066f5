#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdcanon library.

This module centralizes the fixed spellings of canonical Markdown and the
default configuration values used across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Canonical Markdown Spellings - Byte strings written by the canonicalizer
3. Link Escaping - Character classes used by URL escaping
4. Renderer Defaults - Default option values
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
AutoLinkType = Literal["url", "email"]

# =============================================================================
# Canonical Markdown Spellings
# =============================================================================

BLOCKQUOTE_PREFIX = b"> "
"""Prefix written once per open block quote at the start of every line."""

THEMATIC_BREAK = b"---"
"""All thematic breaks (``***``, ``___``, ``- - -``) are normalized to this."""

HEADING_CHAR = b"#"
EMPHASIS_CHAR = b"*"
STRIKETHROUGH_DELIMITER = b"~~"
HARD_LINE_BREAK = b"\\\n"

CODE_FENCE_CHAR = "`"
CODE_FENCE_MIN_LENGTH = 3

LIST_INDENT_WIDTH = 4
"""Columns of indentation added per list nesting level."""

BULLET_LIST_MARKERS = "-*+"
ORDERED_LIST_MARKERS = ".)"

TASK_CHECKED = b"[x] "
TASK_UNCHECKED = b"[ ] "

TABLE_DELIMITERS: dict[Alignment | None, str] = {
    None: "---",
    "left": ":---",
    "center": ":---:",
    "right": "---:",
}

# =============================================================================
# Link Escaping
# =============================================================================

MAILTO_PREFIX = "mailto:"

URL_SAFE_CHARS = ";/?:@&=+$,-_.!~*'#%"
"""Characters left untouched by destination escaping, besides alphanumerics.

Parentheses are handled separately so that balanced pairs survive.
"""

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_ENCODING = "utf-8"
DEFAULT_GFM = True
DEFAULT_VALIDATE_TREE = True
