#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/escape.py
"""Escaping helpers for canonical Markdown output.

Link labels are HTML-escaped, link destinations are percent-escaped, and
code span content is given a delimiter long enough to survive re-parsing.
"""

from __future__ import annotations

import html
from urllib.parse import quote

from mdcanon.constants import CODE_FENCE_CHAR, URL_SAFE_CHARS


def longest_run(text: str, char: str) -> int:
    """Return the length of the longest run of ``char`` in ``text``.

    Examples
    --------
        >>> longest_run("a `` b ``` c", "`")
        3

    """
    max_consecutive = 0
    current_consecutive = 0

    for c in text:
        if c == char:
            current_consecutive += 1
            max_consecutive = max(max_consecutive, current_consecutive)
        else:
            current_consecutive = 0

    return max_consecutive


def escape_html(text: str) -> str:
    """Escape HTML special characters in a link label.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Text with ``&``, ``<``, ``>`` and ``"`` replaced by entities

    Examples
    --------
        >>> escape_html('a <b> & "c"')
        'a &lt;b&gt; &amp; &quot;c&quot;'

    Notes
    -----
    Apostrophes are left alone so ordinary prose labels stay readable.

    """
    return html.escape(text, quote=False).replace('"', "&quot;")


def _parens_balanced(text: str) -> bool:
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def escape_url(url: str) -> str:
    """Percent-escape a link destination for use inside ``(...)``.

    Characters that are valid in URLs, including existing ``%XX`` escapes,
    are kept. Spaces, angle brackets, backslashes, control characters and
    non-ASCII characters are percent-encoded (non-ASCII as UTF-8).
    Parentheses are kept when balanced and encoded otherwise, since an
    unbalanced parenthesis would end the destination early.

    Parameters
    ----------
    url : str
        Destination to escape

    Returns
    -------
    str
        Escaped destination

    Examples
    --------
        >>> escape_url("my page.md")
        'my%20page.md'
        >>> escape_url("wiki/Foo_(bar)")
        'wiki/Foo_(bar)'
        >>> escape_url("a)b")
        'a%29b'

    """
    if _parens_balanced(url):
        return quote(url, safe=URL_SAFE_CHARS + "()")
    return quote(url, safe=URL_SAFE_CHARS)


def escape_inline_code(code: str, delimiter: str = CODE_FENCE_CHAR) -> tuple[str, str]:
    """Pad inline code and determine the delimiter that encloses it.

    Handles cases where code contains the delimiter character by using a
    delimiter one longer than the longest run inside the code. Code that
    starts or ends with the delimiter, or that starts and ends with a space
    without being all spaces, is padded with one space on each side so the
    content is read back unchanged. Empty code becomes a single space.

    Parameters
    ----------
    code : str
        Code content
    delimiter : str, default = '`'
        Delimiter character

    Returns
    -------
    tuple[str, str]
        (padded_code, delimiter_to_use)

    Examples
    --------
        >>> escape_inline_code("simple code")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick")
        ('code with ` backtick', '``')
        >>> escape_inline_code("`tick")
        (' `tick ', '``')

    """
    if not code:
        # A bare delimiter pair is not a code span; a lone space is.
        return " ", delimiter

    delimiter_count = longest_run(code, delimiter) + 1
    fence = delimiter * delimiter_count

    needs_padding = code.startswith(delimiter) or code.endswith(delimiter)
    if not needs_padding and code.startswith(" ") and code.endswith(" ") and code.strip(" "):
        needs_padding = True

    if needs_padding:
        code = f" {code} "

    return code, fence
