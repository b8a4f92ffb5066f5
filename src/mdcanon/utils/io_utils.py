#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/io_utils.py
"""I/O utilities for handling output destinations.

Canonical output is bytes. Binary streams receive it directly while the
canonicalizer runs; file paths and text streams receive the finished
document through :func:`write_content`.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from mdcanon.constants import DEFAULT_ENCODING

OutputTarget = Union[str, Path, IO[bytes], IO[str]]


def is_binary_stream(output: object) -> bool:
    """Return True if a file-like ``output`` expects bytes.

    Detection checks concrete in-memory types first, then the :mod:`io`
    base classes, then a ``mode`` attribute. Objects that reveal nothing
    are assumed to accept bytes.

    Examples
    --------
        >>> is_binary_stream(BytesIO())
        True
        >>> is_binary_stream(StringIO())
        False

    """
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    if hasattr(output, "mode"):
        mode = getattr(output, "mode", "")
        return isinstance(mode, str) and "b" in mode
    return True


def write_content(content: bytes, output: OutputTarget, encoding: str = DEFAULT_ENCODING) -> None:
    """Write rendered bytes to an output destination.

    Parameters
    ----------
    content : bytes
        Rendered document
    output : str, Path, IO[bytes] or IO[str]
        Output destination. Paths are written in binary mode; text streams
        receive ``content`` decoded with ``encoding``.
    encoding : str, default = 'utf-8'
        Encoding used for text streams

    Raises
    ------
    TypeError
        If the output type is not supported

    Examples
    --------
        >>> buffer = StringIO()
        >>> write_content(b"# Title\\n", buffer)
        >>> buffer.getvalue()
        '# Title\\n'

    """
    if isinstance(output, (str, Path)):
        Path(output).write_bytes(content)
        return

    if hasattr(output, "write"):
        if is_binary_stream(output):
            cast(IO[bytes], output).write(content)
        else:
            cast(IO[str], output).write(content.decode(encoding, errors="surrogateescape"))
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["OutputTarget", "is_binary_stream", "write_content"]
