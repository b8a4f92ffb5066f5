#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/_line_writer.py
"""Line-oriented byte writer with container prefixes.

Block quotes and list items prefix every line they contain. The writer keeps
a stack of :class:`ContainerFrame` objects, one per open container, and
writes their combined prefix lazily when a line starts. An item frame uses
its marker (``"- "``, ``"1. "``) on its first line and plain indentation of
the same width afterwards.

Lines are assembled in a buffer and handed to the sink one at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import IO

from mdcanon.exceptions import OutputWriteError

logger = logging.getLogger(__name__)


@dataclass
class ContainerFrame:
    """Prefix state of one open block quote or list item.

    Parameters
    ----------
    first_line : bytes
        Prefix for the first line written inside the container
    continuation : bytes
        Prefix for every later line
    pending : bool, default True
        True until the first line has been started

    """

    first_line: bytes
    continuation: bytes
    pending: bool = True

    @property
    def width(self) -> int:
        return len(self.continuation)

    def widen(self, width: int) -> None:
        """Pad both prefixes with spaces up to ``width`` columns.

        Only possible while the first line has not been written yet.
        """
        if not self.pending:
            raise RuntimeError("Cannot widen a container whose first line was already written")
        extra = b" " * max(0, width - len(self.first_line))
        self.first_line += extra
        self.continuation += extra


class LineWriter:
    """Write bytes line by line, prefixing each line with the open containers.

    Parameters
    ----------
    sink : IO[bytes]
        Binary destination

    Attributes
    ----------
    bytes_written : int
        Bytes accepted by the sink so far

    """

    def __init__(self, sink: IO[bytes]):
        self._sink = sink
        self._frames: list[ContainerFrame] = []
        self._line = bytearray()
        self._at_line_start = True
        self._has_output = False
        self._last_line_blank = False
        self.bytes_written = 0

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def push(self, first_line: bytes, continuation: bytes | None = None) -> ContainerFrame:
        """Open a container whose lines carry the given prefixes."""
        frame = ContainerFrame(first_line, first_line if continuation is None else continuation)
        self._frames.append(frame)
        return frame

    def pop(self) -> ContainerFrame:
        """Close the innermost container."""
        return self._frames.pop()

    @property
    def depth(self) -> int:
        return len(self._frames)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write(self, data: bytes) -> None:
        """Write ``data``; each newline in it ends the current line.

        A carriage return directly before a newline is dropped.
        """
        lines = data.split(b"\n")
        last = len(lines) - 1
        for i, chunk in enumerate(lines):
            if i < last and chunk.endswith(b"\r"):
                chunk = chunk[:-1]
            if chunk:
                if self._at_line_start:
                    self._line += self._take_prefix()
                    self._at_line_start = False
                self._line += chunk
            if i < last:
                self._end_line()

    def newline(self) -> None:
        """End the current line, even if it is empty."""
        self._end_line()

    def ensure_newline(self) -> None:
        """End the current line unless nothing has been written on it."""
        if not self._at_line_start:
            self._end_line()

    def blank_line(self) -> None:
        """Separate what follows from what precedes with exactly one blank line.

        Nothing is written at the very start of the output, after a line that
        is already blank, or while the first line of a container is still
        unwritten.
        """
        if not self._has_output and self._at_line_start:
            return
        self.ensure_newline()
        if self._last_line_blank or any(frame.pending for frame in self._frames):
            return
        self._end_line()

    def flush(self) -> None:
        """Hand any partial line to the sink."""
        if self._line:
            self._emit(bytes(self._line))
            self._line.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _take_prefix(self) -> bytes:
        prefix = bytearray()
        for frame in self._frames:
            if frame.pending:
                prefix += frame.first_line
                frame.pending = False
            else:
                prefix += frame.continuation
        return bytes(prefix)

    def _end_line(self) -> None:
        if self._at_line_start:
            # Empty line: the prefix alone, without trailing spaces. A line
            # that opens a container still counts as content.
            opens_container = any(frame.pending and frame.first_line.strip() for frame in self._frames)
            self._line += self._take_prefix().rstrip(b" ")
            self._last_line_blank = not opens_container
        else:
            self._last_line_blank = False
        self._line += b"\n"
        self._emit(bytes(self._line))
        self._line.clear()
        self._at_line_start = True
        self._has_output = True

    def _emit(self, data: bytes) -> None:
        try:
            self._sink.write(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Output sink rejected write after {self.bytes_written} bytes: {e}")
            raise OutputWriteError(bytes_written=self.bytes_written, original_error=e) from e
        self.bytes_written += len(data)
