#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_io_utils.py
"""Unit tests for output handling utilities."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from mdcanon.utils.io_utils import is_binary_stream, write_content


class _ModeOnly:
    def __init__(self, mode):
        self.mode = mode

    def write(self, data):
        pass


@pytest.mark.unit
class TestIsBinaryStream:
    """Tests for is_binary_stream()."""

    def test_in_memory_streams(self):
        """Test BytesIO and StringIO detection."""
        assert is_binary_stream(BytesIO())
        assert not is_binary_stream(StringIO())

    def test_open_files(self, tmp_path):
        """Test detection of real file objects."""
        with open(tmp_path / "b.md", "wb") as f:
            assert is_binary_stream(f)
        with open(tmp_path / "t.md", "w", encoding="utf-8") as f:
            assert not is_binary_stream(f)

    def test_mode_attribute(self):
        """Test detection by mode string."""
        assert is_binary_stream(_ModeOnly("wb"))
        assert not is_binary_stream(_ModeOnly("w"))

    def test_unknown_defaults_to_binary(self):
        """Test that objects revealing nothing are treated as binary."""
        assert is_binary_stream(object())


@pytest.mark.unit
class TestWriteContent:
    """Tests for write_content()."""

    def test_path(self, tmp_path):
        """Test writing to str and Path destinations."""
        write_content(b"# a\n", tmp_path / "a.md")
        write_content(b"# b\n", str(tmp_path / "b.md"))
        assert (tmp_path / "a.md").read_bytes() == b"# a\n"
        assert Path(tmp_path / "b.md").read_bytes() == b"# b\n"

    def test_binary_stream(self):
        """Test writing bytes to a binary stream."""
        buffer = BytesIO()
        write_content(b"x\n", buffer)
        assert buffer.getvalue() == b"x\n"

    def test_text_stream_decoded(self):
        """Test that text streams receive decoded text."""
        buffer = StringIO()
        write_content("café\n".encode("latin-1"), buffer, encoding="latin-1")
        assert buffer.getvalue() == "café\n"

    def test_unsupported_output(self):
        """Test that unsupported destinations raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported output type"):
            write_content(b"x", 42)
