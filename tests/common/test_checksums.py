"""Tests for checksum utilities."""

import mmap
import os
import sys
import types
import zlib
from unittest.mock import Mock

import pytest

from namecrc.common import MappingError
from namecrc.common import checksums
from namecrc.common.checksums import (
    EMPTY_CRC32,
    compute_crc32,
    compute_crc32_mapped,
    compute_crc32_stdin,
    format_crc32,
)


class TestComputeCRC32:
    """Tests for compute_crc32 function."""

    def test_crc32_check_value(self, tmp_path):
        """Test the standard CRC-32 check value for "123456789"."""
        test_file = tmp_path / "check.txt"
        test_file.write_bytes(b"123456789")

        assert compute_crc32(test_file) == 0xCBF43926

    def test_crc32_matches_zlib(self, tmp_path):
        """Test that the mapped checksum equals zlib over the same bytes."""
        content = os.urandom(4096) + b"tail"
        test_file = tmp_path / "random.bin"
        test_file.write_bytes(content)

        assert compute_crc32(test_file) == zlib.crc32(content) & 0xFFFFFFFF

    def test_crc32_different_files(self, tmp_path):
        """Test that different files have different CRC32 values."""
        file1 = tmp_path / "file1.txt"
        file2 = tmp_path / "file2.txt"

        file1.write_text("Content A", encoding='utf-8')
        file2.write_text("Content B", encoding='utf-8')

        assert compute_crc32(file1) != compute_crc32(file2)

    def test_crc32_large_file(self, tmp_path):
        """Test CRC32 calculation on a multi-page file."""
        content = b'X' * (1024 * 1024 + 17)
        large_file = tmp_path / "large.bin"
        large_file.write_bytes(content)

        assert compute_crc32(large_file) == zlib.crc32(content)

    def test_crc32_empty_file(self, tmp_path):
        """Test that an empty file yields the empty-input CRC32 of zero."""
        empty_file = tmp_path / "empty.txt"
        empty_file.write_bytes(b"")

        assert compute_crc32(empty_file) == EMPTY_CRC32
        assert EMPTY_CRC32 == zlib.crc32(b"") == 0

    def test_crc32_accepts_string_path(self, tmp_path):
        """Test that a plain string path works like a Path."""
        test_file = tmp_path / "file.txt"
        test_file.write_bytes(b"abc")

        assert compute_crc32(str(test_file)) == zlib.crc32(b"abc")

    def test_crc32_nonexistent_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            compute_crc32(tmp_path / "does_not_exist.txt")

    def test_crc32_does_not_modify_file(self, tmp_path):
        """Test that hashing leaves the file untouched."""
        test_file = tmp_path / "file.txt"
        test_file.write_bytes(b"unchanged")
        mtime = test_file.stat().st_mtime_ns

        compute_crc32(test_file)

        assert test_file.read_bytes() == b"unchanged"
        assert test_file.stat().st_mtime_ns == mtime


class TestComputeCRC32Mapped:
    """Tests for mapping behaviour."""

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX pipe semantics")
    def test_pipe_raises_mapping_error(self):
        """Test that a pipe is refused instead of hashed as empty."""
        read_fd, write_fd = os.pipe()
        os.write(write_fd, b"data")
        os.close(write_fd)

        with os.fdopen(read_fd, 'rb') as pipe:
            with pytest.raises(MappingError):
                compute_crc32_mapped(pipe)

    def test_mmap_failure_becomes_mapping_error(self, tmp_path, monkeypatch):
        """Test that errors raised by mmap are converted to MappingError."""
        test_file = tmp_path / "file.bin"
        test_file.write_bytes(b"content")

        def failing_mmap(*args, **kwargs):
            raise OSError("mapping refused")

        monkeypatch.setattr(checksums.mmap, "mmap", failing_mmap)

        with pytest.raises(MappingError) as exc_info:
            compute_crc32(test_file)

        assert "mapping refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.skipif(not hasattr(mmap, "MADV_SEQUENTIAL"), reason="madvise not available")
    def test_sequential_advice_given(self):
        """Test that the mapping is advised for sequential access."""
        mapped = Mock()

        checksums._advise_sequential(mapped)

        mapped.madvise.assert_called_once_with(mmap.MADV_SEQUENTIAL)

    def test_works_without_madvise(self, tmp_path, monkeypatch):
        """Test hashing on platforms without MADV_SEQUENTIAL."""
        monkeypatch.delattr(checksums.mmap, "MADV_SEQUENTIAL", raising=False)
        test_file = tmp_path / "file.bin"
        test_file.write_bytes(b"portable")

        assert compute_crc32(test_file) == zlib.crc32(b"portable")


class TestComputeCRC32Stdin:
    """Tests for compute_crc32_stdin function."""

    def test_stdin_redirected_from_file(self, tmp_path, monkeypatch):
        """Test hashing standard input redirected from a regular file."""
        test_file = tmp_path / "input.bin"
        test_file.write_bytes(b"from stdin")

        with open(test_file, 'rb') as f:
            monkeypatch.setattr(sys, "stdin", types.SimpleNamespace(buffer=f))
            assert compute_crc32_stdin() == zlib.crc32(b"from stdin")


class TestFormatCRC32:
    """Tests for format_crc32."""

    def test_crc32_hex_uppercase(self, tmp_path):
        """Test that hex output is 8 uppercase digits."""
        test_file = tmp_path / "check.txt"
        test_file.write_bytes(b"123456789")

        assert format_crc32(compute_crc32(test_file)) == "CBF43926"

    def test_crc32_hex_empty_file(self, tmp_path):
        """Test hex output for an empty file."""
        empty_file = tmp_path / "empty.txt"
        empty_file.write_bytes(b"")

        assert format_crc32(compute_crc32(empty_file)) == "00000000"

    def test_format_pads_leading_zeros(self):
        """Test that small values are zero-padded to 8 digits."""
        assert format_crc32(0xABC) == "00000ABC"
        assert format_crc32(0xFFFFFFFF) == "FFFFFFFF"
