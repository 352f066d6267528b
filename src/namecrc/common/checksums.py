"""Checksum utilities for file integrity verification.

Files are checksummed through a read-only memory mapping rather than
buffered reads: the bytes are never copied into Python objects and the
kernel pages them in on demand.
"""

import mmap
import os
import stat
import sys
import zlib
from pathlib import Path
from typing import BinaryIO

from .errors import MappingError

# CRC32 of zero bytes under the zlib parameterisation
EMPTY_CRC32 = 0x00000000


def _advise_sequential(mapped: mmap.mmap) -> None:
    """Hint that the mapping is read once, front to back (POSIX only)."""
    advice = getattr(mmap, "MADV_SEQUENTIAL", None)
    if advice is None or not hasattr(mapped, "madvise"):
        return
    mapped.madvise(advice)


def compute_crc32_mapped(source: BinaryIO) -> int:
    """
    Compute CRC32 checksum of an open file via a read-only memory mapping.

    Args:
        source: Open binary file object backed by a regular file

    Returns:
        CRC32 checksum as unsigned 32-bit integer

    Raises:
        MappingError: If the source is not a regular file or cannot be mapped
        OSError: If the source cannot be inspected
    """
    fd = source.fileno()
    info = os.fstat(fd)

    # Pipes and terminals report size 0; mapping them would pass for an empty file
    if not stat.S_ISREG(info.st_mode):
        raise MappingError(
            "cannot memory-map a non-regular file",
            name=getattr(source, "name", None),
        )

    # mmap refuses zero-length mappings
    if info.st_size == 0:
        return EMPTY_CRC32

    try:
        mapped = mmap.mmap(fd, 0, access=mmap.ACCESS_READ)
    except (ValueError, OSError) as e:
        raise MappingError(
            f"cannot memory-map file: {e}",
            name=getattr(source, "name", None),
        ) from e

    with mapped:
        _advise_sequential(mapped)
        crc = zlib.crc32(mapped)

    # Return as unsigned 32-bit integer
    return crc & 0xFFFFFFFF


def compute_crc32(file_path: Path | str) -> int:
    """
    Compute CRC32 checksum of entire file.

    Args:
        file_path: Path to the file

    Returns:
        CRC32 checksum as unsigned 32-bit integer

    Raises:
        OSError: If file cannot be opened
        MappingError: If file cannot be mapped into memory
    """
    with open(file_path, 'rb') as f:
        return compute_crc32_mapped(f)


def compute_crc32_stdin() -> int:
    """Compute CRC32 checksum of standard input.

    Standard input must be redirected from a regular file; a pipe or a
    terminal raises MappingError.
    """
    return compute_crc32_mapped(sys.stdin.buffer)


def format_crc32(crc: int) -> str:
    """Format a CRC32 value as 8 uppercase hex digits."""
    return f"{crc:08X}"
