"""namecrc: CRC32 file verification against checksums embedded in file names."""

__version__ = "0.1.0"
