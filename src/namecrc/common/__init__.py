"""Common utilities for namecrc packages."""

from .config import ConfigLoader
from .logging import setup_logging
from .logging_config import LoggingConfig
from .errors import (
    NameCrcError, FileProcessingError, MappingError
)
from .checksums import (
    compute_crc32, compute_crc32_mapped, compute_crc32_stdin,
    format_crc32,
)

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'NameCrcError',
    'FileProcessingError',
    'MappingError',
    'compute_crc32',
    'compute_crc32_mapped',
    'compute_crc32_stdin',
    'format_crc32',
]
