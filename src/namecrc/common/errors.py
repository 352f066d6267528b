"""Base error definitions for namecrc packages."""

from typing import Any, Dict


class NameCrcError(Exception):
    """Base exception for all namecrc errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class FileProcessingError(NameCrcError):
    """Base exception for file processing errors."""
    pass


class MappingError(FileProcessingError):
    """File contents could not be mapped into memory."""
    pass
