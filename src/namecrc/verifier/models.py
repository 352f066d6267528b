"""Value types passed between the verifier's components."""

from dataclasses import dataclass
from typing import Optional

from .errors import classify_error

STDIN_DISPLAY_NAME = "-"


@dataclass(frozen=True)
class HashJob:
    """A single file (or standard input) awaiting its checksum.

    Attributes:
        index: Position of the job in the caller's input order
        path: Path as given by the caller, or None for standard input
    """
    index: int
    path: Optional[str]

    @classmethod
    def for_stdin(cls) -> "HashJob":
        return cls(index=0, path=None)

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    @property
    def display_name(self) -> str:
        return STDIN_DISPLAY_NAME if self.path is None else self.path


@dataclass(frozen=True)
class HashOutcome:
    """Either a checksum or the reason one could not be computed.

    Attributes:
        crc: Unsigned 32-bit CRC32, None on failure
        error: Diagnostic text, None on success
        error_category: Category from classify_error, None on success
    """
    crc: Optional[int] = None
    error: Optional[str] = None
    error_category: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.crc is None) == (self.error is None):
            raise ValueError("HashOutcome needs exactly one of crc or error")

    @classmethod
    def success(cls, crc: int) -> "HashOutcome":
        return cls(crc=crc)

    @classmethod
    def failure(cls, exception: Exception) -> "HashOutcome":
        return cls(error=str(exception), error_category=classify_error(exception))

    @property
    def ok(self) -> bool:
        return self.crc is not None


@dataclass(frozen=True)
class OrderedResult:
    """A job paired with its outcome, emitted in the job's input position."""
    job: HashJob
    outcome: HashOutcome
