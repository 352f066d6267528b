"""Error classes for the verifier."""

from namecrc.common import NameCrcError, MappingError


class VerifierError(NameCrcError):
    """Base error for verifier operations."""
    pass


class DispatchError(VerifierError):
    """A dispatched job never produced an outcome.

    Indicates a broken handoff inside the worker pool; never recoverable.
    """
    pass


class ChannelClosedError(DispatchError):
    """A job's completion channel was closed without receiving an outcome."""
    pass


def classify_error(exception: Exception) -> str:
    """
    Classify a per-file failure into an error category.

    Args:
        exception: The exception to classify

    Returns:
        Error category string: 'permission', 'not_found', 'mapping',
        'io', or 'unknown'
    """
    if isinstance(exception, MappingError):
        return 'mapping'
    elif isinstance(exception, PermissionError):
        return 'permission'
    elif isinstance(exception, FileNotFoundError):
        return 'not_found'
    elif isinstance(exception, OSError):
        return 'io'
    else:
        return 'unknown'
