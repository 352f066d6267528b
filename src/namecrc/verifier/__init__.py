"""CRC32 verification against checksums embedded in file names."""

from .config import NameCrcConfig, VerifierConfig
from .dispatcher import OrderedDispatcher, dispatch
from .engine import hash_job
from .models import HashJob, HashOutcome, OrderedResult
from .name_token import find_crc_in_name
from .reporter import ResultReporter, format_result

__all__ = [
    'NameCrcConfig',
    'VerifierConfig',
    'OrderedDispatcher',
    'dispatch',
    'hash_job',
    'HashJob',
    'HashOutcome',
    'OrderedResult',
    'find_crc_in_name',
    'ResultReporter',
    'format_result',
]
