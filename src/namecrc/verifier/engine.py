"""Turns a HashJob into a HashOutcome."""

import logging

from namecrc.common import NameCrcError, compute_crc32, compute_crc32_stdin
from .models import HashJob, HashOutcome

logger = logging.getLogger(__name__)


def hash_job(job: HashJob) -> HashOutcome:
    """Checksum one job, capturing per-file I/O failures in the outcome.

    Anything other than an I/O failure propagates: it is a defect, not
    a property of the file.
    """
    try:
        if job.is_stdin:
            crc = compute_crc32_stdin()
        else:
            crc = compute_crc32(job.path)
    except (OSError, NameCrcError) as e:
        outcome = HashOutcome.failure(e)
        logger.info(
            f"Failed to hash {job.display_name}: "
            f"{{'category': {outcome.error_category!r}, 'error': {outcome.error!r}}}"
        )
        return outcome

    logger.debug(f"Hashed {job.display_name}: {crc:08X}")
    return HashOutcome.success(crc)
