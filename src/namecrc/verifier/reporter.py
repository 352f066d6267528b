"""Result reporting.

One line per job on stdout::

    <CRC>[\\t<path>][\\t<verdict>]

where CRC is eight uppercase hex digits (``????????`` when hashing
failed) and verdict is ``OK``, ``BAD <computed> != <embedded>`` or
``ERR <message>``. The path column only appears when more than one job
is reported; the verdict only when there is something to say.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from namecrc.common import format_crc32
from .models import HashJob, HashOutcome, OrderedResult
from .name_token import find_crc_in_name

logger = logging.getLogger(__name__)

FAILED_CRC_PLACEHOLDER = "?" * 8


class Verdict(str, Enum):
    OK = "OK"
    BAD = "BAD"
    ERR = "ERR"
    NONE = ""


def embedded_crc(job: HashJob) -> Optional[int]:
    """Checksum token in the job's path; standard input has none."""
    if job.is_stdin:
        return None
    return find_crc_in_name(job.path)


def classify(outcome: HashOutcome, name_crc: Optional[int]) -> Verdict:
    if not outcome.ok:
        return Verdict.ERR
    if name_crc is None:
        return Verdict.NONE
    return Verdict.OK if name_crc == outcome.crc else Verdict.BAD


def format_line(
    job: HashJob,
    outcome: HashOutcome,
    verdict: Verdict,
    name_crc: Optional[int],
    show_path: bool,
) -> str:
    """Render one report line for an already classified result."""
    fields = [format_crc32(outcome.crc) if outcome.ok else FAILED_CRC_PLACEHOLDER]

    if show_path:
        fields.append(job.display_name)

    if verdict is Verdict.ERR:
        fields.append(f"ERR {outcome.error}")
    elif verdict is Verdict.BAD:
        fields.append(f"BAD {format_crc32(outcome.crc)} != {format_crc32(name_crc)}")
    elif verdict is Verdict.OK:
        fields.append(verdict.value)

    return "\t".join(fields)


def format_result(job: HashJob, outcome: HashOutcome, show_path: bool) -> str:
    """Render one report line (without trailing newline)."""
    name_crc = embedded_crc(job)
    return format_line(job, outcome, classify(outcome, name_crc), name_crc, show_path)


@dataclass
class ReportSummary:
    """Verdict tallies for one invocation."""
    total: int = 0
    ok: int = 0
    bad: int = 0
    errors: int = 0
    unchecked: int = 0

    @property
    def all_passed(self) -> bool:
        return self.bad == 0 and self.errors == 0

    def record(self, verdict: Verdict) -> None:
        self.total += 1
        if verdict is Verdict.OK:
            self.ok += 1
        elif verdict is Verdict.BAD:
            self.bad += 1
        elif verdict is Verdict.ERR:
            self.errors += 1
        else:
            self.unchecked += 1


class ResultReporter:
    """Writes report lines to a stream and keeps a running summary."""

    def __init__(self, stream: TextIO, show_path: bool):
        self.stream = stream
        self.show_path = show_path
        self.summary = ReportSummary()

    def report(self, result: OrderedResult) -> None:
        job, outcome = result.job, result.outcome
        name_crc = embedded_crc(job)
        verdict = classify(outcome, name_crc)
        self.summary.record(verdict)

        if verdict is Verdict.BAD:
            logger.info(f"Checksum mismatch: {job.display_name}")

        self.stream.write(format_line(job, outcome, verdict, name_crc, self.show_path) + "\n")
        # Flush per line so results appear as soon as they are in order
        self.stream.flush()

    def log_summary(self) -> None:
        s = self.summary
        logger.info(
            f"Verification complete: {{'total': {s.total}, 'ok': {s.ok}, 'bad': {s.bad}, "
            f"'errors': {s.errors}, 'unchecked': {s.unchecked}}}"
        )
