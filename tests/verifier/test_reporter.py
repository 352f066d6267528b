"""Tests for result formatting and reporting."""

import io

import pytest

from namecrc.verifier import reporter as reporter_module
from namecrc.verifier.models import HashJob, HashOutcome, OrderedResult
from namecrc.verifier.name_token import find_crc_in_name
from namecrc.verifier.reporter import (
    FAILED_CRC_PLACEHOLDER,
    ReportSummary,
    ResultReporter,
    Verdict,
    classify,
    format_result,
)

NAMED_JOB = HashJob(index=0, path="movie_1A2B3C4D.mkv")
PLAIN_JOB = HashJob(index=0, path="notes.txt")


class TestFormatResult:
    """Tests for format_result."""

    def test_matching_token(self):
        """Test that a matching embedded checksum reports OK."""
        line = format_result(NAMED_JOB, HashOutcome.success(0x1A2B3C4D), show_path=False)
        assert line == "1A2B3C4D\tOK"

    def test_mismatching_token(self):
        """Test that a mismatch reports both values."""
        line = format_result(NAMED_JOB, HashOutcome.success(0), show_path=False)
        assert line == "00000000\tBAD 00000000 != 1A2B3C4D"

    def test_no_token_no_verdict(self):
        """Test that files without a token only get their checksum."""
        line = format_result(PLAIN_JOB, HashOutcome.success(0xABC), show_path=False)
        assert line == "00000ABC"

    def test_show_path(self):
        """Test the path column for multi-file runs."""
        line = format_result(NAMED_JOB, HashOutcome.success(0x1A2B3C4D), show_path=True)
        assert line == "1A2B3C4D\tmovie_1A2B3C4D.mkv\tOK"

    def test_show_path_without_verdict(self):
        """Test the path column with no verdict."""
        line = format_result(PLAIN_JOB, HashOutcome.success(0xFFFFFFFF), show_path=True)
        assert line == "FFFFFFFF\tnotes.txt"

    def test_failure(self):
        """Test that failures print the placeholder and the diagnostic."""
        outcome = HashOutcome(error="[Errno 2] No such file or directory: 'missing.bin'", error_category="not_found")
        job = HashJob(index=0, path="missing.bin")

        line = format_result(job, outcome, show_path=True)

        assert line == "????????\tmissing.bin\tERR [Errno 2] No such file or directory: 'missing.bin'"
        assert len(FAILED_CRC_PLACEHOLDER) == 8

    def test_failure_suppresses_token_check(self):
        """Test that a failed file with a token gets ERR, not BAD."""
        outcome = HashOutcome(error="boom", error_category="io")
        line = format_result(NAMED_JOB, outcome, show_path=False)
        assert line == "????????\tERR boom"

    def test_stdin_has_no_token(self):
        """Test that stdin output is the bare checksum."""
        line = format_result(HashJob.for_stdin(), HashOutcome.success(0xCBF43926), show_path=False)
        assert line == "CBF43926"


class TestClassify:
    """Tests for verdict classification."""

    @pytest.mark.parametrize("outcome,name_crc,verdict", [
        (HashOutcome.success(0x1A2B3C4D), 0x1A2B3C4D, Verdict.OK),
        (HashOutcome.success(1), 0x1A2B3C4D, Verdict.BAD),
        (HashOutcome.success(1), None, Verdict.NONE),
        (HashOutcome(error="x", error_category="io"), 0x1A2B3C4D, Verdict.ERR),
    ])
    def test_verdicts(self, outcome, name_crc, verdict):
        """Test each verdict."""
        assert classify(outcome, name_crc) is verdict


class TestResultReporter:
    """Tests for ResultReporter."""

    def test_writes_lines_in_call_order(self):
        """Test one newline-terminated line per result."""
        stream = io.StringIO()
        reporter = ResultReporter(stream, show_path=True)

        reporter.report(OrderedResult(NAMED_JOB, HashOutcome.success(0x1A2B3C4D)))
        reporter.report(OrderedResult(HashJob(index=1, path="notes.txt"), HashOutcome.success(5)))

        assert stream.getvalue() == (
            "1A2B3C4D\tmovie_1A2B3C4D.mkv\tOK\n"
            "00000005\tnotes.txt\n"
        )

    def test_summary_tallies(self):
        """Test the running summary."""
        reporter = ResultReporter(io.StringIO(), show_path=True)

        reporter.report(OrderedResult(NAMED_JOB, HashOutcome.success(0x1A2B3C4D)))
        reporter.report(OrderedResult(NAMED_JOB, HashOutcome.success(0)))
        reporter.report(OrderedResult(PLAIN_JOB, HashOutcome.success(0)))
        reporter.report(OrderedResult(PLAIN_JOB, HashOutcome(error="x", error_category="io")))
        reporter.log_summary()

        summary = reporter.summary
        assert (summary.total, summary.ok, summary.bad, summary.errors, summary.unchecked) == (4, 1, 1, 1, 1)
        assert not summary.all_passed

    def test_token_looked_up_once_per_line(self, monkeypatch):
        """Test that the verdict and its text come from a single token lookup."""
        calls = []

        def counting_find(path):
            calls.append(path)
            return find_crc_in_name(path)

        monkeypatch.setattr(reporter_module, "find_crc_in_name", counting_find)
        stream = io.StringIO()
        reporter = ResultReporter(stream, show_path=False)

        reporter.report(OrderedResult(NAMED_JOB, HashOutcome.success(0)))

        assert calls == ["movie_1A2B3C4D.mkv"]
        assert stream.getvalue() == "00000000\tBAD 00000000 != 1A2B3C4D\n"

    def test_all_passed(self):
        """Test all_passed with only OK and unchecked files."""
        summary = ReportSummary()
        summary.record(Verdict.OK)
        summary.record(Verdict.NONE)
        assert summary.all_passed
