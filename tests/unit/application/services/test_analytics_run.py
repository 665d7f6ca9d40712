"""Tests for AnalyticsRun phase tracking."""

from uuid import uuid4

import pytest

from spendsight.application.services import AnalyticsRun, RunPhase
from spendsight.domain.shared.exceptions import DataAccessError


@pytest.fixture
def run() -> AnalyticsRun:
    return AnalyticsRun("detect_recurring_payments", uuid4())


class TestAnalyticsRun:
    def test_full_successful_run(self, run):
        with run.phase(RunPhase.FETCHING):
            pass
        with run.phase(RunPhase.COMPUTING):
            pass
        with run.phase(RunPhase.PERSISTING):
            pass
        run.succeed(count=3)

        assert run.current_phase is RunPhase.SUCCEEDED
        assert run.history == [
            RunPhase.IDLE,
            RunPhase.FETCHING,
            RunPhase.COMPUTING,
            RunPhase.PERSISTING,
            RunPhase.SUCCEEDED,
        ]

    def test_read_only_run_skips_persisting(self, run):
        with run.phase(RunPhase.FETCHING):
            pass
        with run.phase(RunPhase.COMPUTING):
            pass
        run.succeed(count=0)

        assert RunPhase.PERSISTING not in run.history

    def test_domain_error_fails_run_and_records_phase(self, run):
        with pytest.raises(DataAccessError) as exc_info:
            with run.phase(RunPhase.FETCHING):
                raise DataAccessError("Storage unavailable")

        assert run.current_phase is RunPhase.FAILED
        assert exc_info.value.details["phase"] == "fetching"
        assert exc_info.value.details["run"] == "detect_recurring_payments"

    def test_unexpected_error_fails_run_and_propagates(self, run):
        with run.phase(RunPhase.FETCHING):
            pass
        with pytest.raises(ZeroDivisionError):
            with run.phase(RunPhase.COMPUTING):
                _ = 1 / 0

        assert run.history[-1] is RunPhase.FAILED

    def test_phases_cannot_be_skipped(self, run):
        with pytest.raises(RuntimeError, match="idle -> persisting"):
            with run.phase(RunPhase.PERSISTING):
                pass

    def test_finished_run_cannot_restart(self, run):
        with run.phase(RunPhase.FETCHING):
            pass
        with run.phase(RunPhase.COMPUTING):
            pass
        run.succeed(count=0)

        with pytest.raises(RuntimeError):
            with run.phase(RunPhase.FETCHING):
                pass
