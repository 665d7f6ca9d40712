"""Run-phase tracking for analytics invocations.

Every run walks Idle -> Fetching -> Computing -> Persisting and ends in
Succeeded or Failed. Nothing is carried over between runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from uuid import UUID

from spendsight.domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)


class RunPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    COMPUTING = "computing"
    PERSISTING = "persisting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS: dict[RunPhase, frozenset[RunPhase]] = {
    RunPhase.IDLE: frozenset({RunPhase.FETCHING}),
    RunPhase.FETCHING: frozenset({RunPhase.COMPUTING, RunPhase.FAILED}),
    RunPhase.COMPUTING: frozenset(
        {RunPhase.PERSISTING, RunPhase.SUCCEEDED, RunPhase.FAILED},
    ),
    RunPhase.PERSISTING: frozenset({RunPhase.SUCCEEDED, RunPhase.FAILED}),
    RunPhase.SUCCEEDED: frozenset(),
    RunPhase.FAILED: frozenset(),
}


class AnalyticsRun:
    """State of a single analytics invocation."""

    def __init__(self, name: str, user_id: UUID):
        self._name = name
        self._user_id = user_id
        self._phase = RunPhase.IDLE
        self._history: list[RunPhase] = [RunPhase.IDLE]

    @property
    def name(self) -> str:
        return self._name

    @property
    def current_phase(self) -> RunPhase:
        return self._phase

    @property
    def history(self) -> list[RunPhase]:
        return list(self._history)

    @contextmanager
    def phase(self, phase: RunPhase) -> Iterator[None]:
        """Enter a phase; any exception inside fails the run and propagates."""
        self._transition(phase)
        try:
            yield
        except DomainException as e:
            e.details.setdefault("run", self._name)
            e.details.setdefault("phase", phase.value)
            self._fail(e)
            raise
        except Exception as e:
            self._fail(e)
            raise

    def succeed(self, count: int) -> None:
        self._transition(RunPhase.SUCCEEDED)
        logger.info(
            "Run %s for user %s succeeded with %d item(s)",
            self._name,
            self._user_id,
            count,
        )

    def _fail(self, error: Exception) -> None:
        failed_in = self._phase
        self._transition(RunPhase.FAILED)
        logger.warning(
            "Run %s for user %s failed while %s: %s",
            self._name,
            self._user_id,
            failed_in.value,
            error,
        )

    def _transition(self, target: RunPhase) -> None:
        if target not in _TRANSITIONS[self._phase]:
            msg = f"Invalid run transition {self._phase.value} -> {target.value}"
            raise RuntimeError(msg)
        logger.debug("Run %s: %s -> %s", self._name, self._phase.value, target.value)
        self._phase = target
        self._history.append(target)
