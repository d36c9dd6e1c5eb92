# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core types for subtest orchestration."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from subtest.core.constants import (
    EXIT_FAILURE_CAP,
    EXIT_SUCCESS,
    EXIT_TIMED_OUT,
)

if TYPE_CHECKING:
    from subtest.testcase import Test


class Outcome(str, Enum):
    """Settlement state of a single pass condition.

    PENDING is the only non-final value; PASSED and FAILED never change
    once reached.
    """

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def is_settled(self) -> bool:
        return self is not Outcome.PENDING


class RunState(str, Enum):
    """Overall state of an orchestrator run.

    Distinguishes between different outcomes:
        PASSED: Every test passed
        FAILED: At least one test failed, none are pending
        TIMED_OUT: The optional run timeout elapsed with tests still pending
    """

    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class TestStatus(str, Enum):
    """Display status of a test, as shown by the console reporter."""

    __test__ = False  # not a pytest test class

    PASS = "PASS"
    FAIL = "FAIL"
    WAIT = "WAIT"
    WAIT_DEFERRED = "WAIT (deferred)"


@dataclass
class OutcomeCounts:
    """Number of tests per outcome at a given moment of a run."""

    passed: int = 0
    failed: int = 0
    pending: int = 0

    @classmethod
    def of(cls, tests: Mapping[str, "Test"]) -> "OutcomeCounts":
        """Count the current outcomes of a tests mapping."""
        counts = cls()
        for test in tests.values():
            outcome = test.condition.outcome
            if outcome is Outcome.PASSED:
                counts.passed += 1
            elif outcome is Outcome.FAILED:
                counts.failed += 1
            else:
                counts.pending += 1
        return counts

    @property
    def total(self) -> int:
        """Total number of tests (always computed from counts)."""
        return self.passed + self.failed + self.pending

    @property
    def success_rate(self) -> float:
        """Share of passed tests among all tests (0.0-100.0)."""
        if self.total > 0:
            return (self.passed / self.total) * 100
        return 0.0

    def __str__(self) -> str:
        """Concise string representation: total/passed/failed/pending."""
        return f"{self.total}/{self.passed}/{self.failed}/{self.pending}"


@dataclass
class RunResult:
    """Aggregate result of one orchestrator run.

    Individual failure details are not raised; they are read from the
    tests mapping (or through ``failures``).

    Attributes:
        state: Overall run state
        tests: The tests mapping the run was started with
        counts: Outcome counts at the moment the run finished
        duration: Wall clock duration of the run in seconds
    """

    state: RunState
    tests: Mapping[str, "Test"]
    counts: OutcomeCounts = field(default_factory=OutcomeCounts)
    duration: float = 0.0

    @property
    def passed(self) -> int:
        return self.counts.passed

    @property
    def failed(self) -> int:
        return self.counts.failed

    @property
    def pending(self) -> int:
        return self.counts.pending

    @property
    def total(self) -> int:
        return self.counts.total

    @property
    def success_rate(self) -> float:
        return self.counts.success_rate

    @property
    def all_passed(self) -> bool:
        """Check if the run finished with every test passed."""
        return self.state is RunState.PASSED

    @property
    def timed_out(self) -> bool:
        return self.state is RunState.TIMED_OUT

    @property
    def failures(self) -> dict[str, Any]:
        """Failure details of all failed tests, keyed by test name."""
        return {
            name: test.condition.failure_detail
            for name, test in self.tests.items()
            if test.condition.outcome is Outcome.FAILED
        }

    @property
    def exit_code(self) -> int:
        """Calculate the exit code for the command line.

        Exit codes:
            0: All tests passed
            1-250: Number of failed tests (capped at 250)
            255: The run timed out with tests still pending
        """
        if self.timed_out:
            return EXIT_TIMED_OUT
        if self.failed > 0:
            return min(self.failed, EXIT_FAILURE_CAP)
        return EXIT_SUCCESS

    def __str__(self) -> str:
        """Concise string: RunResult(state, total/passed/failed/pending)."""
        return f"RunResult({self.state.value}, {self.counts})"
