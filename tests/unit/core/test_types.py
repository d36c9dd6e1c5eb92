# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Tests for core types: Outcome, OutcomeCounts, RunResult.

Focus: aggregation edge cases, zero-division guards and exit code priority.
"""

from subtest.conditions import PassCondition
from subtest.core.types import Outcome, OutcomeCounts, RunResult, RunState
from subtest.testcase import Test


def _settled(outcome: Outcome) -> Test:
    test = Test(lambda: None)
    if outcome is Outcome.PASSED:
        test.condition.run(test.invocable)
    elif outcome is Outcome.FAILED:
        test.condition = PassCondition()
        test.condition.fail(ValueError("failed"))
    return test


class TestOutcome:
    """Tests for Outcome helpers."""

    def test_only_pending_is_unsettled(self) -> None:
        assert Outcome.PENDING.is_settled is False
        assert Outcome.PASSED.is_settled is True
        assert Outcome.FAILED.is_settled is True


class TestOutcomeCounts:
    """Tests for counting and success rate."""

    def test_counts_each_outcome(self) -> None:
        tests = {
            "a": _settled(Outcome.PASSED),
            "b": _settled(Outcome.PASSED),
            "c": _settled(Outcome.FAILED),
            "d": _settled(Outcome.PENDING),
        }

        counts = OutcomeCounts.of(tests)

        assert (counts.passed, counts.failed, counts.pending) == (2, 1, 1)
        assert counts.total == 4
        assert str(counts) == "4/2/1/1"

    def test_success_rate_includes_pending_in_denominator(self) -> None:
        assert OutcomeCounts(passed=1, failed=1, pending=2).success_rate == 25.0

    def test_success_rate_zero_division_guard(self) -> None:
        assert OutcomeCounts().success_rate == 0.0


class TestRunResult:
    """Tests for RunResult derived properties."""

    def test_failures_lists_only_failed_tests(self) -> None:
        tests = {"ok": _settled(Outcome.PASSED), "bad": _settled(Outcome.FAILED)}
        result = RunResult(
            state=RunState.FAILED, tests=tests, counts=OutcomeCounts.of(tests)
        )

        assert list(result.failures) == ["bad"]
        assert str(result.failures["bad"]) == "failed"

    def test_exit_code_zero_when_passed(self) -> None:
        result = RunResult(state=RunState.PASSED, tests={}, counts=OutcomeCounts(3))

        assert result.exit_code == 0

    def test_exit_code_equals_failure_count(self) -> None:
        result = RunResult(
            state=RunState.FAILED, tests={}, counts=OutcomeCounts(2, 3, 0)
        )

        assert result.exit_code == 3

    def test_exit_code_capped_at_250(self) -> None:
        result = RunResult(
            state=RunState.FAILED, tests={}, counts=OutcomeCounts(0, 300, 0)
        )

        assert result.exit_code == 250

    def test_exit_code_timed_out_takes_priority(self) -> None:
        result = RunResult(
            state=RunState.TIMED_OUT, tests={}, counts=OutcomeCounts(0, 2, 1)
        )

        assert result.exit_code == 255

    def test_str(self) -> None:
        result = RunResult(
            state=RunState.FAILED, tests={}, counts=OutcomeCounts(1, 1, 0)
        )

        assert str(result) == "RunResult(failed, 2/1/1/0)"
