# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Live console view of a test run.

``ConsoleReporter`` is a tick observer. On every tick it builds a snapshot
of the tests mapping and, when the snapshot differs from the previous
one, writes the progress line followed by one status line per test:

    Tests passed: 2 of 4 (1 failed, 1 running) 50%
    PASS: say_hello
    FAIL: say_hello_to_user (Unmet equality: expected 'Hi', got 'Hello')
    WAIT (deferred): hello_again (after hello_later_test)
"""

import sys
from collections.abc import Mapping
from typing import Any, TextIO

from subtest.core.types import Outcome, OutcomeCounts, RunResult, TestStatus
from subtest.testcase import Test
from subtest.utils.terminal import terminal

Snapshot = tuple[str, ...]


def describe_failure(detail: Any) -> str:
    """Render a failure detail for display."""
    if detail is None:
        return "Unknown error"
    if isinstance(detail, BaseException):
        message = str(detail)
        name = type(detail).__name__
        return f"{name}: {message}" if message else name
    return repr(detail)


class ConsoleReporter:
    """Renders test statuses to a text stream whenever they change.

    Args:
        stream: Where to write; defaults to stdout at write time
        quiet: Only print the final summary
    """

    def __init__(self, stream: TextIO | None = None, quiet: bool = False):
        self.stream = stream
        self.quiet = quiet
        self._last_snapshot: Snapshot | None = None

    def __call__(self, tests: Mapping[str, Test]) -> None:
        snapshot = self._snapshot(tests)
        if snapshot == self._last_snapshot:
            return
        self._last_snapshot = snapshot

        if not self.quiet:
            self._write(self.render(tests))

    def _snapshot(self, tests: Mapping[str, Test]) -> Snapshot:
        return tuple(self._render_test(name, test) for name, test in tests.items())

    def render(self, tests: Mapping[str, Test]) -> str:
        """Render the progress line and one status line per test."""
        lines = [terminal.info(terminal.format_progress(OutcomeCounts.of(tests)))]
        for name, test in tests.items():
            lines.append(self._render_test(name, test))
        return "\n".join(lines)

    def _render_test(self, name: str, test: Test) -> str:
        status = test.status
        line = f"{status.value}: {name}"
        if status is TestStatus.PASS:
            return terminal.success(line)
        if status is TestStatus.FAIL:
            detail = describe_failure(test.condition.failure_detail)
            return terminal.error(f"{line} ({detail})")
        if status is TestStatus.WAIT_DEFERRED:
            gates = [
                gate.name
                for gate in test.dependencies
                if gate.name and gate.outcome is Outcome.PENDING
            ]
            if gates:
                line = f"{line} (after {', '.join(gates)})"
        return terminal.running(line)

    def summary(self, result: RunResult) -> None:
        """Write the final summary of a finished run."""
        lines = ["", terminal.header("Test Run Summary", width=50)]
        lines.append(terminal.format_test_summary(result.counts))

        for name, detail in result.failures.items():
            lines.append(
                terminal.error(f"  FAIL: {name} ({describe_failure(detail)})")
            )

        if result.timed_out:
            pending = [
                name
                for name, test in result.tests.items()
                if test.outcome is Outcome.PENDING
            ]
            lines.append(
                terminal.warning(f"Timed out waiting for: {', '.join(pending)}")
            )
        elif result.all_passed:
            lines.append(terminal.success("All tests passed!"))
        else:
            lines.append(terminal.error("Uh oh... Something failed!"))

        lines.append(f"Finished in {result.duration:.2f} seconds")
        self._write("\n".join(lines))

    def _write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()
