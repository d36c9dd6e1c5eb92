# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Main orchestration logic for subtest.

A ``TestRun`` starts every test's pass condition, then ticks until all of
them have settled. A tick happens whenever a condition settles and at
least once per poll interval; each tick notifies the run's observers with
the tests mapping. The run finishes PASSED when every test passed and
FAILED when at least one failed and none is pending. There is no
cancellation: without a timeout a condition that never settles keeps the
run waiting forever.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Mapping

from subtest.core.constants import DEFAULT_POLL_INTERVAL, MIN_POLL_INTERVAL
from subtest.core.types import Outcome, OutcomeCounts, RunResult, RunState
from subtest.testcase import Test

logger = logging.getLogger(__name__)

TickObserver = Callable[[Mapping[str, Test]], None]


class TestRun:
    """Context of a single orchestrator run.

    Holds its own observer list; nothing is shared between runs.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        tests: Mapping[str, Test],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float | None = None,
    ):
        """Initialize the run.

        Args:
            tests: Tests keyed by name; keys are used as display names
            poll_interval: Maximum time between two ticks in seconds
            timeout: Optional maximum time to wait for settlement in seconds.
                None (default) waits forever.
        """
        if poll_interval < MIN_POLL_INTERVAL:
            raise ValueError(
                f"poll_interval must be at least {MIN_POLL_INTERVAL} seconds"
            )
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        self.tests = tests
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.observers: list[TickObserver] = []
        self.ticks = 0

        self._started = False
        self._start_time: float | None = None

        for name, test in self.tests.items():
            if test.name is None:
                test.name = name

    def add_observer(self, observer: TickObserver) -> None:
        """Register a callback invoked with the tests mapping on every tick.

        Observers must treat the mapping as read-only.
        """
        self.observers.append(observer)

    def start(self) -> None:
        """Run every test's pass condition.

        Must be called while the event loop is running, since deferred
        conditions schedule tasks on it.
        """
        if self._started:
            raise RuntimeError("Test run has already been started")
        self._started = True
        self._start_time = time.monotonic()

        logger.info(f"Starting {len(self.tests)} tests")
        for name, test in self.tests.items():
            logger.debug(f"Starting test {name}: {test.condition!r}")
            try:
                test.condition.run(test.invocable)
            except Exception as e:
                logger.error(f"Test {name} could not be started: {e}")
                test.condition.fail(e)

    async def wait(self) -> RunResult:
        """Tick until every condition has settled (or the timeout elapsed)."""
        if not self._started:
            raise RuntimeError("Test run has not been started")
        assert self._start_time is not None

        deadline = None if self.timeout is None else self._start_time + self.timeout

        while True:
            pending = self._pending_tests()
            counts = OutcomeCounts.of(self.tests)
            self._notify_observers()

            if not pending:
                state = RunState.FAILED if counts.failed else RunState.PASSED
                return self._finish(state, counts)

            wait_for = self.poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.warning(
                        f"Timed out after {self.timeout} seconds with "
                        f"{counts.pending} tests still pending"
                    )
                    return self._finish(RunState.TIMED_OUT, counts)
                wait_for = min(wait_for, remaining)

            await self._wait_for_any(pending, wait_for)

    async def run(self) -> RunResult:
        self.start()
        return await self.wait()

    def _pending_tests(self) -> list[Test]:
        return [
            test
            for test in self.tests.values()
            if test.condition.outcome is Outcome.PENDING
        ]

    async def _wait_for_any(self, pending: list[Test], timeout: float) -> None:
        """Sleep until one pending condition settles or ``timeout`` elapses."""
        waiters = [
            asyncio.ensure_future(test.condition.wait_settled()) for test in pending
        ]
        try:
            await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for waiter in waiters:
                waiter.cancel()

    def _notify_observers(self) -> None:
        self.ticks += 1
        for observer in self.observers:
            try:
                observer(self.tests)
            except Exception as e:
                logger.warning(f"Tick observer {observer!r} raised: {e}")

    def _finish(self, state: RunState, counts: OutcomeCounts) -> RunResult:
        duration = time.monotonic() - (self._start_time or time.monotonic())
        result = RunResult(
            state=state, tests=self.tests, counts=counts, duration=duration
        )
        logger.info(f"Test run finished: {result} in {duration:.2f} seconds")
        return result


async def run_tests(
    tests: Mapping[str, Test],
    observers: Iterable[TickObserver] = (),
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float | None = None,
) -> RunResult:
    """Run all tests and return the aggregate result.

    Args:
        tests: Tests keyed by name
        observers: Tick observers to register on the run
        poll_interval: Maximum time between two ticks in seconds
        timeout: Optional maximum time to wait in seconds

    Returns:
        RunResult whose state is PASSED, FAILED or TIMED_OUT
    """
    test_run = TestRun(tests, poll_interval=poll_interval, timeout=timeout)
    for observer in observers:
        test_run.add_observer(observer)
    return await test_run.run()


def run_tests_sync(
    tests: Mapping[str, Test],
    observers: Iterable[TickObserver] = (),
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float | None = None,
) -> RunResult:
    """Synchronous wrapper around ``run_tests`` for non-async callers.

    Runs in a fresh event loop that is closed afterwards, so it must not be
    called while another loop is running.
    """
    return asyncio.run(
        run_tests(
            tests, observers=observers, poll_interval=poll_interval, timeout=timeout
        )
    )
