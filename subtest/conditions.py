# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Pass conditions deciding whether a single test invocation passed.

A ``PassCondition`` holds the settlement state of one test. What it checks
is described by its ``kind``, one of a closed set of frozen dataclasses:

    RanWithoutFailure              the invocable returns without raising
    Equality(expected)             the return value equals ``expected``
    DeferredSettlement             the returned awaitable succeeds
    DeferredSettlementEquality     the awaitable succeeds with ``expected``
    DeferredFailure                the returned awaitable fails
    DeferredFailureEquality        the awaitable fails with ``expected``
    RaisedFailure(expected)        the invocable raises (optionally ``expected``)
    Deferred(subsequent)           a gate settles, then ``subsequent`` decides

``PassCondition.run`` dispatches on the kind with ``match``. Synchronous
kinds settle before ``run`` returns. Deferred kinds call the invocable
immediately and observe the returned awaitable from a task on the running
event loop, so nothing else has to drive them to settlement.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from subtest.core.errors import (
    DeferredError,
    DependencyError,
    TestError,
    failure_value,
    failures_match,
)
from subtest.core.types import Outcome

logger = logging.getLogger(__name__)

Invocable = Callable[[], Any]


@dataclass(frozen=True)
class RanWithoutFailure:
    pass


@dataclass(frozen=True)
class Equality:
    expected: Any


@dataclass(frozen=True)
class DeferredSettlement:
    pass


@dataclass(frozen=True)
class DeferredSettlementEquality:
    expected: Any


@dataclass(frozen=True)
class DeferredFailure:
    pass


@dataclass(frozen=True)
class DeferredFailureEquality:
    expected: Any


@dataclass(frozen=True)
class RaisedFailure:
    """Expect the invocable to raise.

    ``expected`` is either ``None`` (any exception passes), an exception
    instance (type name and message must match) or an exception class
    (``isinstance`` check).
    """

    expected: BaseException | type[BaseException] | None = None


@dataclass(frozen=True)
class Deferred:
    """Wait for the gating invocable, then let ``subsequent`` decide."""

    subsequent: "PassCondition"


ConditionKind = Union[
    RanWithoutFailure,
    Equality,
    DeferredSettlement,
    DeferredSettlementEquality,
    DeferredFailure,
    DeferredFailureEquality,
    RaisedFailure,
    Deferred,
]


def _unmet_equality(expected: Any, actual: Any) -> TestError:
    return TestError(f"Unmet equality: expected {expected!r}, got {actual!r}")


def _raised_matches(
    error: BaseException, expected: BaseException | type[BaseException] | None
) -> bool:
    if expected is None:
        return True
    if isinstance(expected, type):
        return isinstance(error, expected)
    return failures_match(error, expected)


def _deferred_error(error: BaseException) -> DeferredError:
    detail = DeferredError(failure_value(error))
    detail.__cause__ = error
    return detail


def _discard(result: Any) -> None:
    # A coroutine returned to a synchronous condition would never be awaited
    if inspect.iscoroutine(result):
        logger.debug("Closing coroutine returned to a synchronous pass condition")
        result.close()


def _cancel_requested() -> bool:
    """Whether the current task itself was asked to cancel.

    Distinguishes cancellation of the observing task from an awaited
    result that ended in ``CancelledError``.
    """
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class PassCondition:
    """Settlement state of one test.

    Everything the invocable raises, apart from ``KeyboardInterrupt``, is
    recorded as the failure detail of this condition and never escapes
    ``run``. The same holds for errors raised while comparing values.

    Attributes:
        kind: What the condition checks (see module docstring)
        outcome: PENDING until settled, then PASSED or FAILED for good
        failure_detail: Why the condition failed; None unless FAILED
        waiting: For Deferred conditions, True until the gate has settled
    """

    def __init__(self, kind: ConditionKind | None = None):
        self.kind: ConditionKind = kind if kind is not None else RanWithoutFailure()
        self.outcome = Outcome.PENDING
        self.failure_detail: Any = None
        self.waiting = isinstance(self.kind, Deferred)

        self._started = False
        self._settled = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        return f"PassCondition({self.kind!r}, outcome={self.outcome.value})"

    @property
    def is_waiting_on_gate(self) -> bool:
        """Whether this is a pending Deferred condition whose gate is unsettled."""
        return (
            isinstance(self.kind, Deferred)
            and self.waiting
            and not self.outcome.is_settled
        )

    async def wait_settled(self) -> Outcome:
        """Block until the condition has settled and return the outcome."""
        await self._settled.wait()
        return self.outcome

    def run(self, invocable: Invocable) -> None:
        """Start checking ``invocable``.

        Must be called at most once. Failures of the invocable are recorded
        in ``failure_detail``, never raised. Deferred kinds must be run
        while an event loop is running.

        Raises:
            RuntimeError: If the condition has already been run
        """
        if self._started:
            raise RuntimeError("Pass condition has already been run")
        self._started = True

        match self.kind:
            case RanWithoutFailure():
                self._run_without_failure(invocable)
            case Equality(expected=expected):
                self._run_equality(invocable, expected)
            case RaisedFailure(expected=expected):
                self._run_raised_failure(invocable, expected)
            case Deferred(subsequent=subsequent):
                loop = self._running_loop()
                if loop is not None:
                    self._task = loop.create_task(
                        self._follow_gate(invocable, subsequent)
                    )
            case _:
                self._run_deferred(invocable)

    # Settlement

    def _pass(self) -> None:
        self._settle(Outcome.PASSED)

    def fail(self, detail: Any) -> None:
        """Settle as failed with ``detail``; ignored when already settled."""
        self._settle(Outcome.FAILED, detail)

    def _settle(self, outcome: Outcome, detail: Any = None) -> None:
        if self.outcome.is_settled:
            logger.debug(f"Ignoring {outcome.value} for already settled {self!r}")
            return

        self.outcome = outcome
        self.failure_detail = detail if outcome is Outcome.FAILED else None
        if outcome is Outcome.FAILED:
            logger.debug(f"{self.kind!r} failed: {detail!r}")
        self._settled.set()

    # Synchronous kinds

    def _run_without_failure(self, invocable: Invocable) -> None:
        try:
            _discard(invocable())
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            self.fail(e)
        else:
            self._pass()

    def _run_equality(self, invocable: Invocable, expected: Any) -> None:
        try:
            actual = invocable()
            equal = bool(actual == expected)
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            self.fail(e)
            return

        if equal:
            self._pass()
        else:
            _discard(actual)
            self.fail(_unmet_equality(expected, actual))

    def _run_raised_failure(
        self,
        invocable: Invocable,
        expected: BaseException | type[BaseException] | None,
    ) -> None:
        try:
            _discard(invocable())
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            raised = e
        else:
            self.fail(TestError("Code ran without raising an error"))
            return

        try:
            matches = _raised_matches(raised, expected)
        except Exception as e:
            self.fail(e)
            return

        if matches:
            self._pass()
        else:
            self.fail(raised)

    # Deferred kinds

    def _running_loop(self) -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            self.fail(
                TestError("Deferred pass conditions must run inside an event loop")
            )
            return None

    def _run_deferred(self, invocable: Invocable) -> None:
        try:
            result = invocable()
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            self.fail(e)
            return

        if not inspect.isawaitable(result):
            self.fail(
                TestError(
                    f"Expected an awaitable result, got {type(result).__name__}"
                )
            )
            return

        loop = self._running_loop()
        if loop is None:
            _discard(result)
            return
        self._task = loop.create_task(self._observe(result))

    async def _observe(self, awaitable: Awaitable[Any]) -> None:
        try:
            value = await awaitable
        except asyncio.CancelledError as e:
            if _cancel_requested():
                raise
            self._settle_deferred(self._on_deferred_failure, e)
        except Exception as e:
            self._settle_deferred(self._on_deferred_failure, e)
        else:
            self._settle_deferred(self._on_deferred_success, value)

    def _settle_deferred(self, handler: Callable[[Any], None], value: Any) -> None:
        # Comparisons run user code (__eq__) and may raise
        try:
            handler(value)
        except Exception as e:
            self.fail(e)

    def _on_deferred_success(self, value: Any) -> None:
        match self.kind:
            case DeferredSettlement():
                self._pass()
            case DeferredSettlementEquality(expected=expected):
                if value == expected:
                    self._pass()
                else:
                    self.fail(_unmet_equality(expected, value))
            case DeferredFailure() | DeferredFailureEquality():
                self.fail(TestError("No deferred failure was raised"))

    def _on_deferred_failure(self, error: BaseException) -> None:
        match self.kind:
            case DeferredSettlement() | DeferredSettlementEquality():
                self.fail(_deferred_error(error))
            case DeferredFailure():
                self._pass()
            case DeferredFailureEquality(expected=expected):
                actual = failure_value(error)
                if failures_match(actual, expected):
                    self._pass()
                else:
                    self.fail(_unmet_equality(expected, actual))

    async def _follow_gate(
        self, invocable: Invocable, subsequent: "PassCondition"
    ) -> None:
        try:
            continuation = invocable()
            if inspect.isawaitable(continuation):
                continuation = await continuation
        except DependencyError as e:
            self.fail(e)
            return
        except asyncio.CancelledError as e:
            if _cancel_requested():
                raise
            self.fail(_deferred_error(e))
            return
        except Exception as e:
            self.fail(_deferred_error(e))
            return

        self.waiting = False

        try:
            subsequent.run(continuation)
        except Exception as e:
            self.fail(e)
            return

        await subsequent.wait_settled()
        self._settle(subsequent.outcome, subsequent.failure_detail)
