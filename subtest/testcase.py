# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Test declaration and its fluent configuration surface."""

import logging
from typing import Any

from subtest.conditions import (
    Deferred,
    DeferredFailure,
    DeferredFailureEquality,
    DeferredSettlement,
    DeferredSettlementEquality,
    Equality,
    Invocable,
    PassCondition,
    RaisedFailure,
    RanWithoutFailure,
)
from subtest.core.constants import DEFAULT_EXPECTED
from subtest.core.errors import DependencyError
from subtest.core.types import Outcome, TestStatus

logger = logging.getLogger(__name__)


class Test:
    """A unit or integration test that should be run.

    Binds one zero-argument invocable to exactly one pass condition. The
    configuration methods replace the condition and return the test itself
    so calls can be chained:

        >>> Test(lambda: 2 + 2).should_equal(4)
        >>> Test(fetch_greeting).should_resolve_to("Hello, world!")
        >>> Test(say_hello).after(greeting_test, must_pass=True)

    Configuration must happen before the test is run; the last call wins,
    so a ``should_*`` call after ``after`` replaces the dependency's wrapper.

    Attributes:
        invocable: Code to test
        condition: Pass condition deciding the outcome
        name: Display name, filled in from the tests mapping when not given
        dependencies: Gating tests attached with ``after``
    """

    __test__ = False  # not a pytest test class

    def __init__(self, invocable: Invocable, name: str | None = None):
        self.invocable = invocable
        self.condition = PassCondition(RanWithoutFailure())
        self.name = name
        self.dependencies: tuple["Test", ...] = ()

    def __repr__(self) -> str:
        return f"Test({self.name or self.invocable!r}, {self.condition!r})"

    @property
    def outcome(self) -> Outcome:
        return self.condition.outcome

    @property
    def status(self) -> TestStatus:
        """Display status used by reporters."""
        if self.condition.outcome is Outcome.PASSED:
            return TestStatus.PASS
        if self.condition.outcome is Outcome.FAILED:
            return TestStatus.FAIL
        if self.condition.is_waiting_on_gate:
            return TestStatus.WAIT_DEFERRED
        return TestStatus.WAIT

    def should_run(self) -> "Test":
        """Pass if the code runs without raising."""
        self.condition = PassCondition(RanWithoutFailure())
        return self

    def should_equal(self, expected: Any = DEFAULT_EXPECTED) -> "Test":
        """Pass if the code returns a value equal to ``expected``."""
        self.condition = PassCondition(Equality(expected))
        return self

    def should_resolve(self) -> "Test":
        """Pass if the code returns an awaitable that succeeds."""
        self.condition = PassCondition(DeferredSettlement())
        return self

    def should_resolve_to(self, expected: Any = DEFAULT_EXPECTED) -> "Test":
        """Pass if the code returns an awaitable that succeeds with ``expected``."""
        self.condition = PassCondition(DeferredSettlementEquality(expected))
        return self

    def should_reject(self) -> "Test":
        """Pass if the code returns an awaitable that fails."""
        self.condition = PassCondition(DeferredFailure())
        return self

    def should_reject_to(self, expected: Any = DEFAULT_EXPECTED) -> "Test":
        """Pass if the code returns an awaitable that fails with ``expected``.

        Exceptions are compared by type name and message; a ``Rejected``
        failure is compared by its payload.
        """
        self.condition = PassCondition(DeferredFailureEquality(expected))
        return self

    def should_throw(
        self, expected: BaseException | type[BaseException] | None = None
    ) -> "Test":
        """Pass if the code raises.

        Args:
            expected: None to accept any exception, an exception instance to
                require the same type name and message, or an exception class
        """
        self.condition = PassCondition(RaisedFailure(expected))
        return self

    def after(self, test: "Test", must_pass: bool = False) -> "Test":
        """Only run this test once ``test`` has settled.

        The invocable is replaced by a coroutine function waiting for the
        gate; it hands back the previous invocable as the continuation, or
        raises ``DependencyError`` without calling it when ``must_pass`` is
        set and the gate failed. The current condition becomes the
        subsequent condition of a ``Deferred`` wrapper.

        Args:
            test: Gating test
            must_pass: Whether the gate must pass for this test to run
        """
        previous_invocable = self.invocable
        gate = test

        async def wait_for_gate() -> Invocable:
            outcome = await gate.condition.wait_settled()
            if outcome is Outcome.PASSED or not must_pass:
                return previous_invocable
            logger.debug(f"Dependency {gate.name or gate!r} failed, not running {self!r}")
            raise DependencyError()

        self.invocable = wait_for_gate
        self.condition = PassCondition(Deferred(self.condition))
        self.dependencies = self.dependencies + (gate,)
        return self
