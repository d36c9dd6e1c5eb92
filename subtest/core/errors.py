# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Failure types recorded by pass conditions.

None of these are raised out of a condition or out of a run. They end up
in ``PassCondition.failure_detail`` and are inspected through the tests
mapping once the run has finished.
"""

from typing import Any


class SubtestError(Exception):
    """Base class for every failure produced by subtest itself."""


class TestError(SubtestError):
    """A test did not meet its pass condition (e.g. unmet equality)."""

    __test__ = False  # not a pytest test class


class DeferredError(TestError):
    """An awaited result failed when the condition expected it to succeed.

    Attributes:
        reason: The failure value raised by the awaitable
    """

    def __init__(self, reason: Any):
        super().__init__(str(reason))
        self.reason = reason


class DependencyError(TestError):
    """A gating test did not pass although the dependent test required it."""

    def __init__(self, message: str = "Test is dependent on another test's success"):
        super().__init__(message)


class Rejected(Exception):
    """Fail an awaitable with an arbitrary, non-exception payload.

    Conditions comparing failure values (``should_reject_to``) compare
    ``payload`` rather than the exception itself.

    Example:
        >>> async def lookup():
        ...     raise Rejected({"code": 404})
    """

    def __init__(self, payload: Any):
        super().__init__(payload)
        self.payload = payload


def failure_value(error: BaseException) -> Any:
    """Return the value a failed awaitable failed with."""
    if isinstance(error, Rejected):
        return error.payload
    return error


def failures_match(actual: Any, expected: Any) -> bool:
    """Check whether two failure values are equivalent.

    Exceptions only carry identity-based equality, so two exceptions are
    considered equivalent when their type name and message match. Any
    other values are compared with ``==``.
    """
    if isinstance(actual, BaseException) and isinstance(expected, BaseException):
        return (
            type(actual).__name__ == type(expected).__name__
            and str(actual) == str(expected)
        )
    return bool(actual == expected)
