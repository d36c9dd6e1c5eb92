# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core components shared across the subtest framework."""

from subtest.core.constants import (
    DEFAULT_EXPECTED,
    DEFAULT_POLL_INTERVAL,
    EXIT_FAILURE_CAP,
    EXIT_SUCCESS,
    EXIT_TIMED_OUT,
)
from subtest.core.errors import (
    DeferredError,
    DependencyError,
    Rejected,
    SubtestError,
    TestError,
)
from subtest.core.types import (
    Outcome,
    OutcomeCounts,
    RunResult,
    RunState,
    TestStatus,
)

__all__ = [
    # Constants
    "DEFAULT_EXPECTED",
    "DEFAULT_POLL_INTERVAL",
    "EXIT_SUCCESS",
    "EXIT_FAILURE_CAP",
    "EXIT_TIMED_OUT",
    # Errors
    "SubtestError",
    "TestError",
    "DeferredError",
    "DependencyError",
    "Rejected",
    # Types
    "Outcome",
    "OutcomeCounts",
    "RunResult",
    "RunState",
    "TestStatus",
]
