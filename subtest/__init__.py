# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

from importlib.metadata import PackageNotFoundError, version  # type: ignore

from subtest.conditions import PassCondition
from subtest.core.errors import (
    DeferredError,
    DependencyError,
    Rejected,
    SubtestError,
    TestError,
)
from subtest.core.types import Outcome, RunResult, RunState
from subtest.orchestrator import TestRun, run_tests, run_tests_sync
from subtest.testcase import Test

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    # Package not installed in production mode
    __version__ = "0.1.0"

__all__ = [
    "DeferredError",
    "DependencyError",
    "Outcome",
    "PassCondition",
    "Rejected",
    "RunResult",
    "RunState",
    "SubtestError",
    "Test",
    "TestError",
    "TestRun",
    "run_tests",
    "run_tests_sync",
]
