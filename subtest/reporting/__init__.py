# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Reporting components rendering the state of a test run."""

from subtest.reporting.console import ConsoleReporter

__all__ = [
    "ConsoleReporter",
]
