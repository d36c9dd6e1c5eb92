# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Utility modules for subtest."""

from subtest.utils.logging import VerbosityLevel, configure_logging
from subtest.utils.terminal import terminal

__all__ = [
    "terminal",
    "VerbosityLevel",
    "configure_logging",
]
