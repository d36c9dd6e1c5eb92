# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Core constants shared across the subtest framework."""

# Orchestrator tick cadence
DEFAULT_POLL_INTERVAL = 0.05  # seconds
MIN_POLL_INTERVAL = 0.001  # seconds

# Default expected value for should_equal / should_resolve_to / should_reject_to
DEFAULT_EXPECTED = True

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_FAILURE_CAP = 250
EXIT_TIMED_OUT = 255

# Environment variables
ENV_POLL_INTERVAL = "SUBTEST_POLL_INTERVAL"
ENV_TIMEOUT = "SUBTEST_TIMEOUT"
ENV_VERBOSITY = "SUBTEST_VERBOSITY"
ENV_QUIET = "SUBTEST_QUIET"
