# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Shared fixtures for CLI tests."""

import logging
from collections.abc import Generator

import pytest

from subtest.utils.logging import HANDLER_NAME


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Drop the stderr handler configure_logging attaches during CLI runs.

    The handler writes to the stream CliRunner swapped in, which is closed
    once the invocation returns.
    """
    logger = logging.getLogger()
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
    logger.setLevel(level)
