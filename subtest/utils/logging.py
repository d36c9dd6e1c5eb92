# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging configuration for the subtest command line."""

import logging
import sys
from enum import Enum

import errorhandler

HANDLER_NAME = "subtest-cli"


class VerbosityLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(
    level: VerbosityLevel | str, error_handler: errorhandler.ErrorHandler
) -> None:
    """Configure the root logger for command line use.

    Args:
        level: Minimum level written to stderr
        error_handler: Handler recording whether an ERROR was logged; reset
            so that only errors of this invocation count
    """
    log_level = getattr(logging, VerbosityLevel(level).value)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler.setLevel(log_level)
    logger.addHandler(handler)

    error_handler.reset()
