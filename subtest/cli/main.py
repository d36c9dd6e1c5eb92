# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

import importlib
import logging
import os
import sys
from collections.abc import Mapping
from typing import Any, Optional

import errorhandler
import typer
from typing_extensions import Annotated

import subtest
from subtest.core.constants import (
    DEFAULT_POLL_INTERVAL,
    ENV_POLL_INTERVAL,
    ENV_QUIET,
    ENV_TIMEOUT,
    ENV_VERBOSITY,
    EXIT_ERROR,
    MIN_POLL_INTERVAL,
)
from subtest.orchestrator import run_tests_sync
from subtest.reporting import ConsoleReporter
from subtest.testcase import Test
from subtest.utils.logging import VerbosityLevel, configure_logging

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


class TargetError(Exception):
    """The tests target could not be loaded."""


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"subtest, version {subtest.__version__}")
        raise typer.Exit()


def load_tests(target: str) -> Mapping[str, Test]:
    """Load the tests mapping named by ``module[:attribute]``.

    The attribute defaults to ``tests``. It is either a mapping of names to
    tests, or a callable returning one.

    Raises:
        TargetError: If the module, the attribute or the mapping is invalid
    """
    module_name, _, attribute = target.partition(":")
    attribute = attribute or "tests"
    if not module_name:
        raise TargetError(f"Invalid target '{target}', expected module[:attribute]")

    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetError(f"Could not import module '{module_name}': {e}") from e

    try:
        tests: Any = getattr(module, attribute)
    except AttributeError as e:
        raise TargetError(
            f"Module '{module_name}' has no attribute '{attribute}'"
        ) from e

    if callable(tests) and not isinstance(tests, Mapping):
        try:
            tests = tests()
        except Exception as e:
            raise TargetError(f"Calling '{target}' failed: {e}") from e

    if not isinstance(tests, Mapping):
        raise TargetError(
            f"'{target}' is not a mapping of tests (got {type(tests).__name__})"
        )
    for name, test in tests.items():
        if not isinstance(test, Test):
            raise TargetError(f"Entry '{name}' of '{target}' is not a Test")
    return tests


Target = Annotated[
    str,
    typer.Argument(
        help="Tests to run as module[:attribute]. The attribute (default: tests) is a mapping of names to tests or a callable returning one.",
    ),
]


PollInterval = Annotated[
    float,
    typer.Option(
        "-p",
        "--poll-interval",
        help="Maximum time between two status updates in seconds.",
        envvar=ENV_POLL_INTERVAL,
        min=MIN_POLL_INTERVAL,
    ),
]


Timeout = Annotated[
    Optional[float],
    typer.Option(
        "--timeout",
        help="Stop waiting for pending tests after this many seconds. Waits forever if not specified.",
        envvar=ENV_TIMEOUT,
    ),
]


Quiet = Annotated[
    bool,
    typer.Option(
        "-q",
        "--quiet",
        help="Only print the final summary.",
        envvar=ENV_QUIET,
    ),
]


Verbosity = Annotated[
    VerbosityLevel,
    typer.Option(
        "-v",
        "--verbosity",
        help="Verbosity level.",
        envvar=ENV_VERBOSITY,
        is_eager=True,
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


@app.command()
def main(
    target: Target,
    poll_interval: PollInterval = DEFAULT_POLL_INTERVAL,
    timeout: Timeout = None,
    quiet: Quiet = False,
    verbosity: Verbosity = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """A CLI tool to run subtest test collections and report their outcome."""
    configure_logging(verbosity, error_handler)

    if timeout is not None and timeout <= 0:
        raise typer.BadParameter("must be positive", param_hint="--timeout")

    try:
        tests = load_tests(target)
    except TargetError as e:
        logger.error(str(e))
        raise typer.Exit(EXIT_ERROR)

    reporter = ConsoleReporter(quiet=quiet)
    result = run_tests_sync(
        tests, observers=[reporter], poll_interval=poll_interval, timeout=timeout
    )
    reporter.summary(result)

    exit(result.exit_code)


def exit(code: int = 0) -> None:
    if error_handler.fired:
        raise typer.Exit(EXIT_ERROR)
    else:
        raise typer.Exit(code)
