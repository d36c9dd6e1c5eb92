# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Centralized terminal formatting utilities for subtest."""

from colorama import Fore, Style, init
import os
import re

from subtest.core.types import OutcomeCounts

# autoreset=True means colors reset after each print
init(autoreset=True)


class TerminalColors:
    """Centralized color scheme for consistent terminal output.

    This class provides semantic color mappings and formatting methods
    to ensure consistent terminal output across the subtest codebase.
    """

    # Semantic color mapping for different message types
    ERROR = Fore.RED
    WARNING = Fore.YELLOW
    SUCCESS = Fore.GREEN
    INFO = Fore.CYAN
    RUNNING = Fore.BLUE
    RESET = Style.RESET_ALL

    # Semantic styles
    BOLD = Style.BRIGHT

    # Check if colors should be disabled (for CI/CD environments)
    NO_COLOR = os.environ.get("NO_COLOR") is not None

    # Regex pattern to match ANSI escape sequences
    ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    @classmethod
    def strip_ansi(cls, text: str) -> str:
        """Remove all ANSI escape sequences from text.

        Args:
            text: Text potentially containing ANSI color codes

        Returns:
            Clean text without any ANSI escape sequences
        """
        return cls.ANSI_ESCAPE_PATTERN.sub("", text)

    @classmethod
    def _colorize(cls, color: str, text: str) -> str:
        if cls.NO_COLOR:
            return text
        return f"{color}{text}{cls.RESET}"

    @classmethod
    def error(cls, text: str) -> str:
        """Format error text in red."""
        return cls._colorize(cls.ERROR, text)

    @classmethod
    def warning(cls, text: str) -> str:
        """Format warning text in yellow."""
        return cls._colorize(cls.WARNING, text)

    @classmethod
    def success(cls, text: str) -> str:
        """Format success text in green."""
        return cls._colorize(cls.SUCCESS, text)

    @classmethod
    def info(cls, text: str) -> str:
        """Format info text in cyan."""
        return cls._colorize(cls.INFO, text)

    @classmethod
    def running(cls, text: str) -> str:
        """Format text of still running tests in blue."""
        return cls._colorize(cls.RUNNING, text)

    @classmethod
    def bold(cls, text: str) -> str:
        """Format text in bold."""
        return cls._colorize(cls.BOLD, text)

    @classmethod
    def header(cls, text: str, width: int = 70, char: str = "=") -> str:
        """Format a header with separators.

        Args:
            text: Header text to display
            width: Width of separator line
            char: Character to use for separator

        Returns:
            Formatted header string with separators
        """
        separator = char * width
        if cls.NO_COLOR:
            return f"{separator}\n{text}\n{separator}"

        return f"{cls.BOLD}{separator}{cls.RESET}\n{cls.BOLD}{text}{cls.RESET}\n{cls.BOLD}{separator}{cls.RESET}"

    @classmethod
    def format_progress(cls, counts: OutcomeCounts) -> str:
        """Format the live progress line of a run.

        Format: "Tests passed: P of N (F failed, R running) X%"
        """
        return (
            f"Tests passed: {counts.passed} of {counts.total} "
            f"({counts.failed} failed, {counts.pending} running) "
            f"{round(counts.success_rate)}%"
        )

    @classmethod
    def format_test_summary(cls, counts: OutcomeCounts) -> str:
        """Format the final summary with numbers colored only when > 0.

        Format: "N tests, N passed, N failed." plus ", N pending" when any
        test is still pending (timed out runs).
        """

        def count(value: int, color: str) -> str:
            return cls._colorize(color, str(value)) if value > 0 else str(value)

        summary = (
            f"{counts.total} tests, "
            f"{count(counts.passed, cls.SUCCESS)} passed, "
            f"{count(counts.failed, cls.ERROR)} failed"
        )
        if counts.pending > 0:
            summary += f", {count(counts.pending, cls.WARNING)} pending"
        return summary + "."


# Single instance for use across the codebase
terminal = TerminalColors()
