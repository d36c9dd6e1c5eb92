# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules."""

from collections.abc import Generator
from pathlib import Path

import pytest

from subtest.utils.terminal import TerminalColors

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def no_color() -> Generator[None, None, None]:
    """Disable terminal colors for exact output comparisons.

    NO_COLOR is read at import time, so the class attribute is patched
    directly.
    """
    original_no_color = TerminalColors.NO_COLOR
    TerminalColors.NO_COLOR = True
    yield
    TerminalColors.NO_COLOR = original_no_color


@pytest.fixture()
def fixtures_on_path(monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make the modules under tests/fixtures importable by name."""
    monkeypatch.syspath_prepend(str(FIXTURES_DIR))
    return FIXTURES_DIR


@pytest.fixture()
def force_color() -> Generator[None, None, None]:
    """Enable terminal colors regardless of the caller's NO_COLOR setting."""
    original_no_color = TerminalColors.NO_COLOR
    TerminalColors.NO_COLOR = False
    yield
    TerminalColors.NO_COLOR = original_no_color
