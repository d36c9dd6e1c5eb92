# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Awaitable building blocks shared by the test modules."""

import asyncio
from typing import Any

from subtest.conditions import Invocable, PassCondition
from subtest.core.types import Outcome


async def resolve_after(value: Any, delay: float = 0.0) -> Any:
    await asyncio.sleep(delay)
    return value


async def fail_after(error: BaseException, delay: float = 0.0) -> Any:
    await asyncio.sleep(delay)
    raise error


async def never_settles() -> None:
    await asyncio.get_running_loop().create_future()


def settle(
    condition: PassCondition, invocable: Invocable, timeout: float = 5.0
) -> Outcome:
    """Run a condition inside a fresh event loop until it has settled.

    Raises TimeoutError when the condition is still pending after ``timeout``.
    """

    async def _run() -> Outcome:
        condition.run(invocable)
        return await condition.wait_settled()

    return asyncio.run(asyncio.wait_for(_run(), timeout))
