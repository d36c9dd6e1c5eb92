# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""A small application and its subtest collection, loaded by the CLI tests."""

import asyncio

from subtest import Test


def say_hello() -> None:
    print("Hello, world!")


def hello_user(name: str) -> str:
    return "Hello, " + name + "!"


async def hello_later() -> str:
    await asyncio.sleep(0.01)
    return "Hello, world!"


def throw_error() -> None:
    raise Exception("Oops!")


def build_tests() -> dict[str, Test]:
    hello_later_test = Test(hello_later).should_resolve_to("Hello, world!")
    return {
        "say_hello": Test(say_hello).should_run(),
        "say_hello_to_user": Test(lambda: hello_user("Subnodal")).should_equal(
            "Hello, Subnodal!"
        ),
        "resolve_later": Test(hello_later).should_resolve(),
        "say_hello_later": hello_later_test,
        "throw_error": Test(throw_error).should_throw(),
        "throw_error_specific": Test(throw_error).should_throw(Exception("Oops!")),
        "hello_again": Test(say_hello).should_run().after(hello_later_test, True),
    }


def build_failing_tests() -> dict[str, Test]:
    gate = Test(lambda: hello_user("Subnodal")).should_equal("Hi, Subnodal!")
    return {
        "wrong_greeting": gate,
        "after_wrong_greeting": Test(say_hello).after(gate, must_pass=True),
        "say_hello": Test(say_hello),
    }


async def _never() -> None:
    await asyncio.get_running_loop().create_future()


def build_stuck_tests() -> dict[str, Test]:
    return {"stuck": Test(_never).should_resolve(), "say_hello": Test(say_hello)}


greeting = "Hello, world!"

not_tests = {"say_hello": say_hello}
