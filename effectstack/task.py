"""
Task: lazy asynchronous effect
==============================

``Task[A]`` is a zero-arg callable returning an awaitable. Every call
starts a new computation: in-flight work is never shared between calls.
"""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._helpers import identity
from ._types import IO, Task
from .monad import Monad, sequential_ap
from .semigroup import Semigroup


def of[A](value: A) -> Task[A]:
    async def run() -> A:
        return value

    return run


def from_io[A](ma: IO[A]) -> Task[A]:
    async def run() -> A:
        return ma()

    return run


def map[A, B](ma: Task[A], f: Callable[[A], B]) -> Task[B]:
    async def run() -> B:
        return f(await ma())

    return run


def chain[A, B](ma: Task[A], f: Callable[[A], Task[B]]) -> Task[B]:
    """Wait for ma, then start the task built by f."""

    async def run() -> B:
        a = await ma()
        return await f(a)()

    return run


def ap[A, B](mab: Task[Callable[[A], B]], ma: Task[A]) -> Task[B]:
    """Start both tasks at once, apply when both settle."""

    async def run() -> B:
        f, a = await asyncio.gather(mab(), ma())
        return f(a)

    return run


ap_seq = sequential_ap(map, chain)


def chain_first[A, B](ma: Task[A], f: Callable[[A], Task[B]]) -> Task[A]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[A](mma: Task[Task[A]]) -> Task[A]:
    return chain(mma, identity)


def delay[A](ma: Task[A], *, seconds: float) -> Task[A]:
    """Sleep before running. Completes no earlier than `seconds` after invocation."""

    async def run() -> A:
        if seconds > 0.0:
            await asyncio.sleep(seconds)
        return await ma()

    return run


def attempt[A](ma: Task[A]) -> Task[Result[A, Exception]]:
    async def run() -> Result[A, Exception]:
        try:
            return Ok(await ma())
        except Exception as exc:
            return Error(exc)

    return run


def throw(exc: Exception) -> Task[typing.Never]:
    async def run() -> typing.Never:
        raise exc

    return run


def get_semigroup[A](S: Semigroup[A]) -> Semigroup[Task[A]]:
    """Run x then y, concatenate their values."""

    def concat(x: Task[A], y: Task[A]) -> Task[A]:
        async def run() -> A:
            a = await x()
            b = await y()
            return S.concat(a, b)

        return run

    return Semigroup(concat)


task = Monad.derive(
    "Task",
    of=of,
    map=map,
    chain=chain,
    ap=ap,
    attempt=attempt,
    throw=throw,
)

task_seq = task.seq()

__all__ = (
    "of",
    "from_io",
    "map",
    "chain",
    "ap",
    "ap_seq",
    "chain_first",
    "flatten",
    "delay",
    "attempt",
    "throw",
    "get_semigroup",
    "task",
    "task_seq",
)
