"""
Reader: computation over an injected environment
================================================

``Reader[R, A]`` is a function of the environment. The environment is
never stored: each call receives its own.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._types import Reader
from .monad import Monad
from .semigroup import Semigroup


def of[R, A](value: A) -> Reader[R, A]:
    def run(_r: R) -> A:
        return value

    return run


def map[R, A, B](ma: Reader[R, A], f: Callable[[A], B]) -> Reader[R, B]:
    def run(r: R) -> B:
        return f(ma(r))

    return run


def chain[R, A, B](ma: Reader[R, A], f: Callable[[A], Reader[R, B]]) -> Reader[R, B]:
    def run(r: R) -> B:
        return f(ma(r))(r)

    return run


def ap[R, A, B](mab: Reader[R, Callable[[A], B]], ma: Reader[R, A]) -> Reader[R, B]:
    def run(r: R) -> B:
        return mab(r)(ma(r))

    return run


def ask[R]() -> Reader[R, R]:
    def run(r: R) -> R:
        return r

    return run


def asks[R, A](f: Callable[[R], A]) -> Reader[R, A]:
    return f


def local[Q, R, A](ma: Reader[R, A], f: Callable[[Q], R]) -> Reader[Q, A]:
    """Run ma against an environment derived from the outer one."""

    def run(q: Q) -> A:
        return ma(f(q))

    return run


def attempt[R, A](ma: Reader[R, A]) -> Reader[R, Result[A, Exception]]:
    def run(r: R) -> Result[A, Exception]:
        try:
            return Ok(ma(r))
        except Exception as exc:
            return Error(exc)

    return run


def throw[R](exc: Exception) -> Reader[R, typing.Never]:
    def run(_r: R) -> typing.Never:
        raise exc

    return run


def get_semigroup[R, A](S: Semigroup[A]) -> Semigroup[Reader[R, A]]:
    def concat(x: Reader[R, A], y: Reader[R, A]) -> Reader[R, A]:
        def run(r: R) -> A:
            return S.concat(x(r), y(r))

        return run

    return Semigroup(concat)


reader = Monad.derive(
    "Reader",
    of=of,
    map=map,
    chain=chain,
    ap=ap,
    attempt=attempt,
    throw=throw,
)

__all__ = (
    "of",
    "map",
    "chain",
    "ap",
    "ask",
    "asks",
    "local",
    "attempt",
    "throw",
    "get_semigroup",
    "reader",
)
