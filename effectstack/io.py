"""
IO: lazy synchronous effect
===========================

``IO[A]`` is a zero-arg callable. Nothing runs until it is called, and
every call re-runs the whole composition synchronously; no value is cached.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._helpers import identity
from ._types import IO
from .monad import Monad
from .semigroup import Semigroup

logger = logging.getLogger(__name__)


def of[A](value: A) -> IO[A]:
    def run() -> A:
        return value

    return run


def map[A, B](ma: IO[A], f: Callable[[A], B]) -> IO[B]:
    def run() -> B:
        return f(ma())

    return run


def chain[A, B](ma: IO[A], f: Callable[[A], IO[B]]) -> IO[B]:
    def run() -> B:
        return f(ma())()

    return run


def ap[A, B](mab: IO[Callable[[A], B]], ma: IO[A]) -> IO[B]:
    def run() -> B:
        f = mab()
        return f(ma())

    return run


def chain_first[A, B](ma: IO[A], f: Callable[[A], IO[B]]) -> IO[A]:
    """Run f for its effect, keep the original value."""
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[A](mma: IO[IO[A]]) -> IO[A]:
    return chain(mma, identity)


def attempt[A](ma: IO[A]) -> IO[Result[A, Exception]]:
    """Capture an exception raised by ma as Error(exc)."""

    def run() -> Result[A, Exception]:
        try:
            return Ok(ma())
        except Exception as exc:
            return Error(exc)

    return run


def throw(exc: Exception) -> IO[typing.Never]:
    def run() -> typing.Never:
        raise exc

    return run


def bracket[A, B](
    acquire: IO[A],
    use: Callable[[A], IO[B]],
    release: Callable[[A, Result[B, Exception]], IO[None]],
) -> IO[B]:
    """
    Resource management: acquire → use → release (always, exactly once).

    release receives the resource and the outcome of use, with an exception
    raised by use captured as Error(exc). After release the exception is
    re-raised. If both use and release raise, the exception from use wins
    and the release exception is logged.
    """

    def run() -> B:
        resource = acquire()
        try:
            value = use(resource)()
        except Exception as exc:
            try:
                release(resource, Error(exc))()
            except Exception:
                logger.warning("bracket: release failed after use raised", exc_info=True)
            raise
        release(resource, Ok(value))()
        return value

    return run


def get_semigroup[A](S: Semigroup[A]) -> Semigroup[IO[A]]:
    def concat(x: IO[A], y: IO[A]) -> IO[A]:
        def run() -> A:
            return S.concat(x(), y())

        return run

    return Semigroup(concat)


io = Monad.derive(
    "IO",
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
    "chain_first",
    "flatten",
    "attempt",
    "throw",
    "bracket",
    "get_semigroup",
    "io",
)
