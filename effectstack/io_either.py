"""
IOEither combinators
====================

``IOEither[T, E]`` is a synchronous effect producing ``Result[T, E]``.
Domain failures are ``Error`` values; exceptions are reserved for defects
unless captured by ``try_catch``.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

from . import io as _io
from . import result as _result
from ._helpers import constant, identity
from ._types import IO, IOEither, Lazy, Predicate
from .semigroup import Monoid, Semigroup
from .transformer import EitherT, ValidationT


_T = EitherT(_io.io)


# ============================================================================
# Constructors
# ============================================================================


def right[T](value: T) -> IOEither[T, typing.Never]:
    return _T.right(value)


def left[E](error: E) -> IOEither[typing.Never, E]:
    return _T.left(error)


def right_io[T](ma: IO[T]) -> IOEither[T, typing.Never]:
    return _T.right_base(ma)


def left_io[E](me: IO[E]) -> IOEither[typing.Never, E]:
    return _T.left_base(me)


def from_result[T, E](r: Result[T, E]) -> IOEither[T, E]:
    return _T.from_result(r)


def from_optional[T, E](value: T | None, on_none: Lazy[E]) -> IOEither[T, E]:
    def run() -> Result[T, E]:
        return _result.from_optional(value, on_none)

    return run


def from_predicate[T, E](
    value: T,
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> IOEither[T, E]:
    def run() -> Result[T, E]:
        return _result.from_predicate(value, predicate, on_false)

    return run


def try_catch[T, E](
    thunk: Lazy[T],
    on_error: Callable[[Exception], E],
) -> IOEither[T, E]:
    """
    Run a thunk that may raise; the exception never escapes, it becomes Error(on_error(exc)).

    Example:
        parse = try_catch(lambda: json.loads(raw), on_error=lambda e: ParseError(str(e)))
    """

    def run() -> Result[T, E]:
        return _result.try_catch(thunk, on_error)

    return run


# ============================================================================
# Composition
# ============================================================================


def map[T, U, E](ma: IOEither[T, E], f: Callable[[T], U]) -> IOEither[U, E]:
    return _T.map(ma, f)


def map_failure[T, E, F](ma: IOEither[T, E], f: Callable[[E], F]) -> IOEither[T, F]:
    return _T.map_failure(ma, f)


def bimap[T, U, E, F](
    ma: IOEither[T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> IOEither[U, F]:
    return _T.bimap(ma, f, g)


def chain[T, U, E](ma: IOEither[T, E], f: Callable[[T], IOEither[U, E]]) -> IOEither[U, E]:
    return _T.chain(ma, f)


def chain_first[T, U, E](ma: IOEither[T, E], f: Callable[[T], IOEither[U, E]]) -> IOEither[T, E]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[T, E](mma: IOEither[IOEither[T, E], E]) -> IOEither[T, E]:
    return chain(mma, identity)


def ap[T, U, E](mab: IOEither[Callable[[T], U], E], ma: IOEither[T, E]) -> IOEither[U, E]:
    return _T.ap(mab, ma)


def ap_first[T, U, E](ma: IOEither[T, E], mb: IOEither[U, E]) -> IOEither[T, E]:
    return ap(map(ma, constant), mb)


def ap_second[T, U, E](ma: IOEither[T, E], mb: IOEither[U, E]) -> IOEither[U, E]:
    return ap(map(ma, lambda _: lambda b: b), mb)


def alt[T, E](ma: IOEither[T, E], that: Lazy[IOEither[T, E]]) -> IOEither[T, E]:
    return _T.alt(ma, that)


def or_else[T, E, F](ma: IOEither[T, E], f: Callable[[E], IOEither[T, F]]) -> IOEither[T, F]:
    return _T.or_else(ma, f)


def swap[T, E](ma: IOEither[T, E]) -> IOEither[E, T]:
    return _T.swap(ma)


def filter_or_else[T, E](
    ma: IOEither[T, E],
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> IOEither[T, E]:
    return chain(ma, lambda a: from_predicate(a, predicate, on_false))


# ============================================================================
# Eliminators
# ============================================================================


def fold[T, E, B](
    ma: IOEither[T, E],
    on_failure: Callable[[E], IO[B]],
    on_success: Callable[[T], IO[B]],
) -> IO[B]:
    return _T.fold(ma, on_failure, on_success)


def get_or_else[T, E](ma: IOEither[T, E], on_failure: Callable[[E], IO[T]]) -> IO[T]:
    return _T.get_or_else(ma, on_failure)


# ============================================================================
# Resources
# ============================================================================


def bracket[A, B, E](
    acquire: IOEither[A, E],
    use: Callable[[A], IOEither[B, E]],
    release: Callable[[A, Result[B, E]], IOEither[None, E]],
) -> IOEither[B, E]:
    """
    Make sure a resource is released whatever use does.

    release runs exactly once after a successful acquire, with the outcome
    of use. A failure of use wins over a failure of release.
    """
    return _T.bracket(acquire, use, release)


# ============================================================================
# Instances
# ============================================================================


def get_semigroup[T, E](S: Semigroup[T]) -> Semigroup[IOEither[T, E]]:
    return _io.get_semigroup(_result.get_semigroup(S))


def get_apply_semigroup[T, E](S: Semigroup[T]) -> Semigroup[IOEither[T, E]]:
    return _io.get_semigroup(_result.get_apply_semigroup(S))


def get_apply_monoid[T, E](M: Monoid[T]) -> Monoid[IOEither[T, E]]:
    return Monoid(get_apply_semigroup(M.to_semigroup()).concat, right(M.empty))


def get_io_validation[E](S: Semigroup[E]) -> ValidationT:
    """IOEither combinators that accumulate failures with S."""
    return ValidationT(_io.io, S)


io_either = _T.monad("IOEither")

__all__ = (
    "right",
    "left",
    "right_io",
    "left_io",
    "from_result",
    "from_optional",
    "from_predicate",
    "try_catch",
    "map",
    "map_failure",
    "bimap",
    "chain",
    "chain_first",
    "flatten",
    "ap",
    "ap_first",
    "ap_second",
    "alt",
    "or_else",
    "swap",
    "filter_or_else",
    "fold",
    "get_or_else",
    "bracket",
    "get_semigroup",
    "get_apply_semigroup",
    "get_apply_monoid",
    "get_io_validation",
    "io_either",
)
