"""
ReaderEither combinators
========================

``ReaderEither[R, T, E]`` is a synchronous function of the environment
producing ``Result[T, E]``.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Ok, Result

from . import reader as _reader
from . import result as _result
from ._helpers import constant, identity
from ._types import Lazy, Predicate, Reader, ReaderEither
from .semigroup import Monoid, Semigroup
from .transformer import EitherT

_T = EitherT(_reader.reader)


# ============================================================================
# Constructors
# ============================================================================


def right[R, T](value: T) -> ReaderEither[R, T, typing.Never]:
    return _T.right(value)


def left[R, E](error: E) -> ReaderEither[R, typing.Never, E]:
    return _T.left(error)


def right_reader[R, T](ma: Reader[R, T]) -> ReaderEither[R, T, typing.Never]:
    return _T.right_base(ma)


def left_reader[R, E](me: Reader[R, E]) -> ReaderEither[R, typing.Never, E]:
    return _T.left_base(me)


def from_result[R, T, E](r: Result[T, E]) -> ReaderEither[R, T, E]:
    return _T.from_result(r)


def from_optional[R, T, E](value: T | None, on_none: Lazy[E]) -> ReaderEither[R, T, E]:
    def run(_r: R) -> Result[T, E]:
        return _result.from_optional(value, on_none)

    return run


def from_predicate[R, T, E](
    value: T,
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> ReaderEither[R, T, E]:
    def run(_r: R) -> Result[T, E]:
        return _result.from_predicate(value, predicate, on_false)

    return run


# ============================================================================
# Environment
# ============================================================================


def ask[R]() -> ReaderEither[R, R, typing.Never]:
    return Ok


def asks[R, T](f: Callable[[R], T]) -> ReaderEither[R, T, typing.Never]:
    def run(r: R) -> Result[T, typing.Never]:
        return Ok(f(r))

    return run


def local[Q, R, T, E](ma: ReaderEither[R, T, E], f: Callable[[Q], R]) -> ReaderEither[Q, T, E]:
    return _reader.local(ma, f)


# ============================================================================
# Composition
# ============================================================================


def map[R, T, U, E](ma: ReaderEither[R, T, E], f: Callable[[T], U]) -> ReaderEither[R, U, E]:
    return _T.map(ma, f)


def map_failure[R, T, E, F](ma: ReaderEither[R, T, E], f: Callable[[E], F]) -> ReaderEither[R, T, F]:
    return _T.map_failure(ma, f)


def bimap[R, T, U, E, F](
    ma: ReaderEither[R, T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> ReaderEither[R, U, F]:
    return _T.bimap(ma, f, g)


def chain[R, T, U, E](
    ma: ReaderEither[R, T, E],
    f: Callable[[T], ReaderEither[R, U, E]],
) -> ReaderEither[R, U, E]:
    return _T.chain(ma, f)


def chain_first[R, T, U, E](
    ma: ReaderEither[R, T, E],
    f: Callable[[T], ReaderEither[R, U, E]],
) -> ReaderEither[R, T, E]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[R, T, E](mma: ReaderEither[R, ReaderEither[R, T, E], E]) -> ReaderEither[R, T, E]:
    return chain(mma, identity)


def ap[R, T, U, E](
    mab: ReaderEither[R, Callable[[T], U], E],
    ma: ReaderEither[R, T, E],
) -> ReaderEither[R, U, E]:
    return _T.ap(mab, ma)


def ap_first[R, T, U, E](ma: ReaderEither[R, T, E], mb: ReaderEither[R, U, E]) -> ReaderEither[R, T, E]:
    """Run both, keep the first value."""
    return ap(map(ma, constant), mb)


def ap_second[R, T, U, E](ma: ReaderEither[R, T, E], mb: ReaderEither[R, U, E]) -> ReaderEither[R, U, E]:
    return ap(map(ma, lambda _: lambda b: b), mb)


def alt[R, T, E](ma: ReaderEither[R, T, E], that: Lazy[ReaderEither[R, T, E]]) -> ReaderEither[R, T, E]:
    return _T.alt(ma, that)


def or_else[R, T, E, F](
    ma: ReaderEither[R, T, E],
    f: Callable[[E], ReaderEither[R, T, F]],
) -> ReaderEither[R, T, F]:
    return _T.or_else(ma, f)


def swap[R, T, E](ma: ReaderEither[R, T, E]) -> ReaderEither[R, E, T]:
    return _T.swap(ma)


def filter_or_else[R, T, E](
    ma: ReaderEither[R, T, E],
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> ReaderEither[R, T, E]:
    def check(r: Result[T, E]) -> Result[T, E]:
        return _result.filter_or_else(r, predicate, on_false)

    return _reader.map(ma, check)


# ============================================================================
# Eliminators
# ============================================================================


def fold[R, T, E, B](
    ma: ReaderEither[R, T, E],
    on_failure: Callable[[E], Reader[R, B]],
    on_success: Callable[[T], Reader[R, B]],
) -> Reader[R, B]:
    return _T.fold(ma, on_failure, on_success)


def get_or_else[R, T, E](
    ma: ReaderEither[R, T, E],
    on_failure: Callable[[E], Reader[R, T]],
) -> Reader[R, T]:
    return _T.get_or_else(ma, on_failure)


# ============================================================================
# Instances
# ============================================================================


def get_semigroup[R, T, E](S: Semigroup[T]) -> Semigroup[ReaderEither[R, T, E]]:
    return _reader.get_semigroup(_result.get_semigroup(S))


def get_apply_semigroup[R, T, E](S: Semigroup[T]) -> Semigroup[ReaderEither[R, T, E]]:
    return _reader.get_semigroup(_result.get_apply_semigroup(S))


def get_apply_monoid[R, T, E](M: Monoid[T]) -> Monoid[ReaderEither[R, T, E]]:
    return Monoid(get_apply_semigroup(M.to_semigroup()).concat, right(M.empty))


reader_either = _T.monad("ReaderEither")

__all__ = (
    "right",
    "left",
    "right_reader",
    "left_reader",
    "from_result",
    "from_optional",
    "from_predicate",
    "ask",
    "asks",
    "local",
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
    "get_semigroup",
    "get_apply_semigroup",
    "get_apply_monoid",
    "reader_either",
)
