"""
ReaderTaskEither combinators
============================

The full stack: environment → async → failure → value.

``ReaderTaskEither[R, T, E]`` is a function ``R -> TaskEither[T, E]``.
Nothing runs when the environment is supplied; the returned
``LazyCoroResult`` runs when called (or awaited).

Example:
    program = chain(asks(lambda env: env.user_id), fetch_user)
    result = await run(program, env)
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

from . import reader as _reader
from . import task_either as _te
from ._helpers import constant, identity
from ._types import (
    IO,
    IOEither,
    Lazy,
    Predicate,
    Reader,
    ReaderEither,
    ReaderTaskEither,
    Task,
    TaskEither,
)
from .semigroup import Monoid, Semigroup
from .transformer import ReaderT

_T = ReaderT(_te.task_either)
_T_seq = ReaderT(_te.task_either_seq)

type ReaderTask[R, A] = Callable[[R], Task[A]]


async def run[R, T, E](ma: ReaderTaskEither[R, T, E], r: R) -> Result[T, E]:
    """Supply the environment and run."""
    return await ma(r)()


# ============================================================================
# Constructors
# ============================================================================


def right[R, T](value: T) -> ReaderTaskEither[R, T, typing.Never]:
    return _T.of(value)


def left[R, E](error: E) -> ReaderTaskEither[R, typing.Never, E]:
    return from_task_either(_te.left(error))


def from_task_either[R, T, E](ma: TaskEither[T, E]) -> ReaderTaskEither[R, T, E]:
    return _T.from_base(ma)


def right_task[R, T](ma: Task[T]) -> ReaderTaskEither[R, T, typing.Never]:
    return from_task_either(_te.right_task(ma))


def left_task[R, E](me: Task[E]) -> ReaderTaskEither[R, typing.Never, E]:
    return from_task_either(_te.left_task(me))


def right_io[R, T](ma: IO[T]) -> ReaderTaskEither[R, T, typing.Never]:
    return from_task_either(_te.right_io(ma))


def left_io[R, E](me: IO[E]) -> ReaderTaskEither[R, typing.Never, E]:
    return from_task_either(_te.left_io(me))


def right_reader[R, T](ma: Reader[R, T]) -> ReaderTaskEither[R, T, typing.Never]:
    return _T.from_reader(ma)


def left_reader[R, E](me: Reader[R, E]) -> ReaderTaskEither[R, typing.Never, E]:
    def run(r: R) -> TaskEither[typing.Never, E]:
        return _te.left(me(r))

    return run


def from_io_either[R, T, E](ma: IOEither[T, E]) -> ReaderTaskEither[R, T, E]:
    return from_task_either(_te.from_io_either(ma))


def from_reader_either[R, T, E](ma: ReaderEither[R, T, E]) -> ReaderTaskEither[R, T, E]:
    """The reader runs when the task runs, not when the environment is supplied."""

    def run(r: R) -> TaskEither[T, E]:
        return _te.from_io_either(lambda: ma(r))

    return run


def from_result[R, T, E](r: Result[T, E]) -> ReaderTaskEither[R, T, E]:
    return from_task_either(_te.from_result(r))


def from_optional[R, T, E](value: T | None, on_none: Lazy[E]) -> ReaderTaskEither[R, T, E]:
    return from_task_either(_te.from_optional(value, on_none))


def from_predicate[R, T, E](
    value: T,
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> ReaderTaskEither[R, T, E]:
    return from_task_either(_te.from_predicate(value, predicate, on_false))


# ============================================================================
# Environment
# ============================================================================


def ask[R]() -> ReaderTaskEither[R, R, typing.Never]:
    return _T.ask()


def asks[R, T](f: Callable[[R], T]) -> ReaderTaskEither[R, T, typing.Never]:
    return _T.asks(f)


def local[Q, R, T, E](ma: ReaderTaskEither[R, T, E], f: Callable[[Q], R]) -> ReaderTaskEither[Q, T, E]:
    """Run ma against the environment derived by f. Nothing runs until invoked."""
    return _T.local(ma, f)


# ============================================================================
# Composition
# ============================================================================


def map[R, T, U, E](ma: ReaderTaskEither[R, T, E], f: Callable[[T], U]) -> ReaderTaskEither[R, U, E]:
    return _T.map(ma, f)


def map_failure[R, T, E, F](
    ma: ReaderTaskEither[R, T, E],
    f: Callable[[E], F],
) -> ReaderTaskEither[R, T, F]:
    def run(r: R) -> TaskEither[T, F]:
        return _te.map_failure(ma(r), f)

    return run


def bimap[R, T, U, E, F](
    ma: ReaderTaskEither[R, T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> ReaderTaskEither[R, U, F]:
    def run(r: R) -> TaskEither[U, F]:
        return _te.bimap(ma(r), f, g)

    return run


def chain[R, T, U, E](
    ma: ReaderTaskEither[R, T, E],
    f: Callable[[T], ReaderTaskEither[R, U, E]],
) -> ReaderTaskEither[R, U, E]:
    return _T.chain(ma, f)


def chain_first[R, T, U, E](
    ma: ReaderTaskEither[R, T, E],
    f: Callable[[T], ReaderTaskEither[R, U, E]],
) -> ReaderTaskEither[R, T, E]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[R, T, E](
    mma: ReaderTaskEither[R, ReaderTaskEither[R, T, E], E],
) -> ReaderTaskEither[R, T, E]:
    return chain(mma, identity)


def ap[R, T, U, E](
    mab: ReaderTaskEither[R, Callable[[T], U], E],
    ma: ReaderTaskEither[R, T, E],
) -> ReaderTaskEither[R, U, E]:
    return _T.ap(mab, ma)


def ap_seq[R, T, U, E](
    mab: ReaderTaskEither[R, Callable[[T], U], E],
    ma: ReaderTaskEither[R, T, E],
) -> ReaderTaskEither[R, U, E]:
    return _T_seq.ap(mab, ma)


def ap_first[R, T, U, E](
    ma: ReaderTaskEither[R, T, E],
    mb: ReaderTaskEither[R, U, E],
) -> ReaderTaskEither[R, T, E]:
    """Run both at once, keep the first value."""
    return ap(map(ma, constant), mb)


def ap_second[R, T, U, E](
    ma: ReaderTaskEither[R, T, E],
    mb: ReaderTaskEither[R, U, E],
) -> ReaderTaskEither[R, U, E]:
    return ap(map(ma, lambda _: lambda b: b), mb)


def alt[R, T, E](
    ma: ReaderTaskEither[R, T, E],
    that: Lazy[ReaderTaskEither[R, T, E]],
) -> ReaderTaskEither[R, T, E]:
    def run(r: R) -> TaskEither[T, E]:
        return _te.alt(ma(r), lambda: that()(r))

    return run


def or_else[R, T, E, F](
    ma: ReaderTaskEither[R, T, E],
    f: Callable[[E], ReaderTaskEither[R, T, F]],
) -> ReaderTaskEither[R, T, F]:
    def run(r: R) -> TaskEither[T, F]:
        return _te.or_else(ma(r), lambda e: f(e)(r))

    return run


def swap[R, T, E](ma: ReaderTaskEither[R, T, E]) -> ReaderTaskEither[R, E, T]:
    def run(r: R) -> TaskEither[E, T]:
        return _te.swap(ma(r))

    return run


def filter_or_else[R, T, E](
    ma: ReaderTaskEither[R, T, E],
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> ReaderTaskEither[R, T, E]:
    def run(r: R) -> TaskEither[T, E]:
        return _te.filter_or_else(ma(r), predicate, on_false)

    return run


# ============================================================================
# Eliminators
# ============================================================================


def fold[R, T, E, B](
    ma: ReaderTaskEither[R, T, E],
    on_failure: Callable[[E], ReaderTask[R, B]],
    on_success: Callable[[T], ReaderTask[R, B]],
) -> ReaderTask[R, B]:
    def run(r: R) -> Task[B]:
        return _te.fold(ma(r), lambda e: on_failure(e)(r), lambda a: on_success(a)(r))

    return run


def get_or_else[R, T, E](
    ma: ReaderTaskEither[R, T, E],
    on_failure: Callable[[E], ReaderTask[R, T]],
) -> ReaderTask[R, T]:
    def run(r: R) -> Task[T]:
        return _te.get_or_else(ma(r), lambda e: on_failure(e)(r))

    return run


# ============================================================================
# Resources
# ============================================================================


def bracket[R, A, B, E](
    acquire: ReaderTaskEither[R, A, E],
    use: Callable[[A], ReaderTaskEither[R, B, E]],
    release: Callable[[A, Result[B, E]], ReaderTaskEither[R, None, E]],
) -> ReaderTaskEither[R, B, E]:
    """TaskEither bracket with the same environment given to every phase."""

    def run(r: R) -> TaskEither[B, E]:
        return _te.bracket(
            acquire(r),
            lambda a: use(a)(r),
            lambda a, outcome: release(a, outcome)(r),
        )

    return run


# ============================================================================
# Instances
# ============================================================================


def get_semigroup[R, T, E](S: Semigroup[T]) -> Semigroup[ReaderTaskEither[R, T, E]]:
    return _reader.get_semigroup(_te.get_semigroup(S))


def get_apply_semigroup[R, T, E](S: Semigroup[T]) -> Semigroup[ReaderTaskEither[R, T, E]]:
    return _reader.get_semigroup(_te.get_apply_semigroup(S))


def get_apply_monoid[R, T, E](M: Monoid[T]) -> Monoid[ReaderTaskEither[R, T, E]]:
    return Monoid(get_apply_semigroup(M.to_semigroup()).concat, right(M.empty))


reader_task_either = _T.monad("ReaderTaskEither")
reader_task_either_seq = _T_seq.monad("ReaderTaskEitherSeq")

__all__ = (
    "run",
    "right",
    "left",
    "from_task_either",
    "right_task",
    "left_task",
    "right_io",
    "left_io",
    "right_reader",
    "left_reader",
    "from_io_either",
    "from_reader_either",
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
    "ap_seq",
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
    "reader_task_either",
    "reader_task_either_seq",
)
