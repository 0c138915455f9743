"""
StateReaderTaskEither combinators
=================================

``ReaderTaskEither`` with a state value threaded through every step:
``S -> R -> TaskEither[(T, S), E]``.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

from . import reader_task_either as _rte
from ._helpers import identity
from ._types import (
    IO,
    IOEither,
    Lazy,
    Reader,
    ReaderEither,
    ReaderTaskEither,
    State,
    StateReaderTaskEither,
    Task,
    TaskEither,
)
from .transformer import StateT

_T = StateT(_rte.reader_task_either)
_T_seq = StateT(_rte.reader_task_either_seq)


async def run[S, R, T, E](ma: StateReaderTaskEither[S, R, T, E], s: S, r: R) -> Result[tuple[T, S], E]:
    """Supply initial state and environment, run, return (value, final state)."""
    return await ma(s)(r)()


def eval_state[S, R, T, E](ma: StateReaderTaskEither[S, R, T, E], s: S) -> ReaderTaskEither[R, T, E]:
    return _T.eval_state(ma, s)


def exec_state[S, R, T, E](ma: StateReaderTaskEither[S, R, T, E], s: S) -> ReaderTaskEither[R, S, E]:
    return _T.exec_state(ma, s)


# ============================================================================
# Constructors
# ============================================================================


def right[S, R, T](value: T) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return _T.of(value)


def left[S, R, E](error: E) -> StateReaderTaskEither[S, R, typing.Never, E]:
    return from_reader_task_either(_rte.left(error))


def from_reader_task_either[S, R, T, E](ma: ReaderTaskEither[R, T, E]) -> StateReaderTaskEither[S, R, T, E]:
    return _T.from_base(ma)


def from_task_either[S, R, T, E](ma: TaskEither[T, E]) -> StateReaderTaskEither[S, R, T, E]:
    return from_reader_task_either(_rte.from_task_either(ma))


def right_task[S, R, T](ma: Task[T]) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return from_reader_task_either(_rte.right_task(ma))


def left_task[S, R, E](me: Task[E]) -> StateReaderTaskEither[S, R, typing.Never, E]:
    return from_reader_task_either(_rte.left_task(me))


def right_io[S, R, T](ma: IO[T]) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return from_reader_task_either(_rte.right_io(ma))


def left_io[S, R, E](me: IO[E]) -> StateReaderTaskEither[S, R, typing.Never, E]:
    return from_reader_task_either(_rte.left_io(me))


def right_reader[S, R, T](ma: Reader[R, T]) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return from_reader_task_either(_rte.right_reader(ma))


def left_reader[S, R, E](me: Reader[R, E]) -> StateReaderTaskEither[S, R, typing.Never, E]:
    return from_reader_task_either(_rte.left_reader(me))


def right_state[S, R, T](ma: State[S, T]) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return _T.from_state(ma)


def left_state[S, R, E](me: State[S, E]) -> StateReaderTaskEither[S, R, typing.Never, E]:
    """Failure computed from the state; the state change is dropped with the failure."""

    def run_state(s: S) -> ReaderTaskEither[R, typing.Never, E]:
        error, _ = me(s)
        return _rte.left(error)

    return run_state


def from_io_either[S, R, T, E](ma: IOEither[T, E]) -> StateReaderTaskEither[S, R, T, E]:
    return from_reader_task_either(_rte.from_io_either(ma))


def from_reader_either[S, R, T, E](ma: ReaderEither[R, T, E]) -> StateReaderTaskEither[S, R, T, E]:
    return from_reader_task_either(_rte.from_reader_either(ma))


def from_result[S, R, T, E](r: Result[T, E]) -> StateReaderTaskEither[S, R, T, E]:
    return from_reader_task_either(_rte.from_result(r))


# ============================================================================
# State
# ============================================================================


def get[S, R]() -> StateReaderTaskEither[S, R, S, typing.Never]:
    return _T.get()


def put[S, R](s: S) -> StateReaderTaskEither[S, R, None, typing.Never]:
    return _T.put(s)


def modify[S, R](f: Callable[[S], S]) -> StateReaderTaskEither[S, R, None, typing.Never]:
    return _T.modify(f)


def gets[S, R, T](f: Callable[[S], T]) -> StateReaderTaskEither[S, R, T, typing.Never]:
    return _T.gets(f)


# ============================================================================
# Composition
# ============================================================================


def map[S, R, T, U, E](
    ma: StateReaderTaskEither[S, R, T, E],
    f: Callable[[T], U],
) -> StateReaderTaskEither[S, R, U, E]:
    return _T.map(ma, f)


def map_failure[S, R, T, E, F](
    ma: StateReaderTaskEither[S, R, T, E],
    f: Callable[[E], F],
) -> StateReaderTaskEither[S, R, T, F]:
    def run_state(s: S) -> ReaderTaskEither[R, tuple[T, S], F]:
        return _rte.map_failure(ma(s), f)

    return run_state


def bimap[S, R, T, U, E, F](
    ma: StateReaderTaskEither[S, R, T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> StateReaderTaskEither[S, R, U, F]:
    def run_state(s: S) -> ReaderTaskEither[R, tuple[U, S], F]:
        return _rte.bimap(ma(s), f, lambda pair: (g(pair[0]), pair[1]))

    return run_state


def chain[S, R, T, U, E](
    ma: StateReaderTaskEither[S, R, T, E],
    f: Callable[[T], StateReaderTaskEither[S, R, U, E]],
) -> StateReaderTaskEither[S, R, U, E]:
    return _T.chain(ma, f)


def chain_first[S, R, T, U, E](
    ma: StateReaderTaskEither[S, R, T, E],
    f: Callable[[T], StateReaderTaskEither[S, R, U, E]],
) -> StateReaderTaskEither[S, R, T, E]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[S, R, T, E](
    mma: StateReaderTaskEither[S, R, StateReaderTaskEither[S, R, T, E], E],
) -> StateReaderTaskEither[S, R, T, E]:
    return chain(mma, identity)


def ap[S, R, T, U, E](
    mab: StateReaderTaskEither[S, R, Callable[[T], U], E],
    ma: StateReaderTaskEither[S, R, T, E],
) -> StateReaderTaskEither[S, R, U, E]:
    return _T.ap(mab, ma)


def alt[S, R, T, E](
    ma: StateReaderTaskEither[S, R, T, E],
    that: Lazy[StateReaderTaskEither[S, R, T, E]],
) -> StateReaderTaskEither[S, R, T, E]:
    """On failure, run that() from the same initial state."""

    def run_state(s: S) -> ReaderTaskEither[R, tuple[T, S], E]:
        return _rte.alt(ma(s), lambda: that()(s))

    return run_state


state_reader_task_either = _T.monad("StateReaderTaskEither")
state_reader_task_either_seq = _T_seq.monad("StateReaderTaskEitherSeq")

__all__ = (
    "run",
    "eval_state",
    "exec_state",
    "right",
    "left",
    "from_reader_task_either",
    "from_task_either",
    "right_task",
    "left_task",
    "right_io",
    "left_io",
    "right_reader",
    "left_reader",
    "right_state",
    "left_state",
    "from_io_either",
    "from_reader_either",
    "from_result",
    "get",
    "put",
    "modify",
    "gets",
    "map",
    "map_failure",
    "bimap",
    "chain",
    "chain_first",
    "flatten",
    "ap",
    "alt",
    "state_reader_task_either",
    "state_reader_task_either_seq",
)
