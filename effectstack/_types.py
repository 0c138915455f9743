"""
Core type definitions for effectstack.

Every effect is a plain callable describing a computation. Nothing here
stores an outcome: invoking the callable (again) runs the computation
(again).
"""

from __future__ import annotations

import typing
from collections.abc import Awaitable, Callable

from kungfu import LazyCoroResult, Result

# ============================================================================
# Type aliases
# ============================================================================

# Predicate = function that tests a value
type Predicate[T] = Callable[[T], bool]

# Lazy = zero-arg thunk, used for lazily built alternatives and errors
type Lazy[T] = Callable[[], T]

# NoError = type representing "never fails" semantic
type NoError = typing.Never

# ============================================================================
# Base effects
# ============================================================================

# IO = synchronous computation, runs on every call
type IO[A] = Callable[[], A]

# Task = asynchronous computation, every call starts a new coroutine
type Task[A] = Callable[[], Awaitable[A]]

# Reader = computation depending on an injected environment
type Reader[R, A] = Callable[[R], A]

# State = computation threading a state value
type State[S, A] = Callable[[S], tuple[A, S]]

# ============================================================================
# Stacks
# ============================================================================

type IOEither[T, E] = Callable[[], Result[T, E]]

# NOTE: TaskEither is kungfu's LazyCoroResult, so every stack built on it
#       can be awaited and composed with kungfu directly.
type TaskEither[T, E] = LazyCoroResult[T, E]

type ReaderEither[R, T, E] = Callable[[R], Result[T, E]]

type ReaderTaskEither[R, T, E] = Callable[[R], LazyCoroResult[T, E]]

type StateReaderTaskEither[S, R, T, E] = Callable[[S], ReaderTaskEither[R, tuple[T, S], E]]

__all__ = (
    "Predicate",
    "Lazy",
    "NoError",
    "IO",
    "Task",
    "Reader",
    "State",
    "IOEither",
    "TaskEither",
    "ReaderEither",
    "ReaderTaskEither",
    "StateReaderTaskEither",
)
