"""
TaskEither combinators
======================

``TaskEither[T, E]`` is an asynchronous effect producing ``Result[T, E]``,
represented by kungfu's ``LazyCoroResult``: nothing runs until it is called
(or awaited), and every call starts a fresh run.

Generic machinery lives in ``EitherT``; functions here wrap its output
back into ``LazyCoroResult``.
"""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Awaitable, Callable
from functools import wraps

from kungfu import Error, LazyCoroResult, Ok, Result

from . import result as _result
from . import task as _task
from ._helpers import constant, identity
from ._types import IO, IOEither, Lazy, Predicate, Task, TaskEither
from .monad import Monad
from .semigroup import Monoid, Semigroup
from .transformer import EitherT, ValidationT

logger = logging.getLogger(__name__)

_T = EitherT(_task.task)


# ============================================================================
# Constructors
# ============================================================================


def right[T](value: T) -> TaskEither[T, typing.Never]:
    return LazyCoroResult(_T.right(value))


def left[E](error: E) -> TaskEither[typing.Never, E]:
    return LazyCoroResult(_T.left(error))


def right_task[T](ma: Task[T]) -> TaskEither[T, typing.Never]:
    return LazyCoroResult(_T.right_base(ma))


def left_task[E](me: Task[E]) -> TaskEither[typing.Never, E]:
    return LazyCoroResult(_T.left_base(me))


def right_io[T](ma: IO[T]) -> TaskEither[T, typing.Never]:
    return right_task(_task.from_io(ma))


def left_io[E](me: IO[E]) -> TaskEither[typing.Never, E]:
    return left_task(_task.from_io(me))


def from_io_either[T, E](ma: IOEither[T, E]) -> TaskEither[T, E]:
    return LazyCoroResult(_task.from_io(ma))


def from_result[T, E](r: Result[T, E]) -> TaskEither[T, E]:
    """
    Lift already-computed Result.

    NOTE: This is NOT lazy: the result is already computed.
          For lazy evaluation, use try_catch or from_io_either with a thunk.
    """
    return LazyCoroResult(_T.from_result(r))


def from_optional[T, E](value: T | None, on_none: Lazy[E]) -> TaskEither[T, E]:
    """Convert Optional to TaskEither. None becomes Error(on_none())."""

    async def run() -> Result[T, E]:
        return _result.from_optional(value, on_none)

    return LazyCoroResult(run)


def from_predicate[T, E](
    value: T,
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> TaskEither[T, E]:
    async def run() -> Result[T, E]:
        return _result.from_predicate(value, predicate, on_false)

    return LazyCoroResult(run)


def try_catch[T, E](
    thunk: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
) -> TaskEither[T, E]:
    """
    Run an async thunk, catch exceptions and convert to Error.

    **When to use:** Bridge between exception-based code (third-party
    clients, legacy code) and TaskEither pipelines.

    Example:
        def fetch_external(url: str) -> TaskEither[Response, FetchError]:
            return try_catch(
                lambda: client.get(url),
                on_error=lambda e: FetchError(str(e)),
            )

    NOTE: Catches all Exception subclasses; cancellation still propagates.
    """

    async def run() -> Result[T, E]:
        try:
            return Ok(await thunk())
        except Exception as exc:
            logger.debug("try_catch captured %r", exc)
            return Error(on_error(exc))

    return LazyCoroResult(run)


def taskify[E, T](f: Callable[..., typing.Any]) -> Callable[..., TaskEither[T, E]]:
    """
    Adapt a callback-style function into one returning TaskEither.

    f is called as f(*args, callback) where callback(err, value) reports
    completion. A non-None err becomes Error(err), otherwise Ok(value). Only
    the first callback invocation counts; later ones are ignored. The
    callback may be invoked from any thread.

    Example:
        read = taskify(legacy_read)          # legacy_read(path, cb)
        result = await read("config.toml")() # Ok(data) | Error(err)
    """

    @wraps(f)
    def wrapper(*args: typing.Any) -> TaskEither[T, E]:
        async def run() -> Result[T, E]:
            loop = asyncio.get_running_loop()
            settled: asyncio.Future[Result[T, E]] = loop.create_future()

            def settle(err: E | None, value: T | None) -> None:
                if settled.done():
                    logger.debug("taskify: ignoring repeated callback from %s", getattr(f, "__name__", f))
                    return
                settled.set_result(Error(err) if err is not None else Ok(typing.cast(T, value)))

            def callback(err: E | None = None, value: T | None = None) -> None:
                loop.call_soon_threadsafe(settle, err, value)

            f(*args, callback)
            return await settled

        return LazyCoroResult(run)

    return wrapper


# ============================================================================
# Composition
# ============================================================================


def map[T, U, E](ma: TaskEither[T, E], f: Callable[[T], U]) -> TaskEither[U, E]:
    return LazyCoroResult(_T.map(ma, f))


def map_failure[T, E, F](ma: TaskEither[T, E], f: Callable[[E], F]) -> TaskEither[T, F]:
    return LazyCoroResult(_T.map_failure(ma, f))


def bimap[T, U, E, F](
    ma: TaskEither[T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> TaskEither[U, F]:
    return LazyCoroResult(_T.bimap(ma, f, g))


def chain[T, U, E](ma: TaskEither[T, E], f: Callable[[T], TaskEither[U, E]]) -> TaskEither[U, E]:
    """
    Wait for ma; on Ok start f(value), on Error stop.

    f is never called after a failure, so the effect it would build never runs.
    """
    return LazyCoroResult(_T.chain(ma, f))


def chain_first[T, U, E](ma: TaskEither[T, E], f: Callable[[T], TaskEither[U, E]]) -> TaskEither[T, E]:
    return chain(ma, lambda a: map(f(a), lambda _: a))


def flatten[T, E](mma: TaskEither[TaskEither[T, E], E]) -> TaskEither[T, E]:
    return chain(mma, identity)


def ap[T, U, E](mab: TaskEither[Callable[[T], U], E], ma: TaskEither[T, E]) -> TaskEither[U, E]:
    """Start both sides at once; combine when both settle."""
    return LazyCoroResult(_T.ap(mab, ma))


def ap_seq[T, U, E](mab: TaskEither[Callable[[T], U], E], ma: TaskEither[T, E]) -> TaskEither[U, E]:
    """Left to right: ma only starts after mab succeeded."""
    return LazyCoroResult(_T.ap_seq(mab, ma))


def ap_first[T, U, E](ma: TaskEither[T, E], mb: TaskEither[U, E]) -> TaskEither[T, E]:
    return ap(map(ma, constant), mb)


def ap_second[T, U, E](ma: TaskEither[T, E], mb: TaskEither[U, E]) -> TaskEither[U, E]:
    return ap(map(ma, lambda _: lambda b: b), mb)


def alt[T, E](ma: TaskEither[T, E], that: Lazy[TaskEither[T, E]]) -> TaskEither[T, E]:
    """Try that() if ma fails. that is only built when ma failed."""
    return LazyCoroResult(_T.alt(ma, that))


def or_else[T, E, F](ma: TaskEither[T, E], f: Callable[[E], TaskEither[T, F]]) -> TaskEither[T, F]:
    """Compute a replacement based on ma's error."""
    return LazyCoroResult(_T.or_else(ma, f))


def swap[T, E](ma: TaskEither[T, E]) -> TaskEither[E, T]:
    return LazyCoroResult(_T.swap(ma))


def filter_or_else[T, E](
    ma: TaskEither[T, E],
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> TaskEither[T, E]:
    """Turn Ok into Error if value fails predicate."""
    return chain(ma, lambda a: from_predicate(a, predicate, on_false))


def delay[T, E](ma: TaskEither[T, E], *, seconds: float) -> TaskEither[T, E]:
    """Sleep before running."""
    return LazyCoroResult(_task.delay(ma, seconds=seconds))


# ============================================================================
# Eliminators
# ============================================================================


def fold[T, E, B](
    ma: TaskEither[T, E],
    on_failure: Callable[[E], Task[B]],
    on_success: Callable[[T], Task[B]],
) -> Task[B]:
    return _T.fold(ma, on_failure, on_success)


def get_or_else[T, E](ma: TaskEither[T, E], on_failure: Callable[[E], Task[T]]) -> Task[T]:
    return _T.get_or_else(ma, on_failure)


# ============================================================================
# Resources
# ============================================================================


def bracket[A, B, E](
    acquire: TaskEither[A, E],
    use: Callable[[A], TaskEither[B, E]],
    release: Callable[[A, Result[B, E]], TaskEither[None, E]],
) -> TaskEither[B, E]:
    """
    Resource management: acquire → use → release (always).

    release runs exactly once after a successful acquire, with the outcome
    of use, even when use raises. A failure of use wins over a failure of
    release.
    """
    return LazyCoroResult(_T.bracket(acquire, use, release))


# ============================================================================
# Instances
# ============================================================================


def get_semigroup[T, E](S: Semigroup[T]) -> Semigroup[TaskEither[T, E]]:
    inner = _task.get_semigroup(_result.get_semigroup(S))
    return Semigroup(lambda x, y: LazyCoroResult(inner.concat(x, y)))


def get_apply_semigroup[T, E](S: Semigroup[T]) -> Semigroup[TaskEither[T, E]]:
    inner = _task.get_semigroup(_result.get_apply_semigroup(S))
    return Semigroup(lambda x, y: LazyCoroResult(inner.concat(x, y)))


def get_apply_monoid[T, E](M: Monoid[T]) -> Monoid[TaskEither[T, E]]:
    return Monoid(get_apply_semigroup(M.to_semigroup()).concat, right(M.empty))


def get_task_validation[E](S: Semigroup[E]) -> ValidationT:
    """TaskEither combinators that accumulate failures with S."""
    return ValidationT(_task.task, S, wrap=LazyCoroResult)


task_either = Monad(
    name="TaskEither",
    of=right,
    map=map,
    chain=chain,
    ap=ap,
    attempt=lambda ma: LazyCoroResult(_T.attempt(ma)),
    throw=_task.throw,
)

task_either_seq = Monad(
    name="TaskEitherSeq",
    of=right,
    map=map,
    chain=chain,
    ap=ap_seq,
    attempt=task_either.attempt,
    throw=_task.throw,
)

__all__ = (
    "right",
    "left",
    "right_task",
    "left_task",
    "right_io",
    "left_io",
    "from_io_either",
    "from_result",
    "from_optional",
    "from_predicate",
    "try_catch",
    "taskify",
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
    "delay",
    "fold",
    "get_or_else",
    "bracket",
    "get_semigroup",
    "get_apply_semigroup",
    "get_apply_monoid",
    "get_task_validation",
    "task_either",
    "task_either_seq",
)
