"""
Result combinators
==================

Free functions over kungfu's ``Result`` (``Ok`` / ``Error``).

Every function is total over well-formed values and never mutates its
input. Failures pass through ``map`` / ``chain`` untouched: once an
``Error`` appears, no callback on the success side runs.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._types import Lazy, Predicate
from .semigroup import Monoid, Semigroup

logger = logging.getLogger(__name__)


# ============================================================================
# Constructors
# ============================================================================


def success[T](value: T) -> Result[T, typing.Never]:
    return Ok(value)


def failure[E](error: E) -> Result[typing.Never, E]:
    return Error(error)


def from_optional[T, E](value: T | None, on_none: Lazy[E]) -> Result[T, E]:
    """
    Convert Optional to Result. None becomes Error(on_none()).

    NOTE: on_none is a thunk to avoid computing the error when value is present.
    """
    if value is None:
        return Error(on_none())
    return Ok(value)


def from_predicate[T, E](
    value: T,
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> Result[T, E]:
    if predicate(value):
        return Ok(value)
    return Error(on_false(value))


def try_catch[T, E](
    thunk: Lazy[T],
    on_error: Callable[[Exception], E],
) -> Result[T, E]:
    """
    Execute sync thunk, catch exceptions and convert to Error.

    Bridge between exception-based code and Result-based code.
    """
    try:
        return Ok(thunk())
    except Exception as exc:
        logger.debug("try_catch captured %r", exc)
        return Error(on_error(exc))


# ============================================================================
# Refinements
# ============================================================================


def is_success[T, E](r: Result[T, E]) -> bool:
    return isinstance(r, Ok)


def is_failure[T, E](r: Result[T, E]) -> bool:
    return isinstance(r, Error)


def exists[T, E](r: Result[T, E], predicate: Predicate[T]) -> bool:
    match r:
        case Ok(value):
            return predicate(value)
        case Error(_):
            return False


# ============================================================================
# Functor / Monad
# ============================================================================


def map[T, U, E](r: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:
    match r:
        case Ok(value):
            return Ok(f(value))
        case Error(_):
            return r


def map_failure[T, E, F](r: Result[T, E], f: Callable[[E], F]) -> Result[T, F]:
    match r:
        case Ok(_):
            return r
        case Error(error):
            return Error(f(error))


def bimap[T, U, E, F](
    r: Result[T, E],
    f: Callable[[E], F],
    g: Callable[[T], U],
) -> Result[U, F]:
    match r:
        case Ok(value):
            return Ok(g(value))
        case Error(error):
            return Error(f(error))


def chain[T, U, E](r: Result[T, E], f: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """
    Monadic bind (>>=).

    - On Ok: returns f(value)
    - On Error: short-circuit, returns the original Error unchanged
    """
    match r:
        case Ok(value):
            return f(value)
        case Error(_):
            return r


def flatten[T, E](rr: Result[Result[T, E], E]) -> Result[T, E]:
    match rr:
        case Ok(inner):
            return inner
        case Error(_):
            return rr


def ap[T, U, E](rf: Result[Callable[[T], U], E], r: Result[T, E]) -> Result[U, E]:
    """Apply wrapped function to wrapped value. The function's Error wins."""
    match rf:
        case Ok(f):
            return map(r, f)
        case Error(_):
            return rf


# ============================================================================
# Eliminators
# ============================================================================


def fold[T, E, B](
    r: Result[T, E],
    on_failure: Callable[[E], B],
    on_success: Callable[[T], B],
) -> B:
    match r:
        case Ok(value):
            return on_success(value)
        case Error(error):
            return on_failure(error)


def get_or_else[T, E](r: Result[T, E], default: T) -> T:
    match r:
        case Ok(value):
            return value
        case Error(_):
            return default


def get_or_else_with[T, E](r: Result[T, E], on_failure: Callable[[E], T]) -> T:
    match r:
        case Ok(value):
            return value
        case Error(error):
            return on_failure(error)


# ============================================================================
# Recovery
# ============================================================================


def swap[T, E](r: Result[T, E]) -> Result[E, T]:
    match r:
        case Ok(value):
            return Error(value)
        case Error(error):
            return Ok(error)


def alt[T, E](r: Result[T, E], that: Lazy[Result[T, E]]) -> Result[T, E]:
    """Return r if it succeeded, otherwise build and return that(). Lazy."""
    match r:
        case Ok(_):
            return r
        case Error(_):
            return that()


def or_else[T, E, F](r: Result[T, E], f: Callable[[E], Result[T, F]]) -> Result[T, F]:
    match r:
        case Ok(_):
            return r
        case Error(error):
            return f(error)


def filter_or_else[T, E](
    r: Result[T, E],
    predicate: Predicate[T],
    on_false: Callable[[T], E],
) -> Result[T, E]:
    """Turn Ok into Error if value fails predicate."""
    return chain(r, lambda value: from_predicate(value, predicate, on_false))


# ============================================================================
# Semigroups
# ============================================================================


def get_semigroup[T, E](S: Semigroup[T]) -> Semigroup[Result[T, E]]:
    """
    Semigroup returning the left-most Error-free value.
    If both operands are Ok, the inner values are concatenated.
    """

    def concat(x: Result[T, E], y: Result[T, E]) -> Result[T, E]:
        match x, y:
            case Ok(a), Ok(b):
                return Ok(S.concat(a, b))
            case Error(_), _:
                return y
            case _:
                return x

    return Semigroup(concat)


def get_apply_semigroup[T, E](S: Semigroup[T]) -> Semigroup[Result[T, E]]:
    """Semigroup where any Error wins (left-most first). Both Ok are concatenated."""

    def concat(x: Result[T, E], y: Result[T, E]) -> Result[T, E]:
        match x, y:
            case Ok(a), Ok(b):
                return Ok(S.concat(a, b))
            case Error(_), _:
                return x
            case _:
                return y

    return Semigroup(concat)


def get_apply_monoid[T, E](M: Monoid[T]) -> Monoid[Result[T, E]]:
    return Monoid(get_apply_semigroup(M.to_semigroup()).concat, Ok(M.empty))


__all__ = (
    "success",
    "failure",
    "from_optional",
    "from_predicate",
    "try_catch",
    "is_success",
    "is_failure",
    "exists",
    "map",
    "map_failure",
    "bimap",
    "chain",
    "flatten",
    "ap",
    "fold",
    "get_or_else",
    "get_or_else_with",
    "swap",
    "alt",
    "or_else",
    "filter_or_else",
    "get_semigroup",
    "get_apply_semigroup",
    "get_apply_monoid",
)
