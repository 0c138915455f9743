"""Internal helpers for effectstack.

Small functions shared by several stack modules.
These are not part of the public API but can be used when building custom stacks."""

from __future__ import annotations

from collections.abc import Callable


def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


def constant[T](value: T) -> Callable[..., T]:
    """Function ignoring its arguments and returning value."""

    def const(*_: object) -> T:
        return value

    return const


def first[A, B](pair: tuple[A, B]) -> A:
    return pair[0]


def second[A, B](pair: tuple[A, B]) -> B:
    return pair[1]


__all__ = (
    "identity",
    "constant",
    "first",
    "second",
)
