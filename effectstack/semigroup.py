"""
Semigroup and Monoid records
============================

Explicit instance records for "how to combine two values". Used to
accumulate failures in validation and to combine stack results.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Semigroup[A]:
    """Associative binary operation."""

    concat: Callable[[A, A], A]


@dataclass(frozen=True, slots=True)
class Monoid[A]:
    """Semigroup with an identity element."""

    concat: Callable[[A, A], A]
    empty: A

    def to_semigroup(self) -> Semigroup[A]:
        return Semigroup(self.concat)


def _add(x: typing.Any, y: typing.Any) -> typing.Any:
    return x + y


def _mul(x: typing.Any, y: typing.Any) -> typing.Any:
    return x * y


def _first[A](x: A, _: A) -> A:
    return x


def _last[A](_: A, y: A) -> A:
    return y


def _concat_lists[A](x: list[A], y: list[A]) -> list[A]:
    return [*x, *y]


semigroup_sum: Semigroup[typing.Any] = Semigroup(_add)
semigroup_product: Semigroup[typing.Any] = Semigroup(_mul)
semigroup_string: Semigroup[str] = Semigroup(_add)
semigroup_first: Semigroup[typing.Any] = Semigroup(_first)
semigroup_last: Semigroup[typing.Any] = Semigroup(_last)

monoid_sum: Monoid[typing.Any] = Monoid(_add, 0)
monoid_string: Monoid[str] = Monoid(_add, "")


def get_list_semigroup[A]() -> Semigroup[list[A]]:
    """Concatenation of lists. Always builds a new list."""
    return Semigroup(_concat_lists)


def get_list_monoid[A]() -> Monoid[list[A]]:
    return Monoid(_concat_lists, [])


__all__ = (
    "Semigroup",
    "Monoid",
    "semigroup_sum",
    "semigroup_product",
    "semigroup_string",
    "semigroup_first",
    "semigroup_last",
    "monoid_sum",
    "monoid_string",
    "get_list_semigroup",
    "get_list_monoid",
)
