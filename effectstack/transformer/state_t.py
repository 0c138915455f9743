"""
StateT: state-threading effects over any base
=============================================

``StateT(M)`` values are functions ``S -> M[(A, S)]``. Each step receives
the state produced by the previous one; nothing is shared between runs.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import first, second
from ..monad import Monad

# S -> M[(A, S)] for the base record's effect type
type StateOf = Callable[[typing.Any], typing.Any]


class StateT:
    """State-threading combinators generic over the base effect."""

    __slots__ = ("_m",)

    def __init__(self, base: Monad, /) -> None:
        self._m = base

    @property
    def base(self) -> Monad:
        return self._m

    def __repr__(self) -> str:
        return f"StateT({self._m.name})"

    def of(self, value: typing.Any) -> StateOf:
        m = self._m
        return lambda s: m.of((value, s))

    def map(self, ma: StateOf, f: Callable[[typing.Any], typing.Any]) -> StateOf:
        m = self._m

        def run(s: typing.Any) -> typing.Any:
            return m.map(ma(s), lambda pair: (f(pair[0]), pair[1]))

        return run

    def chain(self, ma: StateOf, f: Callable[[typing.Any], StateOf]) -> StateOf:
        m = self._m

        def run(s: typing.Any) -> typing.Any:
            return m.chain(ma(s), lambda pair: f(pair[0])(pair[1]))

        return run

    def ap(self, mab: StateOf, ma: StateOf) -> StateOf:
        # State must flow left to right, so apply is always sequential
        return self.chain(mab, lambda f: self.map(ma, f))

    def get(self) -> StateOf:
        m = self._m
        return lambda s: m.of((s, s))

    def put(self, s: typing.Any) -> StateOf:
        m = self._m
        return lambda _: m.of((None, s))

    def modify(self, f: Callable[[typing.Any], typing.Any]) -> StateOf:
        m = self._m
        return lambda s: m.of((None, f(s)))

    def gets(self, f: Callable[[typing.Any], typing.Any]) -> StateOf:
        m = self._m
        return lambda s: m.of((f(s), s))

    def from_base(self, ma: typing.Any) -> StateOf:
        m = self._m
        return lambda s: m.map(ma, lambda a: (a, s))

    def from_state(self, sa: Callable[[typing.Any], tuple[typing.Any, typing.Any]]) -> StateOf:
        m = self._m
        return lambda s: m.of(sa(s))

    def eval_state(self, ma: StateOf, s: typing.Any) -> typing.Any:
        return self._m.map(ma(s), first)

    def exec_state(self, ma: StateOf, s: typing.Any) -> typing.Any:
        return self._m.map(ma(s), second)

    def monad(self, name: str | None = None) -> Monad:
        return Monad(
            name=name or f"StateT({self._m.name})",
            of=self.of,
            map=self.map,
            chain=self.chain,
            ap=self.ap,
        )


__all__ = ("StateT",)
