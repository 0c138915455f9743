"""
ReaderT: environment-reading effects over any base
==================================================

``ReaderT(M)`` values are functions ``R -> M[A]``. The environment is
threaded through every step without shared mutable state; ``local`` runs a
sub-computation against a derived environment.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..monad import Monad

# R -> M[A] for the base record's effect type
type ReaderOf = Callable[[typing.Any], typing.Any]


class ReaderT:
    """Environment-reading combinators generic over the base effect."""

    __slots__ = ("_m",)

    def __init__(self, base: Monad, /) -> None:
        self._m = base

    @property
    def base(self) -> Monad:
        return self._m

    def __repr__(self) -> str:
        return f"ReaderT({self._m.name})"

    def of(self, value: typing.Any) -> ReaderOf:
        m = self._m

        def run(_r: typing.Any) -> typing.Any:
            return m.of(value)

        return run

    def map(self, ma: ReaderOf, f: Callable[[typing.Any], typing.Any]) -> ReaderOf:
        m = self._m

        def run(r: typing.Any) -> typing.Any:
            return m.map(ma(r), f)

        return run

    def chain(self, ma: ReaderOf, f: Callable[[typing.Any], ReaderOf]) -> ReaderOf:
        """Same sequencing as the base chain, with the environment supplied to every step."""
        m = self._m

        def run(r: typing.Any) -> typing.Any:
            return m.chain(ma(r), lambda a: f(a)(r))

        return run

    def ap(self, mab: ReaderOf, ma: ReaderOf) -> ReaderOf:
        m = self._m

        def run(r: typing.Any) -> typing.Any:
            return m.ap(mab(r), ma(r))

        return run

    def ask(self) -> ReaderOf:
        return self._m.of

    def asks(self, f: Callable[[typing.Any], typing.Any]) -> ReaderOf:
        m = self._m

        def run(r: typing.Any) -> typing.Any:
            return m.of(f(r))

        return run

    def local(self, ma: ReaderOf, f: Callable[[typing.Any], typing.Any]) -> ReaderOf:
        """Pre-transform the environment with f before delegating to ma. Runs nothing."""

        def run(q: typing.Any) -> typing.Any:
            return ma(f(q))

        return run

    def from_base(self, ma: typing.Any) -> ReaderOf:
        """Lift a base effect that ignores the environment."""

        def run(_r: typing.Any) -> typing.Any:
            return ma

        return run

    def from_reader(self, ma: Callable[[typing.Any], typing.Any]) -> ReaderOf:
        m = self._m

        def run(r: typing.Any) -> typing.Any:
            return m.of(ma(r))

        return run

    def monad(self, name: str | None = None) -> Monad:
        m = self._m
        attempt = m.attempt
        throw = m.throw

        def attempt_r(ma: ReaderOf) -> ReaderOf:
            return lambda r: typing.cast(Callable[[typing.Any], typing.Any], attempt)(ma(r))

        def throw_r(exc: Exception) -> ReaderOf:
            return lambda r: typing.cast(Callable[[Exception], typing.Any], throw)(exc)

        return Monad(
            name=name or f"ReaderT({m.name})",
            of=self.of,
            map=self.map,
            chain=self.chain,
            ap=self.ap,
            attempt=attempt_r if attempt is not None else None,
            throw=throw_r if throw is not None else None,
        )


__all__ = ("ReaderT",)
