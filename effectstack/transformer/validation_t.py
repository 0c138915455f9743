"""
ValidationT: failure accumulation over any base
===============================================

Like ``EitherT``, but ``ap`` and ``alt`` combine two failures through a
semigroup instead of keeping only the first one. ``chain`` stays
fail-fast: a step that needs the previous value cannot run without it.

``wrap`` is applied to every value handed back, so a stack can keep its
own representation (``LazyCoroResult`` for TaskEither).
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .._helpers import identity
from ..monad import Monad
from ..semigroup import Semigroup
from .either_t import EitherT, Wrapped


class ValidationT:
    """Accumulating combinators generic over the base effect."""

    __slots__ = ("_m", "_s", "_either", "_wrap")

    def __init__(
        self,
        base: Monad,
        semigroup: Semigroup[typing.Any],
        /,
        *,
        wrap: Callable[[Wrapped], typing.Any] = identity,
    ) -> None:
        self._m = base
        self._s = semigroup
        self._either = EitherT(base)
        self._wrap = wrap

    def __repr__(self) -> str:
        return f"ValidationT({self._m.name})"

    def of(self, value: typing.Any) -> Wrapped:
        return self._wrap(self._either.right(value))

    def map(self, ma: Wrapped, f: Callable[[typing.Any], typing.Any]) -> Wrapped:
        return self._wrap(self._either.map(ma, f))

    def chain(self, ma: Wrapped, f: Callable[[typing.Any], Wrapped]) -> Wrapped:
        return self._wrap(self._either.chain(ma, f))

    def ap(self, mab: Wrapped, ma: Wrapped) -> Wrapped:
        """Run both sides; if both fail, concatenate their errors."""
        m = self._m
        S = self._s

        def combine(rab: Result[typing.Any, typing.Any]) -> Callable[[Result[typing.Any, typing.Any]], typing.Any]:
            def with_value(ra: Result[typing.Any, typing.Any]) -> Result[typing.Any, typing.Any]:
                match rab, ra:
                    case Ok(f), Ok(a):
                        return Ok(f(a))
                    case Error(e1), Error(e2):
                        return Error(S.concat(e1, e2))
                    case Error(_), _:
                        return rab
                    case _:
                        return ra

            return with_value

        return self._wrap(m.ap(m.map(mab, combine), ma))

    def alt(self, fx: Wrapped, fy: Callable[[], Wrapped]) -> Wrapped:
        """Try fy() if fx fails; if both fail, concatenate their errors."""
        m = self._m
        S = self._s

        def step(rx: Result[typing.Any, typing.Any]) -> Wrapped:
            match rx:
                case Ok(_):
                    return m.of(rx)
                case Error(e1):
                    return m.map(fy(), lambda ry: _merge(e1, ry))

        def _merge(e1: typing.Any, ry: Result[typing.Any, typing.Any]) -> Result[typing.Any, typing.Any]:
            match ry:
                case Ok(_):
                    return ry
                case Error(e2):
                    return Error(S.concat(e1, e2))

        return self._wrap(m.chain(fx, step))

    def monad(self, name: str | None = None) -> Monad:
        return Monad(
            name=name or f"ValidationT({self._m.name})",
            of=self.of,
            map=self.map,
            chain=self.chain,
            ap=self.ap,
        )


__all__ = ("ValidationT",)
