"""
Monad capability records
========================

Python has no higher-kinded generics, so the generic layers
(``EitherT``, ``ReaderT``, ``StateT``, ``ValidationT``) receive the base
effect's operations explicitly, as a record. Any effect type providing
``of`` / ``map`` / ``chain`` can be lifted through them unchanged.

Optional capabilities:

- ``ap``: applicative apply. Derived sequentially from ``chain`` when absent.
- ``attempt`` / ``throw``: exception capture and re-raise inside the effect.
  Only ``bracket`` needs them.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass, replace

type Of = Callable[[typing.Any], typing.Any]
type Map = Callable[[typing.Any, Callable[[typing.Any], typing.Any]], typing.Any]
type Chain = Callable[[typing.Any, Callable[[typing.Any], typing.Any]], typing.Any]
type Ap = Callable[[typing.Any, typing.Any], typing.Any]
type Attempt = Callable[[typing.Any], typing.Any]
type Throw = Callable[[Exception], typing.Any]


def sequential_ap(map_: Map, chain: Chain) -> Ap:
    """Left-to-right apply: the function effect settles before the value effect starts."""

    def ap(mab: typing.Any, ma: typing.Any) -> typing.Any:
        return chain(mab, lambda f: map_(ma, f))

    return ap


@dataclass(frozen=True, slots=True)
class Monad:
    """Capability record of a base effect."""

    name: str
    of: Of
    map: Map
    chain: Chain
    ap: Ap
    attempt: Attempt | None = None
    throw: Throw | None = None

    @classmethod
    def derive(
        cls,
        name: str,
        *,
        of: Of,
        map: Map,
        chain: Chain,
        ap: Ap | None = None,
        attempt: Attempt | None = None,
        throw: Throw | None = None,
    ) -> Monad:
        """Build a record, deriving a sequential ``ap`` when none is given."""
        return cls(
            name=name,
            of=of,
            map=map,
            chain=chain,
            ap=ap if ap is not None else sequential_ap(map, chain),
            attempt=attempt,
            throw=throw,
        )

    def seq(self) -> Monad:
        """Same record with sequential ``ap``."""
        return replace(self, name=f"{self.name}Seq", ap=sequential_ap(self.map, self.chain))

    @property
    def can_capture(self) -> bool:
        return self.attempt is not None and self.throw is not None

    def suspend(self, thunk: Callable[[], typing.Any]) -> typing.Any:
        """Defer building an effect until the surrounding effect runs."""
        return self.chain(self.of(None), lambda _: thunk())


__all__ = (
    "Monad",
    "sequential_ap",
)
