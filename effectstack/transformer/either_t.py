"""
EitherT: failure-aware effects over any base
============================================

Given a base effect record (``of`` / ``map`` / ``chain``), derive the whole
failure-aware vocabulary for ``M[Result[T, E]]`` once, instead of per
base effect.

Fail-fast rule: once the base effect produces an ``Error``, no further
composed step is built or run.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .. import result as _result
from ..monad import Monad

logger = logging.getLogger(__name__)

# M[Result[T, E]] for the base record's effect type
type Wrapped = typing.Any


class EitherT:
    """Failure-aware combinators generic over the base effect."""

    __slots__ = ("_m",)

    def __init__(self, base: Monad, /) -> None:
        self._m = base

    @property
    def base(self) -> Monad:
        return self._m

    def __repr__(self) -> str:
        return f"EitherT({self._m.name})"

    # Lifting

    def right(self, value: typing.Any) -> Wrapped:
        return self._m.of(Ok(value))

    def left(self, error: typing.Any) -> Wrapped:
        return self._m.of(Error(error))

    def from_result(self, r: Result[typing.Any, typing.Any]) -> Wrapped:
        return self._m.of(r)

    def right_base(self, ma: typing.Any) -> Wrapped:
        """Lift an always-succeeding base effect: payload becomes Ok."""
        return self._m.map(ma, Ok)

    def left_base(self, me: typing.Any) -> Wrapped:
        return self._m.map(me, Error)

    # Functor / Bifunctor

    def map(self, ma: Wrapped, f: Callable[[typing.Any], typing.Any]) -> Wrapped:
        return self._m.map(ma, lambda r: _result.map(r, f))

    def map_failure(self, ma: Wrapped, f: Callable[[typing.Any], typing.Any]) -> Wrapped:
        return self._m.map(ma, lambda r: _result.map_failure(r, f))

    def bimap(
        self,
        ma: Wrapped,
        f: Callable[[typing.Any], typing.Any],
        g: Callable[[typing.Any], typing.Any],
    ) -> Wrapped:
        return self._m.map(ma, lambda r: _result.bimap(r, f, g))

    # Monad

    def chain(self, ma: Wrapped, f: Callable[[typing.Any], Wrapped]) -> Wrapped:
        """
        Monadic bind (>>=).

        - On Ok: builds f(value) and runs it
        - On Error: short-circuit, the original Error is returned as-is
        """
        m = self._m

        def step(r: Result[typing.Any, typing.Any]) -> Wrapped:
            match r:
                case Ok(value):
                    return f(value)
                case Error(_):
                    return m.of(r)

        return m.chain(ma, step)

    def ap(self, mab: Wrapped, ma: Wrapped) -> Wrapped:
        """Apply through the base ``ap``: both sides may start eagerly."""
        m = self._m
        return m.ap(m.map(mab, lambda rab: lambda ra: _result.ap(rab, ra)), ma)

    def ap_seq(self, mab: Wrapped, ma: Wrapped) -> Wrapped:
        """Sequential fail-fast apply: ma does not start if mab failed."""
        return self.chain(mab, lambda f: self.map(ma, f))

    # Alternatives and recovery

    def alt(self, ma: Wrapped, mb: Callable[[], Wrapped]) -> Wrapped:
        """Try mb() if ma fails. mb is only built when needed."""
        m = self._m

        def step(r: Result[typing.Any, typing.Any]) -> Wrapped:
            match r:
                case Ok(_):
                    return m.of(r)
                case Error(_):
                    return mb()

        return m.chain(ma, step)

    def or_else(self, ma: Wrapped, f: Callable[[typing.Any], Wrapped]) -> Wrapped:
        """Replace a failure with the effect built by f(error)."""
        m = self._m

        def step(r: Result[typing.Any, typing.Any]) -> Wrapped:
            match r:
                case Ok(_):
                    return m.of(r)
                case Error(error):
                    return f(error)

        return m.chain(ma, step)

    def swap(self, ma: Wrapped) -> Wrapped:
        return self._m.map(ma, _result.swap)

    # Eliminators (result is a base effect, not a wrapped one)

    def fold(
        self,
        ma: Wrapped,
        on_failure: Callable[[typing.Any], typing.Any],
        on_success: Callable[[typing.Any], typing.Any],
    ) -> typing.Any:
        def step(r: Result[typing.Any, typing.Any]) -> typing.Any:
            match r:
                case Ok(value):
                    return on_success(value)
                case Error(error):
                    return on_failure(error)

        return self._m.chain(ma, step)

    def get_or_else(self, ma: Wrapped, on_failure: Callable[[typing.Any], typing.Any]) -> typing.Any:
        return self.fold(ma, on_failure, self._m.of)

    # Resources

    def bracket(
        self,
        acquire: Wrapped,
        use: Callable[[typing.Any], Wrapped],
        release: Callable[[typing.Any, Result[typing.Any, typing.Any]], Wrapped],
    ) -> Wrapped:
        """
        Resource management: acquire → use → release.

        release runs exactly once for every successful acquire, on every
        exit path of use. Precedence:

        - use failed with Error(e): result is Error(e); a failing release is logged
        - use raised exc: release gets Error(exc), then exc is re-raised
        - use succeeded: a release Error becomes the result, a release exception propagates
        """
        m = self._m
        if not m.can_capture:
            raise TypeError(f"bracket requires a base effect with attempt/throw, got {m.name}")
        attempt = typing.cast(Callable[[typing.Any], typing.Any], m.attempt)
        throw = typing.cast(Callable[[Exception], typing.Any], m.throw)

        def with_resource(resource: typing.Any) -> Wrapped:
            def after_use(outcome: Result[typing.Any, Exception]) -> Wrapped:
                match outcome:
                    case Ok(used):
                        released = attempt(m.suspend(lambda: release(resource, used)))
                        return m.chain(released, lambda rel: _settle_used(used, rel))
                    case Error(exc):
                        released = attempt(m.suspend(lambda: release(resource, Error(exc))))
                        return m.chain(released, lambda rel: _settle_raised(exc, rel))

            def _settle_used(used: Result[typing.Any, typing.Any], rel: Result[typing.Any, Exception]) -> Wrapped:
                match used, rel:
                    case Error(_), Ok(Error(release_error)):
                        logger.warning("bracket: release failure %r discarded, use already failed", release_error)
                        return m.of(used)
                    case Error(_), Error(release_exc):
                        logger.warning("bracket: release raised %r, use already failed", release_exc)
                        return m.of(used)
                    case Ok(_), Ok(Error(_) as release_failure):
                        return m.of(release_failure)
                    case Ok(_), Error(release_exc):
                        return throw(release_exc)
                    case _:
                        return m.of(used)

            def _settle_raised(exc: Exception, rel: Result[typing.Any, Exception]) -> Wrapped:
                match rel:
                    case Ok(Error(release_error)):
                        logger.warning("bracket: release failure %r discarded, use raised", release_error)
                    case Error(release_exc):
                        logger.warning("bracket: release raised %r, use raised", release_exc)
                    case _:
                        pass
                return throw(exc)

            return m.chain(attempt(m.suspend(lambda: use(resource))), after_use)

        return self.chain(acquire, with_resource)

    # Instance

    def attempt(self, ma: Wrapped) -> Wrapped:
        """Capture a raised exception as a success payload Error(exc); domain failures pass through."""
        m = self._m
        if m.attempt is None:
            raise TypeError(f"{m.name} cannot capture exceptions")

        def regroup(outcome: Result[Result[typing.Any, typing.Any], Exception]) -> Result[typing.Any, typing.Any]:
            match outcome:
                case Ok(Ok(value)):
                    return Ok(Ok(value))
                case Ok(Error(_) as failed):
                    return failed
                case Error(exc):
                    return Ok(Error(exc))

        return m.map(m.attempt(ma), regroup)

    def monad(self, name: str | None = None) -> Monad:
        """Capability record of the stacked effect, so it can be lifted further."""
        m = self._m
        return Monad(
            name=name or f"EitherT({m.name})",
            of=self.right,
            map=self.map,
            chain=self.chain,
            ap=self.ap,
            attempt=self.attempt if m.attempt is not None else None,
            throw=m.throw,
        )


__all__ = ("EitherT",)
