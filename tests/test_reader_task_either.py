from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest
from kungfu import Error, Ok

from effectstack import io_either as IOE
from effectstack import reader_either as RE
from effectstack import reader_task_either as RTE
from effectstack import task, task_either as TE
from effectstack.monad import Monad
from effectstack.semigroup import monoid_sum, semigroup_sum

from tests.conftest import CallRecorder


@dataclass(frozen=True)
class Env:
    error: bool = False
    inner: int = 0


@pytest.mark.asyncio
async def test_local_narrows_the_environment() -> None:
    program = RTE.local(RTE.ask(), lambda q: q["inner"])
    assert await RTE.run(program, {"inner": 42}) == Ok(42)


@pytest.mark.asyncio
async def test_supplying_the_environment_runs_nothing() -> None:
    effect = CallRecorder(returns=3)
    program = RTE.right_io(effect)
    bound = program(Env())
    assert effect.count == 0
    assert await bound() == Ok(3)
    assert await bound() == Ok(3)
    assert effect.count == 2


@pytest.mark.asyncio
async def test_constructors() -> None:
    env = Env(inner=5)
    assert await RTE.run(RTE.right(1), env) == Ok(1)
    assert await RTE.run(RTE.left("e"), env) == Error("e")
    assert await RTE.run(RTE.from_task_either(TE.right(2)), env) == Ok(2)
    assert await RTE.run(RTE.right_task(task.of(3)), env) == Ok(3)
    assert await RTE.run(RTE.left_task(task.of(3)), env) == Error(3)
    assert await RTE.run(RTE.left_io(lambda: "io"), env) == Error("io")
    assert await RTE.run(RTE.right_reader(lambda e: e.inner), env) == Ok(5)
    assert await RTE.run(RTE.left_reader(lambda e: e.inner), env) == Error(5)
    assert await RTE.run(RTE.from_io_either(IOE.left("x")), env) == Error("x")
    assert await RTE.run(RTE.from_reader_either(RE.asks(lambda e: e.inner * 2)), env) == Ok(10)
    assert await RTE.run(RTE.from_result(Ok(6)), env) == Ok(6)
    assert await RTE.run(RTE.from_optional(None, lambda: "none"), env) == Error("none")
    assert await RTE.run(RTE.from_predicate(1, lambda x: x > 1, str), env) == Error("1")
    assert await RTE.run(RTE.asks(lambda e: e.inner + 1), env) == Ok(6)


@pytest.mark.asyncio
async def test_composition() -> None:
    env = Env()
    assert await RTE.run(RTE.map(RTE.right(1), lambda x: x + 1), env) == Ok(2)
    assert await RTE.run(RTE.map_failure(RTE.left(1), str), env) == Error("1")
    assert await RTE.run(RTE.bimap(RTE.right(1), str, lambda x: -x), env) == Ok(-1)
    assert await RTE.run(RTE.chain_first(RTE.right("a"), lambda a: RTE.right(0)), env) == Ok("a")
    assert await RTE.run(RTE.flatten(RTE.right(RTE.right("x"))), env) == Ok("x")
    assert await RTE.run(RTE.ap(RTE.right(lambda x: x * 2), RTE.right(4)), env) == Ok(8)
    assert await RTE.run(RTE.ap_seq(RTE.left("f"), RTE.right(4)), env) == Error("f")
    assert await RTE.run(RTE.ap_first(RTE.right("a"), RTE.asks(lambda e: e.inner)), env) == Ok("a")
    assert await RTE.run(RTE.ap_second(RTE.right("a"), RTE.asks(lambda e: e.inner)), env) == Ok(0)
    assert await RTE.run(RTE.ap_first(RTE.right("a"), RTE.left("b")), env) == Error("b")
    assert await RTE.run(RTE.alt(RTE.left("e"), lambda: RTE.asks(lambda e: e.inner)), env) == Ok(0)
    assert await RTE.run(RTE.or_else(RTE.left(1), lambda e: RTE.right(e + 1)), env) == Ok(2)
    assert await RTE.run(RTE.swap(RTE.right(1)), env) == Error(1)
    assert await RTE.run(RTE.filter_or_else(RTE.right(1), lambda x: x > 1, lambda x: "small"), env) == Error("small")


@pytest.mark.asyncio
async def test_chain_short_circuits_and_shares_environment() -> None:
    step = CallRecorder(returns=RTE.right(0))
    assert await RTE.run(RTE.chain(RTE.left("stop"), step), Env()) == Error("stop")
    assert step.count == 0

    program = RTE.chain(RTE.asks(lambda e: e.inner), lambda n: RTE.asks(lambda e: e.inner + n))
    assert await RTE.run(program, Env(inner=21)) == Ok(42)


@pytest.mark.asyncio
async def test_fold_and_get_or_else() -> None:
    def reader_task(f: Callable[[Env], str]) -> Callable[[Env], Any]:
        return lambda env: task.of(f(env))

    program = RTE.fold(
        RTE.left("e"),
        lambda e: reader_task(lambda env: f"{e} with inner={env.inner}"),
        lambda a: reader_task(lambda env: str(a)),
    )
    assert await program(Env(inner=1))() == "e with inner=1"
    recovered = RTE.get_or_else(RTE.left("e"), lambda e: reader_task(lambda env: "default"))
    assert await recovered(Env())() == "default"


@pytest.mark.asyncio
async def test_bracket_gives_every_phase_the_environment() -> None:
    seen: list[Any] = []

    def release(resource: str, outcome: Any) -> RTE.ReaderTaskEither[Env, None, str]:
        return RTE.chain(RTE.ask(), lambda env: RTE.right_io(lambda: seen.append((resource, env.inner, outcome))))

    program = RTE.bracket(
        RTE.asks(lambda e: f"conn-{e.inner}"),
        lambda conn: RTE.asks(lambda e: f"{conn} used"),
        release,
    )
    assert await RTE.run(program, Env(inner=7)) == Ok("conn-7 used")
    assert seen == [("conn-7", 7, Ok("conn-7 used"))]


@pytest.mark.asyncio
async def test_semigroups() -> None:
    env = Env()
    assert await RTE.get_semigroup(semigroup_sum).concat(RTE.left("e"), RTE.right(2))(env)() == Ok(2)
    assert await RTE.get_apply_semigroup(semigroup_sum).concat(RTE.right(1), RTE.right(2))(env)() == Ok(3)
    M = RTE.get_apply_monoid(monoid_sum)
    assert await RTE.run(M.concat(M.empty, RTE.right(4)), env) == Ok(4)
    assert await RTE.run(M.concat(RTE.right(1), RTE.left("e")), env) == Error("e")


# =============================================================================
# Laws, checked against one environment
# =============================================================================


def _half(x: int) -> RTE.ReaderTaskEither[Env, int, str]:
    return RTE.right(x // 2) if x % 2 == 0 else RTE.left(f"{x} is odd")


def _offset(x: int) -> RTE.ReaderTaskEither[Env, int, str]:
    return RTE.asks(lambda env: x + env.inner)


@pytest.mark.asyncio
@pytest.mark.parametrize("a", [8, 3])
async def test_left_identity(a: int) -> None:
    env = Env(inner=5)
    assert await RTE.run(RTE.chain(RTE.right(a), _half), env) == await RTE.run(_half(a), env)


@pytest.mark.asyncio
@pytest.mark.parametrize("ma", [RTE.asks(lambda env: env.inner), RTE.left("e")])
async def test_right_identity(ma: RTE.ReaderTaskEither[Env, int, str]) -> None:
    env = Env(inner=5)
    assert await RTE.run(RTE.chain(ma, RTE.right), env) == await RTE.run(ma, env)


@pytest.mark.asyncio
@pytest.mark.parametrize("ma", [RTE.right(8), RTE.right(7), RTE.left("e")])
async def test_associativity(ma: RTE.ReaderTaskEither[Env, int, str]) -> None:
    env = Env(inner=5)
    nested = RTE.chain(RTE.chain(ma, _half), _offset)
    flat = RTE.chain(ma, lambda x: RTE.chain(_half(x), _offset))
    assert await RTE.run(nested, env) == await RTE.run(flat, env)


# =============================================================================
# Programs written against any stack through its capability record
# =============================================================================


@dataclass(frozen=True)
class Services:
    validate_user: Callable[[str], Any]
    facebook_token: Callable[[str], Any]
    find_post: Callable[[str], Any]
    send_like: Callable[[str], Callable[[str], Any]]


def like_post(m: Monad, services: Services, token: str, url: str) -> Any:
    m_token = m.chain(services.validate_user(token), services.facebook_token)
    m_post = services.find_post(url)
    m_result = m.ap(m.map(m_token, services.send_like), m_post)
    return m.chain(m_result, lambda ma: ma)


def _delayed(value: Any) -> RTE.ReaderTaskEither[Env, Any, Exception]:
    return RTE.from_task_either(TE.delay(TE.right(value), seconds=0.01))


def _validate_user(token: str) -> RTE.ReaderTaskEither[Env, str, Exception]:
    def run(env: Env) -> Any:
        if env.error:
            return TE.left(RuntimeError("validate_user error"))
        return _delayed(f"string({token})")(env)

    return run


rte_services = Services(
    validate_user=_validate_user,
    facebook_token=lambda uid: _delayed(f"FBToken({uid})"),
    find_post=lambda url: _delayed(f"FBPost({url})"),
    send_like=lambda token: lambda post: _delayed(True),
)


@pytest.mark.asyncio
async def test_like_post_over_reader_task_either() -> None:
    program = like_post(RTE.reader_task_either, rte_services, "session123", "https://me.com/1")

    assert await RTE.run(program, Env(error=False)) == Ok(True)
    failed = await RTE.run(program, Env(error=True))
    assert isinstance(failed, Error)


@pytest.mark.asyncio
async def test_like_post_over_sequential_instance() -> None:
    program = like_post(RTE.reader_task_either_seq, rte_services, "t", "u")
    assert await RTE.run(program, Env()) == Ok(True)


def test_like_post_over_io() -> None:
    from effectstack import io

    services = Services(
        validate_user=lambda token: io.of(f"string({token})"),
        facebook_token=lambda uid: io.of(f"FBToken({uid})"),
        find_post=lambda url: io.of(f"FBPost({url})"),
        send_like=lambda token: lambda post: io.of(True),
    )
    assert like_post(io.io, services, "session123", "https://me.com/1")() is True
