from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Any

import pytest
from kungfu import Error, LazyCoroResult, Ok

from effectstack import task_either as TE
from effectstack.semigroup import get_list_semigroup, semigroup_string

from tests.conftest import CallRecorder


def _slow(value: Any, seconds: float, log: list[str]) -> TE.TaskEither[Any, Any]:
    async def run() -> Any:
        log.append(f"start {value}")
        await asyncio.sleep(seconds)
        log.append(f"end {value}")
        return Ok(value)

    return LazyCoroResult(run)


@pytest.mark.asyncio
async def test_values_are_lazy_coro_results() -> None:
    program = TE.map(TE.right(1), lambda x: x + 1)
    assert isinstance(program, LazyCoroResult)
    assert await program == Ok(2)


@pytest.mark.asyncio
async def test_constructors() -> None:
    async def three() -> int:
        return 3

    assert await TE.left("e")() == Error("e")
    assert await TE.right_task(three)() == Ok(3)
    assert await TE.left_task(three)() == Error(3)
    assert await TE.right_io(lambda: 4)() == Ok(4)
    assert await TE.left_io(lambda: 4)() == Error(4)
    assert await TE.from_io_either(lambda: Error("io"))() == Error("io")
    assert await TE.from_result(Ok(5))() == Ok(5)
    assert await TE.from_optional(None, lambda: "none")() == Error("none")
    assert await TE.from_predicate(2, lambda x: x > 3, lambda x: f"{x} <= 3")() == Error("2 <= 3")


@pytest.mark.asyncio
async def test_delayed_chain_settles_after_both_delays() -> None:
    program = TE.chain(
        TE.delay(TE.right(1), seconds=0.1),
        lambda x: TE.delay(TE.right(x + 1), seconds=0.05),
    )
    started = time.monotonic()
    assert await program() == Ok(2)
    assert time.monotonic() - started >= 0.145


@pytest.mark.asyncio
async def test_chain_does_not_build_after_failure() -> None:
    f = CallRecorder(returns=TE.right(0))
    assert await TE.chain(TE.left("err"), f)() == Error("err")
    assert f.count == 0


@pytest.mark.asyncio
async def test_composition() -> None:
    assert await TE.bimap(TE.left(1), str, lambda x: x)() == Error("1")
    assert await TE.map_failure(TE.left(1), lambda e: e * 2)() == Error(2)
    assert await TE.chain_first(TE.right("a"), lambda a: TE.right(a * 3))() == Ok("a")
    assert await TE.flatten(TE.right(TE.right("x")))() == Ok("x")
    assert await TE.swap(TE.left("e"))() == Ok("e")
    assert await TE.filter_or_else(TE.right(0), bool, lambda x: "falsy")() == Error("falsy")
    assert await TE.ap_first(TE.right("a"), TE.right("b"))() == Ok("a")
    assert await TE.ap_second(TE.right("a"), TE.right("b"))() == Ok("b")


@pytest.mark.asyncio
async def test_ap_starts_both_sides_at_once() -> None:
    log: list[str] = []
    program = TE.ap(TE.map(_slow("f", 0.03, log), lambda _: str.upper), _slow("a", 0.0, log))
    assert await program() == Ok("A")
    assert log[:2] == ["start f", "start a"]


@pytest.mark.asyncio
async def test_ap_seq_does_not_start_after_failure() -> None:
    log: list[str] = []
    program = TE.ap_seq(TE.left("no function"), _slow("a", 0.0, log))
    assert await program() == Error("no function")
    assert log == []


@pytest.mark.asyncio
async def test_alt_and_or_else() -> None:
    that = CallRecorder(returns=TE.right("fallback"))
    assert await TE.alt(TE.right("primary"), that)() == Ok("primary")
    assert that.count == 0
    assert await TE.alt(TE.left("e"), that)() == Ok("fallback")
    assert await TE.or_else(TE.left(2), lambda e: TE.right(e + 1))() == Ok(3)


@pytest.mark.asyncio
async def test_fold_and_get_or_else() -> None:
    def const(value: str):
        async def run() -> str:
            return value

        return run

    assert await TE.fold(TE.left("e"), lambda e: const(f"bad {e}"), lambda a: const(f"ok {a}"))() == "bad e"
    assert await TE.get_or_else(TE.right("v"), lambda e: const("default"))() == "v"
    assert await TE.get_or_else(TE.left("e"), lambda e: const("default"))() == "default"


# =============================================================================
# Exception boundaries
# =============================================================================


@pytest.mark.asyncio
async def test_try_catch(caplog: pytest.LogCaptureFixture) -> None:
    async def fetch() -> str:
        raise ConnectionError("down")

    async def ok() -> str:
        return "body"

    with caplog.at_level(logging.DEBUG, logger="effectstack.task_either"):
        assert await TE.try_catch(fetch, lambda e: f"fetch failed: {e}")() == Error("fetch failed: down")
    assert "try_catch captured" in caplog.text
    assert await TE.try_catch(ok, str)() == Ok("body")


@pytest.mark.asyncio
async def test_taskify_success_and_failure() -> None:
    def legacy_read(path: str, callback: Any) -> None:
        if path == "missing":
            callback(FileNotFoundError(path), None)
        else:
            callback(None, f"contents of {path}")

    read = TE.taskify(legacy_read)
    assert await read("a.txt")() == Ok("contents of a.txt")
    result = await read("missing")()
    assert isinstance(result, Error)


@pytest.mark.asyncio
async def test_taskify_first_callback_wins(caplog: pytest.LogCaptureFixture) -> None:
    def chatty(callback: Any) -> None:
        callback(None, 1)
        callback("late error", None)

    with caplog.at_level(logging.DEBUG, logger="effectstack.task_either"):
        assert await TE.taskify(chatty)()() == Ok(1)
        await asyncio.sleep(0)
    assert "ignoring repeated callback" in caplog.text


@pytest.mark.asyncio
async def test_taskify_callback_from_another_thread() -> None:
    def threaded(value: int, callback: Any) -> None:
        threading.Thread(target=callback, args=(None, value * 2)).start()

    assert await TE.taskify(threaded)(21)() == Ok(42)


# =============================================================================
# bracket
# =============================================================================


@pytest.mark.asyncio
async def test_bracket_use_failure_is_the_outcome() -> None:
    release = CallRecorder(returns=TE.right(None))
    program = TE.bracket(TE.right(1), lambda x: TE.left("boom"), release)

    assert await program() == Error("boom")
    assert release.calls == [(1, Error("boom"))]


@pytest.mark.asyncio
async def test_bracket_releases_when_use_raises() -> None:
    release = CallRecorder(returns=TE.right(None))

    async def explode() -> Any:
        raise KeyError("k")

    program = TE.bracket(TE.right("conn"), lambda c: LazyCoroResult(explode), release)
    with pytest.raises(KeyError):
        await program()
    assert release.count == 1
    resource, outcome = release.calls[0]
    assert resource == "conn"
    assert isinstance(outcome, Error)


@pytest.mark.asyncio
async def test_bracket_release_failure_after_success() -> None:
    program = TE.bracket(TE.right(1), TE.right, lambda x, r: TE.left("close failed"))
    assert await program() == Error("close failed")


# =============================================================================
# Instances
# =============================================================================


@pytest.mark.asyncio
async def test_semigroups_and_validation() -> None:
    S = TE.get_semigroup(semigroup_string)
    assert await S.concat(TE.right("a"), TE.right("b"))() == Ok("ab")
    A = TE.get_apply_semigroup(semigroup_string)
    assert await A.concat(TE.right("a"), TE.left("e"))() == Error("e")

    V = TE.get_task_validation(get_list_semigroup())
    both = V.ap(V.map(TE.left(["a"]), lambda a: lambda b: (a, b)), TE.left(["b"]))
    assert await both() == Error(["a", "b"])


@pytest.mark.asyncio
async def test_instances() -> None:
    for m in (TE.task_either, TE.task_either_seq):
        assert m.can_capture
        assert await m.chain(m.of(1), lambda x: m.of(x + 1))() == Ok(2)
        assert await m.ap(m.of(lambda x: -x), m.of(1))() == Ok(-1)


@pytest.mark.asyncio
async def test_task_validation_values_are_awaitable() -> None:
    V = TE.get_task_validation(get_list_semigroup())
    pair = V.ap(V.map(TE.left(["no name"]), lambda a: lambda b: (a, b)), TE.left(["no age"]))

    assert isinstance(pair, LazyCoroResult)
    assert isinstance(V.of(1), LazyCoroResult)
    assert await pair == Error(["no name", "no age"])
    assert await V.alt(TE.left(["a"]), lambda: TE.left(["b"])) == Error(["a", "b"])
    assert await V.chain(V.of(2), lambda x: TE.right(x * 3)) == Ok(6)


# =============================================================================
# laws
# =============================================================================


def _half(x: int) -> TE.TaskEither[int, str]:
    return TE.right(x // 2) if x % 2 == 0 else TE.left(f"{x} is odd")


def _positive(x: int) -> TE.TaskEither[int, str]:
    return TE.from_predicate(x, lambda v: v > 0, lambda v: f"{v} is not positive")


@pytest.mark.asyncio
@pytest.mark.parametrize("a", [8, 3, 0])
async def test_left_identity(a: int) -> None:
    assert await TE.chain(TE.right(a), _half) == await _half(a)


@pytest.mark.asyncio
@pytest.mark.parametrize("ma", [TE.right(4), TE.left("e")])
async def test_right_identity(ma: TE.TaskEither[int, str]) -> None:
    assert await TE.chain(ma, TE.right) == await ma


@pytest.mark.asyncio
@pytest.mark.parametrize("ma", [TE.right(8), TE.right(0), TE.right(6), TE.left("e")])
async def test_associativity(ma: TE.TaskEither[int, str]) -> None:
    nested = TE.chain(TE.chain(ma, _half), _positive)
    flat = TE.chain(ma, lambda x: TE.chain(_half(x), _positive))
    assert await nested == await flat
