from __future__ import annotations

from dataclasses import dataclass

from _infra import FakeConnection, banner, run

from effectstack import reader_task_either as RTE
from effectstack import task_either as TE
from kungfu import Error, Ok


@dataclass(frozen=True, slots=True)
class Env:
    dsn: str
    table: str


def connect() -> RTE.ReaderTaskEither[Env, FakeConnection, str]:
    return RTE.asks(lambda env: FakeConnection(env.dsn))


def count_rows(conn: FakeConnection) -> RTE.ReaderTaskEither[Env, int, str]:
    return lambda env: TE.try_catch(
        lambda: conn.query(f"select count(*) from {env.table}"),
        lambda exc: f"query failed: {exc}",
    )


def close(conn: FakeConnection, outcome: object) -> RTE.ReaderTaskEither[Env, None, str]:
    return RTE.right_io(conn.close)


async def main() -> None:
    banner("02_reader_task_either: environment + bracket")

    program = RTE.map(
        RTE.bracket(connect(), count_rows, close),
        lambda n: f"{n} row(s)",
    )

    for env in (Env(dsn="sqlite://:memory:", table="users"), Env(dsn="sqlite://backup", table="orders")):
        match await RTE.run(program, env):
            case Ok(summary):
                print(f"{env.dsn}: {summary}")
            case Error(err):
                print(f"{env.dsn}: error: {err}")


if __name__ == "__main__":
    run(main)
