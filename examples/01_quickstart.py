from __future__ import annotations

from _infra import Failure, FakeBackend, User, banner, run

from effectstack import task_either as TE
from kungfu import Error, LazyCoroResult, Ok


def fetch_user(api: FakeBackend, user_id: int) -> TE.TaskEither[User, Failure]:
    # Nothing runs here: the request starts when the pipeline is awaited.
    return LazyCoroResult(lambda: api.fetch_user(user_id))


async def main() -> None:
    banner("01_quickstart: TaskEither chain + alt + delay")

    primary = FakeBackend(name="primary", delay_seconds=0.01, failures_before_ok=1)
    replica = FakeBackend(name="replica", delay_seconds=0.02)

    pipeline = TE.map(
        TE.filter_or_else(
            TE.alt(fetch_user(primary, 42), lambda: TE.delay(fetch_user(replica, 42), seconds=0.05)),
            lambda user: user.is_active,
            lambda user: Failure(f"{user.name} is inactive"),
        ),
        lambda user: f"hello, {user.name}",
    )

    # Each await re-runs the whole pipeline.
    for attempt in (1, 2):
        match await pipeline:
            case Ok(message):
                print(f"run {attempt}: {message}")
            case Error(err):
                print(f"run {attempt}: error: {err!r}")


if __name__ == "__main__":
    run(main)
