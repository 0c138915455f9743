from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field

from kungfu import Error, Ok, Result


@dataclass(frozen=True, slots=True)
class Failure:
    message: str
    transient: bool = False


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    is_active: bool = True


@dataclass(slots=True)
class FakeBackend:
    name: str
    delay_seconds: float = 0.0
    failures_before_ok: int = 0

    async def fetch_user(self, user_id: int) -> Result[User, Failure]:
        await asyncio.sleep(self.delay_seconds)
        if self.failures_before_ok > 0:
            self.failures_before_ok -= 1
            return Error(Failure(f"{self.name}: unavailable", transient=True))
        return Ok(User(id=user_id, name=f"user:{user_id}@{self.name}"))


@dataclass(slots=True)
class FakeConnection:
    dsn: str
    closed: bool = False
    queries: list[str] = field(default_factory=list)

    async def query(self, sql: str) -> int:
        self.queries.append(sql)
        return len(self.queries)

    def close(self) -> None:
        self.closed = True


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
