"""Pytest configuration and fixtures.

Provides call-recording test doubles shared by the stack test modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callable double that records every call and returns a fixed value.

    Use to assert that a callback ran (or did not run) and with which arguments.
    """

    returns: Any = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.returns

    @property
    def count(self) -> int:
        return len(self.calls)


@dataclass
class Counter:
    """Counts thunk invocations; returns the running count."""

    value: int = 0

    def __call__(self) -> int:
        self.value += 1
        return self.value


@dataclass
class Resource:
    """Acquired resource with an observable release."""

    name: str
    released_with: list[Any] = field(default_factory=list)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def counter() -> Counter:
    return Counter()
