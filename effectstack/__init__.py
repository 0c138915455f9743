"""
Composable effect stacks over kungfu's Result.

Lazy, re-runnable effects (IO, Task, Reader) and their failure-aware,
environment-reading and state-threading stacks, all sharing one
combinator vocabulary.

Architecture:
- Base effects (io, task, reader) expose a ``Monad`` capability record
- Generic transformers (EitherT, ReaderT, StateT, ValidationT) derive
  richer vocabularies from any record
- Stack modules (io_either, task_either, ...) are the ready-made stacks,
  imported as namespaces: ``from effectstack import task_either as TE``
"""

# Core types
from ._types import (
    IO,
    IOEither,
    Lazy,
    NoError,
    Predicate,
    Reader,
    ReaderEither,
    ReaderTaskEither,
    State,
    StateReaderTaskEither,
    Task,
    TaskEither,
)

# Internal helpers (for custom stacks)
from . import _helpers

# Capability records
from . import semigroup
from .monad import Monad, sequential_ap
from .semigroup import Monoid, Semigroup

# Result combinators
from . import result
from .result import failure, success

# Base effects
from . import io, reader, task

# Generic transformers
from . import transformer
from .transformer import EitherT, ReaderT, StateT, ValidationT

# Stacks
from . import (
    io_either,
    reader_either,
    reader_task_either,
    state_reader_task_either,
    task_either,
)

# Re-exported from kungfu
from kungfu import Error, LazyCoroResult, Ok, Result

__all__ = (
    # Types
    "IO",
    "IOEither",
    "Lazy",
    "NoError",
    "Predicate",
    "Reader",
    "ReaderEither",
    "ReaderTaskEither",
    "State",
    "StateReaderTaskEither",
    "Task",
    "TaskEither",
    # Helpers
    "_helpers",
    # Records
    "Monad",
    "Monoid",
    "Semigroup",
    "semigroup",
    "sequential_ap",
    # Result
    "result",
    "success",
    "failure",
    # Base effects
    "io",
    "reader",
    "task",
    # Transformers
    "transformer",
    "EitherT",
    "ReaderT",
    "StateT",
    "ValidationT",
    # Stacks
    "io_either",
    "reader_either",
    "reader_task_either",
    "state_reader_task_either",
    "task_either",
    # kungfu
    "Error",
    "LazyCoroResult",
    "Ok",
    "Result",
)
