"""
Generic composition layers.

Each transformer takes a base effect's capability record and derives a
richer vocabulary over it. ``monad()`` returns the record of the stacked
effect, so layers compose: ``ReaderT(EitherT(task).monad()).monad()``.
"""

from __future__ import annotations

from .either_t import EitherT
from .reader_t import ReaderT
from .state_t import StateT
from .validation_t import ValidationT

__all__ = (
    "EitherT",
    "ReaderT",
    "StateT",
    "ValidationT",
)
