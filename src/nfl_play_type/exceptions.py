"""Custom exceptions for the play-type pipeline.

SchemaError and DomainError are fatal: the first means the input file is
missing a column the pipeline cannot run without, the second means a bucketing
rule met a value it does not cover. Row-level data problems (nulls, unknown
play types, uncovered seasons) are never raised; those rows are filtered out.
"""
from __future__ import annotations

from typing import Iterable, Sequence


class PlayTypeError(Exception):
    """Base class for every error raised by this package."""


class SchemaError(PlayTypeError, ValueError):
    """Raised when required columns are missing from a DataFrame."""

    def __init__(self, missing: Sequence[str], where: str = "input data"):
        self.missing = list(missing)
        super().__init__(f"Missing required columns in {where}: {self.missing}")


class DomainError(PlayTypeError, ValueError):
    """Raised when a bucketing rule does not cover an observed value."""

    def __init__(self, field: str, values: Iterable):
        self.field = field
        self.values = list(values)
        shown = self.values[:5]
        super().__init__(
            f"No bucket covers {len(self.values)} value(s) of '{field}': {shown}"
        )


class ModelNotFittedError(PlayTypeError, RuntimeError):
    """Raised when predict() is called on a model adapter before fit()."""
