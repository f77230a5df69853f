from __future__ import annotations

from typing import Optional


class PracticeError(Exception):
    """Base class for errors raised by the practice data layer."""


class LoadError(PracticeError):
    """A question dataset could not be fetched or parsed."""

    def __init__(self, message: str, dataset: Optional[str] = None):
        self.dataset = dataset
        if dataset:
            message = f"{dataset}: {message}"
        super().__init__(message)


class ParseError(PracticeError):
    """An imported progress snapshot is not valid."""
