"""Exception hierarchy for the naive Bayes classifier."""

from __future__ import annotations


class ClassifierError(Exception):
    """Base class for all errors raised by this package."""


class StateError(ClassifierError, RuntimeError):
    """An operation was invoked in the wrong lifecycle phase.

    Raised when classifying before training, adding documents after
    training, or training a model that never received a document.
    """


class ModelFormatError(ClassifierError, ValueError):
    """A serialized model could not be read."""


class CorpusFormatError(ClassifierError, ValueError):
    """A labeled corpus file contains a malformed record."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
