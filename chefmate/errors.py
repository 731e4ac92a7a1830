"""Exceptions raised by the generation pipeline."""

from __future__ import annotations


class ChefmateError(RuntimeError):
    """Base class for pipeline failures."""


class GenerationFailure(ChefmateError):
    """The completion API could not be reached or returned no usable text."""


# Transport-level failures are reported under this name as well.
TransportError = GenerationFailure


class UnparsableResponseError(ChefmateError):
    """Model output could not be salvaged into JSON."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
