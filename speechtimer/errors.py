"""Exceptions raised by the timer core."""

from __future__ import annotations


class SpeechTimerError(Exception):
    """Base class for every SpeechTimer error."""


class ValidationError(SpeechTimerError, ValueError):
    """A threshold configuration broke one or more ordering rules.

    ``errors`` holds every violated rule, not just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid timer configuration: " + ", ".join(self.errors)
        )


class InvalidOperation(SpeechTimerError, RuntimeError):
    """The call is not allowed in the timer's current run state."""
