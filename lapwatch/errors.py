"""Exceptions raised by stopwatches and the stopwatch registry."""

from __future__ import annotations

from typing import Any, Optional


class LapwatchError(Exception):
    """Base class for every error raised by :mod:`lapwatch`."""

    def __init__(self, message: str, timer_id: Optional[Any] = None) -> None:
        super().__init__(message)
        self.timer_id = timer_id


class InvalidId(LapwatchError, ValueError):
    """Identifier is empty, missing or not a string."""


class DuplicateId(LapwatchError, ValueError):
    """A stopwatch with this identifier already exists in the registry."""


class AlreadyRunning(LapwatchError, RuntimeError):
    """``start()`` called on a running stopwatch."""


class NotRunning(LapwatchError, RuntimeError):
    """``lap()`` or ``stop()`` called on an idle stopwatch."""


def check_id(timer_id: Any) -> str:
    """Return ``timer_id`` unchanged or raise :class:`InvalidId`."""

    if timer_id is None:
        raise InvalidId("ID cannot be None", timer_id)
    if not isinstance(timer_id, str):
        raise InvalidId(f"ID must be a string, got {type(timer_id).__name__}", timer_id)
    if timer_id == "":
        raise InvalidId("ID is empty", timer_id)
    return timer_id


__all__ = [
    "LapwatchError",
    "InvalidId",
    "DuplicateId",
    "AlreadyRunning",
    "NotRunning",
    "check_id",
]
