"""Thread-safe named stopwatches and a registry that hands them out."""

from .errors import AlreadyRunning, DuplicateId, InvalidId, LapwatchError, NotRunning
from .snapshot import RegistrySnapshot, StopwatchSnapshot
from .timing import Stopwatch, StopwatchRegistry

__all__ = [
    "AlreadyRunning",
    "DuplicateId",
    "InvalidId",
    "LapwatchError",
    "NotRunning",
    "RegistrySnapshot",
    "Stopwatch",
    "StopwatchRegistry",
    "StopwatchSnapshot",
]
