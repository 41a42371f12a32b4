from .registry import StopwatchRegistry
from .stopwatch import Clock, Stopwatch

__all__ = ["Clock", "Stopwatch", "StopwatchRegistry"]
