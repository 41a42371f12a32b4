"""Thread-safe named stopwatch."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from lapwatch.errors import AlreadyRunning, NotRunning, check_id
from lapwatch.ids import now_monotonic_ns, ns_to_ms
from lapwatch.snapshot import StopwatchSnapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class Stopwatch:
    """A named stopwatch recording lap durations in milliseconds.

    States are idle and running. ``start`` moves idle to running, ``stop``
    moves running back to idle, ``lap`` records an interval and stays
    running, ``reset`` returns to idle from anywhere and drops every lap.

    Each lap measures the interval since the previous ``start`` or ``lap``,
    not the time since ``start``. Every operation reads and mutates state
    under the instance lock, so concurrent callers observe a serial order.
    """

    def __init__(self, id: str, clock: Clock = now_monotonic_ns) -> None:
        self._id = check_id(id)
        self.clock = clock
        self._running = False
        self._start_ns = 0
        self._laps_ms: List[float] = []
        self._lock = Lock()

    def __repr__(self) -> str:
        return f"Stopwatch(id={self._id!r})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        """Identifier fixed at construction; there is no setter."""
        return self._id

    def get_id(self) -> str:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stopwatch):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start timing. Raises :class:`AlreadyRunning` if already started."""

        with self._lock:
            was_running = self._running
            if not was_running:
                self._start_ns = self.clock()
                self._running = True
        if was_running:
            logger.warning("start() rejected, stopwatch %s already running", self.id)
            raise AlreadyRunning(f"Stopwatch {self.id!r} is already running", self.id)
        logger.debug("stopwatch %s started", self.id)

    def lap(self) -> float:
        """Record the interval since the last start/lap and return it (ms)."""

        with self._lock:
            was_running = self._running
            if was_running:
                duration = self._close_interval()
        if not was_running:
            logger.warning("lap() rejected, stopwatch %s not running", self.id)
            raise NotRunning(f"Stopwatch {self.id!r} is not running", self.id)
        logger.debug("stopwatch %s lap %.3f ms", self.id, duration)
        return duration

    def stop(self) -> float:
        """Record the final interval, go idle, and return the interval (ms)."""

        with self._lock:
            was_running = self._running
            if was_running:
                duration = self._close_interval()
                self._running = False
        if not was_running:
            logger.warning("stop() rejected, stopwatch %s not running", self.id)
            raise NotRunning(f"Stopwatch {self.id!r} is not running", self.id)
        logger.debug("stopwatch %s stopped after %.3f ms", self.id, duration)
        return duration

    def reset(self) -> None:
        with self._lock:
            self._running = False
            self._laps_ms.clear()
        logger.debug("stopwatch %s reset", self.id)

    def _close_interval(self) -> float:
        # caller holds self._lock
        now = self.clock()
        duration = max(0.0, ns_to_ms(now - self._start_ns))
        self._laps_ms.append(duration)
        self._start_ns = now
        return duration

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def get_lap_times(self) -> List[float]:
        """Return a copy of the recorded laps in recording order."""

        with self._lock:
            return list(self._laps_ms)

    @property
    def total_ms(self) -> float:
        with self._lock:
            return sum(self._laps_ms)

    @property
    def elapsed_ms(self) -> float:
        """Recorded laps plus the open interval while running."""

        with self._lock:
            total = sum(self._laps_ms)
            if self._running:
                total += max(0.0, ns_to_ms(self.clock() - self._start_ns))
            return total

    def snapshot(self) -> StopwatchSnapshot:
        with self._lock:
            laps = list(self._laps_ms)
            running = self._running
        return StopwatchSnapshot(id=self.id, running=running, laps_ms=laps, total_ms=sum(laps))

    def report(self, precision: int = 3) -> str:
        """Render ``Stopwatch id #<id>`` followed by one ``<value> ms`` line per lap."""

        lines = [f"Stopwatch id #{self.id}"]
        lines.extend(f"{lap:.{precision}f} ms" for lap in self.get_lap_times())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.report()


__all__ = ["Stopwatch", "Clock"]
