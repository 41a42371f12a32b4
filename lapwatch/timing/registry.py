from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from lapwatch.errors import DuplicateId, check_id
from lapwatch.ids import now_monotonic_ns
from lapwatch.snapshot import RegistrySnapshot
from lapwatch.timing.stopwatch import Clock, Stopwatch

logger = logging.getLogger(__name__)


class StopwatchRegistry:
    """Creates stopwatches under unique ids and remembers every one of them.

    Entries are never removed or replaced. The registry lock guards the
    check-then-insert in :meth:`create` and is never held together with a
    stopwatch lock.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or now_monotonic_ns
        self._map: Dict[str, Stopwatch] = {}
        self._lock = Lock()

    def create(self, timer_id: Any) -> Stopwatch:
        timer_id = check_id(timer_id)
        with self._lock:
            exists = timer_id in self._map
            if not exists:
                stopwatch = Stopwatch(timer_id, clock=self._clock)
                self._map[timer_id] = stopwatch
        if exists:
            logger.warning("create() rejected, stopwatch %s already exists", timer_id)
            raise DuplicateId(f"A stopwatch with id {timer_id!r} already exists", timer_id)
        logger.debug("registered stopwatch %s", timer_id)
        return stopwatch

    def list(self) -> List[Stopwatch]:
        """Return a copy of all stopwatches created so far."""
        with self._lock:
            return list(self._map.values())

    def snapshot(self) -> RegistrySnapshot:
        # each stopwatch is read after the registry lock is released
        return RegistrySnapshot(stopwatches=[s.snapshot() for s in self.list()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._map)

    def __contains__(self, timer_id: object) -> bool:
        with self._lock:
            return timer_id in self._map


__all__ = ["StopwatchRegistry"]
