"""Read-only views of stopwatch state."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StopwatchSnapshot(BaseModel):
    """Point-in-time copy of one stopwatch."""

    id: str
    running: bool = False
    laps_ms: List[float] = Field(default_factory=list)
    total_ms: float = 0.0


class RegistrySnapshot(BaseModel):
    """Point-in-time copy of every stopwatch in a registry."""

    stopwatches: List[StopwatchSnapshot] = Field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [s.id for s in self.stopwatches]


def snapshot_dump(snapshot: BaseModel) -> Dict[str, Any]:
    """Return a plain ``dict`` of ``snapshot`` suitable for JSON serialisation."""

    return snapshot.model_dump()


def snapshot_json(snapshot: BaseModel) -> str:
    return snapshot.model_dump_json(indent=2)


__all__ = ["StopwatchSnapshot", "RegistrySnapshot", "snapshot_dump", "snapshot_json"]
