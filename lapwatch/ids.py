
from __future__ import annotations
import time, ulid
NS_PER_MS = 1_000_000
def now_monotonic_ns() -> int:
    """Monotonic reading in integer nanoseconds; the default stopwatch clock."""
    return time.monotonic_ns()
def ns_to_ms(ns: int) -> float:
    """Nanoseconds as float milliseconds (sub-ms precision is kept)."""
    return ns / NS_PER_MS
def ms_since(start_ns: int) -> float:
    """Float milliseconds elapsed since ``start_ns`` (not rounded to whole ms)."""
    return ns_to_ms(now_monotonic_ns() - start_ns)
def new_ulid() -> str:
    """Fresh ULID string, used as a default stopwatch id."""
    return str(ulid.new())
