# tests/unit/test_stopwatch.py
import threading
import time

import pytest

from lapwatch.errors import AlreadyRunning, InvalidId, NotRunning
from lapwatch.ids import NS_PER_MS, ms_since, now_monotonic_ns, ns_to_ms
from lapwatch.timing.stopwatch import Stopwatch


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, start_ns: int = 1_000 * NS_PER_MS):
        self.now = start_ns

    def advance_ms(self, ms: float) -> None:
        self.now += int(ms * NS_PER_MS)

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def watch(clock):
    return Stopwatch("w1", clock=clock)


def test_fresh_stopwatch_is_idle(watch):
    assert watch.get_id() == "w1"
    assert watch.running is False
    assert watch.get_lap_times() == []

    with pytest.raises(NotRunning):
        watch.lap()
    with pytest.raises(NotRunning):
        watch.stop()

    watch.start()
    assert watch.running is True


def test_second_start_rejected_without_side_effects(watch, clock):
    watch.start()
    clock.advance_ms(4)
    with pytest.raises(AlreadyRunning) as exc:
        watch.start()
    assert exc.value.timer_id == "w1"

    # the first start time still applies
    clock.advance_ms(6)
    assert watch.stop() == pytest.approx(10.0)


def test_laps_measure_disjoint_intervals(watch, clock):
    watch.start()
    clock.advance_ms(10)
    assert watch.lap() == pytest.approx(10.0)
    clock.advance_ms(5)
    assert watch.lap() == pytest.approx(5.0)
    clock.advance_ms(2.5)
    assert watch.stop() == pytest.approx(2.5)

    assert watch.get_lap_times() == pytest.approx([10.0, 5.0, 2.5])
    assert watch.total_ms == pytest.approx(17.5)
    assert watch.running is False


def test_stop_then_restart_keeps_appending(watch, clock):
    watch.start()
    clock.advance_ms(1)
    watch.stop()
    clock.advance_ms(100)  # idle time is not recorded
    watch.start()
    clock.advance_ms(3)
    watch.stop()
    assert watch.get_lap_times() == pytest.approx([1.0, 3.0])


def test_lap_durations_never_negative():
    ticks = iter([5_000_000, 1_000_000])
    watch = Stopwatch("backwards", clock=lambda: next(ticks))
    watch.start()
    assert watch.lap() == 0.0
    assert watch.get_lap_times() == [0.0]


@pytest.mark.parametrize("running", [False, True])
def test_reset_from_any_state(watch, clock, running):
    watch.start()
    clock.advance_ms(2)
    watch.lap()
    if not running:
        watch.stop()

    watch.reset()
    assert watch.running is False
    assert watch.get_lap_times() == []
    with pytest.raises(NotRunning):
        watch.stop()
    watch.reset()  # idempotent


def test_lap_times_is_a_snapshot(watch, clock):
    watch.start()
    clock.advance_ms(1)
    watch.lap()
    first = watch.get_lap_times()

    first.append(999.0)
    assert watch.get_lap_times() == pytest.approx([1.0])

    clock.advance_ms(2)
    watch.stop()
    second = watch.get_lap_times()
    watch.reset()
    assert first == pytest.approx([1.0, 999.0])
    assert second == pytest.approx([1.0, 2.0])


def test_elapsed_includes_open_interval(watch, clock):
    assert watch.elapsed_ms == 0.0
    watch.start()
    clock.advance_ms(4)
    watch.lap()
    clock.advance_ms(3)
    assert watch.elapsed_ms == pytest.approx(7.0)
    assert watch.total_ms == pytest.approx(4.0)


def test_equality_and_hash_use_id_only(clock):
    a = Stopwatch("same", clock=clock)
    b = Stopwatch("same")
    a.start()
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Stopwatch("other")
    assert a != "same"


@pytest.mark.parametrize("bad", ["", None, 42])
def test_invalid_id_rejected(bad):
    with pytest.raises(InvalidId):
        Stopwatch(bad)


def test_snapshot_and_report(watch, clock):
    watch.start()
    clock.advance_ms(1.5)
    watch.lap()
    clock.advance_ms(2)
    snap = watch.snapshot()
    assert snap.id == "w1"
    assert snap.running is True
    assert snap.laps_ms == pytest.approx([1.5])
    assert snap.total_ms == pytest.approx(1.5)

    watch.stop()
    assert str(watch) == "Stopwatch id #w1\n1.500 ms\n2.000 ms"
    assert watch.report(precision=1) == "Stopwatch id #w1\n1.5 ms\n2.0 ms"


def test_concurrent_stop_succeeds_exactly_once():
    n = 16
    watch = Stopwatch("race")
    watch.start()
    barrier = threading.Barrier(n)
    outcomes = []
    lock = threading.Lock()

    def _stop():
        barrier.wait()
        try:
            watch.stop()
            result = "ok"
        except NotRunning:
            result = "not_running"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=_stop) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert outcomes.count("ok") == 1
    assert outcomes.count("not_running") == n - 1
    assert len(watch.get_lap_times()) == 1
    assert watch.running is False


def test_concurrent_laps_all_recorded():
    n, per_thread = 8, 200
    watch = Stopwatch("laps")
    watch.start()
    barrier = threading.Barrier(n)

    def _laps():
        barrier.wait()
        for _ in range(per_thread):
            watch.lap()

    threads = [threading.Thread(target=_laps) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    watch.stop()
    laps = watch.get_lap_times()
    assert len(laps) == n * per_thread + 1
    assert all(d >= 0.0 for d in laps)


def test_real_clock_end_to_end():
    watch = Stopwatch("real")
    watch.start()
    time.sleep(0.010)
    watch.lap()
    assert watch.get_lap_times()[0] >= 9.0
    time.sleep(0.005)
    watch.stop()
    laps = watch.get_lap_times()
    assert len(laps) == 2
    assert laps[1] >= 4.0
    assert watch.running is False


def test_id_is_read_only(watch):
    bucket = {watch}
    with pytest.raises(AttributeError):
        watch.id = "x"
    assert watch.id == "w1"
    assert watch.get_id() == "w1"
    assert watch in bucket


@pytest.mark.parametrize("attempt", range(50))
def test_lap_racing_stop_is_serialized(attempt):
    watch = Stopwatch(f"lap-vs-stop-{attempt}")
    watch.start()
    barrier = threading.Barrier(2)
    outcomes = {}

    def _call(name, op):
        barrier.wait()
        try:
            op()
            outcomes[name] = "ok"
        except NotRunning:
            outcomes[name] = "not_running"

    threads = [
        threading.Thread(target=_call, args=("lap", watch.lap)),
        threading.Thread(target=_call, args=("stop", watch.stop)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert outcomes["stop"] == "ok"
    assert watch.running is False
    laps = watch.get_lap_times()
    if outcomes["lap"] == "ok":
        assert len(laps) == 2
    else:
        assert outcomes["lap"] == "not_running"
        assert len(laps) == 1


def test_clock_helpers_return_float_ms():
    assert ns_to_ms(1_500_000) == 1.5
    elapsed = ms_since(now_monotonic_ns())
    assert isinstance(elapsed, float)
    assert elapsed >= 0.0
