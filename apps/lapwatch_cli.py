from __future__ import annotations

import threading
import time
from typing import List, Optional

import typer
from pydantic import ValidationError

from lapwatch.config import get_config
from lapwatch.errors import NotRunning
from lapwatch.ids import ms_since, new_ulid, now_monotonic_ns
from lapwatch.log import get_logger, setup_logger
from lapwatch.snapshot import snapshot_json
from lapwatch.timing import StopwatchRegistry


log = get_logger("cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _init() -> None:
    try:
        cfg = get_config()
    except ValidationError as exc:
        typer.echo(f"[lapwatch] invalid LAPWATCH_* configuration:\n{exc}", err=True)
        raise typer.Exit(code=2)
    setup_logger(level=cfg.log_level)


@app.command()
def demo(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Stopwatch id (defaults to a fresh ULID)"),
    laps: int = typer.Option(2, min=1, help="Intervals to record, the last one closed by stop()"),
    interval_ms: float = typer.Option(10.0, "--interval-ms", min=0.0, help="Sleep between laps, in ms"),
) -> None:
    """Start a stopwatch, record a few laps, stop it and print the result."""

    cfg = get_config()
    registry = StopwatchRegistry()
    watch = registry.create(name or new_ulid())

    t0 = now_monotonic_ns()
    watch.start()
    for _ in range(laps - 1):
        time.sleep(interval_ms / 1000.0)
        watch.lap()
    time.sleep(interval_ms / 1000.0)
    watch.stop()

    typer.echo(watch.report(precision=cfg.precision))
    typer.echo(snapshot_json(watch.snapshot()))
    typer.echo(f"[lapwatch] demo finished in {ms_since(t0):.{cfg.precision}f} ms")


@app.command()
def race(
    threads: Optional[int] = typer.Option(None, "--threads", "-t", min=2, help="Concurrent stop() callers"),
    name: str = typer.Option("race", "--name", "-n", help="Stopwatch id"),
) -> None:
    """Let several threads call stop() on one running stopwatch at once."""

    cfg = get_config()
    n = threads or cfg.race_threads
    registry = StopwatchRegistry()
    watch = registry.create(name)
    watch.start()

    barrier = threading.Barrier(n)
    results: List[str] = []
    results_lock = threading.Lock()

    def _stop() -> None:
        barrier.wait()
        try:
            watch.stop()
            outcome = "ok"
        except NotRunning:
            outcome = "not_running"
        with results_lock:
            results.append(outcome)

    workers = [threading.Thread(target=_stop, daemon=True) for _ in range(n)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    ok = results.count("ok")
    failed = results.count("not_running")
    recorded = len(watch.get_lap_times())
    log.debug("race on %s finished: %s", name, results)
    typer.echo(f"[lapwatch] {n} threads: {ok} succeeded, {failed} NotRunning, {recorded} lap(s) recorded")
    if ok != 1 or recorded != 1:
        typer.echo("[lapwatch] race check FAILED", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
