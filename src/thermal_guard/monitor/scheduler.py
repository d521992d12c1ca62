"""Sampling scheduler: periodic refresh of the published sensor snapshot.

One background asyncio task drives the cadence. Each tick:

    probe (scheduler-owned probe thread, bounded by a timeout)
      ↓ failure, timeout or still busy → last known metrics, marked as fallback
    derive next snapshot from the current one (scheduler-owned derive thread)
      ↓
    invariant check → publish into the snapshot cell (event loop)
      ↓
    notify subscribers in publish order (event loop)

The event loop is the read/notify context. It only ever awaits the worker
threads and swaps a reference, so readers are never held up by probing.

Each probe call kind runs on its own single-worker executor, and a call is
only submitted when the previous one has returned. A probe that hangs
therefore ties up at most one thread per call kind; later ticks fall back
immediately instead of queueing behind it.
"""

import asyncio
import random
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, TypeVar

from thermal_guard.config.settings import get_settings
from thermal_guard.config.validators import PROBE_MODES
from thermal_guard.monitor.diagnostics import DiagnosticsReport, summarize
from thermal_guard.monitor.subscriptions import (
    SnapshotCallback,
    SnapshotCell,
    SubscriberRegistry,
    SubscriptionHandle,
)
from thermal_guard.sensors.catalog import default_snapshot
from thermal_guard.sensors.estimation import EstimationEngine
from thermal_guard.sensors.models import RawMetrics, SensorSnapshot
from thermal_guard.sensors.platforms import create_probe
from thermal_guard.sensors.probe import HardwareProbe, ProbeUnavailable
from thermal_guard.sensors.update_rules import (
    InvariantViolation,
    advance_snapshot,
    verify_snapshot,
)
from thermal_guard.telemetry import (
    FAN_DATA_UNAVAILABLE,
    PROBE_RECOVERED,
    PROBE_UNAVAILABLE,
    SCHEDULER_STARTED,
    SCHEDULER_STOPPED,
    SCHEDULER_TICK_FAILED,
    SNAPSHOT_INVARIANT_VIOLATION,
    SNAPSHOT_PUBLISHED,
    get_logger,
)

log = get_logger(__name__)
settings = get_settings()

T = TypeVar("T")


class SchedulerState(str, Enum):
    """Scheduler lifecycle. STOPPED is terminal."""

    IDLE = "idle"
    SAMPLING = "sampling"
    PUBLISHING = "publishing"
    STOPPED = "stopped"


class SamplingScheduler:
    """Owns the refresh cadence and produces every SensorSnapshot.

    Usage:
        scheduler = SamplingScheduler(SimulatedProbe())
        scheduler.subscribe(lambda snap: print(snap.cpu_temp))
        await scheduler.start()  # one immediate tick, then one per interval
        latest = scheduler.current_snapshot()
        await scheduler.stop()

    Attributes:
        probe: Hardware probe sampled each tick.
        engine: Estimation rules.
        interval_seconds: Time between tick starts.
        probe_timeout_seconds: A probe call slower than this counts as failed.
        running: True between start() and stop().
        ticks_completed: Snapshots published since construction.
        consecutive_probe_failures: Failed usage reads since the last success.
    """

    def __init__(
        self,
        probe: HardwareProbe | None = None,
        *,
        interval_seconds: float | None = None,
        probe_timeout_seconds: float | None = None,
        engine: EstimationEngine | None = None,
        rng: random.Random | None = None,
        seed_snapshot: SensorSnapshot | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            probe: Hardware probe. Defaults to the probe for settings.probe_mode.
            interval_seconds: Tick cadence. Defaults to the configured interval
                for the probe's mode.
            probe_timeout_seconds: Probe call bound. Defaults to
                settings.probe_timeout_seconds, then to one interval.
            engine: Estimation rules. Defaults to EstimationEngine().
            rng: Random source for sensor jitter. Defaults to
                random.Random(settings.random_seed).
            seed_snapshot: Snapshot published before the first tick. Defaults
                to the built-in sensor catalog.
        """
        self._rng = rng or random.Random(settings.random_seed)
        if probe is None:
            # Own random stream so probe and jitter draws never interleave
            probe = create_probe(settings.probe_mode, rng=random.Random(self._rng.random()))
        self.probe = probe
        self.engine = engine or EstimationEngine()

        probe_mode = getattr(probe, "name", "live")
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.interval_for(probe_mode if probe_mode in PROBE_MODES else "live")
        )
        self.probe_timeout_seconds = (
            probe_timeout_seconds
            if probe_timeout_seconds is not None
            else (settings.probe_timeout_seconds or self.interval_seconds)
        )

        self._cell = SnapshotCell(seed_snapshot or default_snapshot())
        self._subscribers = SubscriberRegistry()
        self._tick_lock = asyncio.Lock()
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None
        self._phase = SchedulerState.IDLE
        self._stopped = False
        self._last_raw: RawMetrics | None = None

        self._probe_executors = {
            kind: ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"thermal-probe-{kind}")
            for kind in ("usage", "fans")
        }
        self._pending_calls: dict[str, Future[Any]] = {}
        self._derive_executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="thermal-derive"
        )

        self.running = False
        self.ticks_completed = 0
        self.consecutive_probe_failures = 0

    # ------------------------------------------------------------------
    # Reader side

    @property
    def state(self) -> SchedulerState:
        """Current lifecycle state."""
        if self._stopped and self._phase == SchedulerState.IDLE:
            return SchedulerState.STOPPED
        return self._phase

    def current_snapshot(self) -> SensorSnapshot:
        """Latest published snapshot (the seed snapshot before the first tick)."""
        return self._cell.current()

    def subscribe(self, callback: SnapshotCallback) -> SubscriptionHandle:
        """Register a callback fired once per publish, on the event loop."""
        return self._subscribers.subscribe(callback)

    def on_update(self, callback: SnapshotCallback) -> SubscriptionHandle:
        """Alias of subscribe()."""
        return self.subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove a callback; unknown handles are ignored."""
        self._subscribers.unsubscribe(handle)

    def diagnostics(self) -> DiagnosticsReport:
        """Availability and severity summary of the current snapshot."""
        return summarize(
            self.current_snapshot(),
            scheduler_state=self.state.value,
            consecutive_probe_failures=self.consecutive_probe_failures,
        )

    # ------------------------------------------------------------------
    # Lifecycle

    async def start(self) -> None:
        """Run one tick immediately, then keep ticking in the background.

        Calling start() while running, or after stop(), does nothing.
        """
        if self._stopped:
            log.warning("sampling_scheduler_start_after_stop", probe=self.probe.name)
            return
        if self.running:
            log.warning("sampling_scheduler_already_running", probe=self.probe.name)
            return

        self.running = True
        self._stop_event = asyncio.Event()
        log.info(
            SCHEDULER_STARTED,
            probe=self.probe.name,
            interval_seconds=self.interval_seconds,
            probe_timeout_seconds=self.probe_timeout_seconds,
        )

        await self._safe_tick()
        if self.running:
            self._task = asyncio.create_task(self._run_loop())

    async def stop(self) -> None:
        """Stop ticking.

        A tick already in flight finishes and publishes; no tick starts after
        that. Safe to call repeatedly, before start(), or from a task spawned
        by a subscriber callback. Worker threads are released once the
        in-flight tick is done; a probe call that never returns is abandoned,
        not waited for.
        """
        was_running = self.running
        self.running = False
        self._stopped = True
        if self._stop_event is not None:
            self._stop_event.set()

        task = self._task
        if task is not None and task is not asyncio.current_task() and not task.done():
            await asyncio.gather(task, return_exceptions=True)
        self._task = None

        async with self._tick_lock:
            for executor in (*self._probe_executors.values(), self._derive_executor):
                executor.shutdown(wait=False, cancel_futures=True)

        if was_running:
            log.info(
                SCHEDULER_STOPPED,
                probe=self.probe.name,
                ticks_completed=self.ticks_completed,
                last_sequence=self.current_snapshot().sequence,
            )

    async def _run_loop(self) -> None:
        """Tick every interval until stopped.

        Intervals are measured between tick starts, so a slow tick shortens
        the following wait rather than shifting the whole schedule.
        """
        assert self._stop_event is not None
        loop = asyncio.get_running_loop()
        next_tick_at = loop.time() + self.interval_seconds

        while self.running:
            delay = max(0.0, next_tick_at - loop.time())
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
                break
            except asyncio.TimeoutError:
                pass

            if not self.running:
                break
            next_tick_at = max(next_tick_at + self.interval_seconds, loop.time())
            await self._safe_tick()

    async def _safe_tick(self) -> None:
        try:
            await self.tick()
        except Exception as e:
            # Nothing inside a tick may end the loop
            log.error(
                SCHEDULER_TICK_FAILED,
                probe=self.probe.name,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )

    # ------------------------------------------------------------------
    # Tick

    async def tick(self) -> SensorSnapshot:
        """Sample, derive, verify and publish one snapshot.

        Ticks are serialized, so snapshots are published in tick order.
        After stop() no new tick runs; the current snapshot is returned.

        Returns:
            The snapshot current after this tick.
        """
        async with self._tick_lock:
            if self._stopped:
                return self.current_snapshot()

            self._phase = SchedulerState.SAMPLING
            try:
                raw, fan_speeds = await asyncio.gather(
                    self._sample_usage(), self._sample_fans()
                )
                previous = self.current_snapshot()
                snapshot = await asyncio.get_running_loop().run_in_executor(
                    self._derive_executor,
                    advance_snapshot,
                    previous,
                    raw,
                    fan_speeds,
                    self.engine,
                    self._rng,
                )

                try:
                    verify_snapshot(snapshot)
                except InvariantViolation as e:
                    log.error(
                        SNAPSHOT_INVARIANT_VIOLATION,
                        sequence=snapshot.sequence,
                        error=str(e),
                    )
                    return previous

                self._phase = SchedulerState.PUBLISHING
                if self._cell.publish(snapshot):
                    self.ticks_completed += 1
                    log.debug(
                        SNAPSHOT_PUBLISHED,
                        sequence=snapshot.sequence,
                        cpu_temp=round(snapshot.cpu_temp, 1),
                        cpu_load=raw.cpu_usage_pct,
                        memory_used=raw.memory_usage_pct,
                        probe_succeeded=raw.probe_succeeded,
                        fans_reported=len(fan_speeds),
                    )
                    self._subscribers.notify(snapshot)
                return self.current_snapshot()
            finally:
                self._phase = SchedulerState.IDLE

    async def _call_probe(self, kind: str, call: Callable[[], T]) -> T:
        """Run one probe call on its executor, bounded by the probe timeout.

        A timed-out call keeps its worker thread until it returns. Until then
        no new call of the same kind is submitted.

        Raises:
            ProbeUnavailable: If the previous call of this kind is still running.
            asyncio.TimeoutError: If the call outlives probe_timeout_seconds.
        """
        pending = self._pending_calls.get(kind)
        if pending is not None and not pending.done():
            raise ProbeUnavailable(f"previous {kind} call still running")

        future = self._probe_executors[kind].submit(call)
        self._pending_calls[kind] = future
        return await asyncio.wait_for(
            asyncio.wrap_future(future), timeout=self.probe_timeout_seconds
        )

    async def _sample_usage(self) -> RawMetrics:
        """Probe CPU/memory usage, falling back to the last known values."""
        reason: str
        try:
            raw = await self._call_probe("usage", self.probe.sample_cpu_and_memory_usage)
        except asyncio.TimeoutError:
            reason = "timeout"
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
        else:
            if self.consecutive_probe_failures:
                log.info(
                    PROBE_RECOVERED,
                    probe=self.probe.name,
                    failed_reads=self.consecutive_probe_failures,
                )
            self.consecutive_probe_failures = 0
            self._last_raw = raw
            return raw

        self.consecutive_probe_failures += 1
        log.warning(
            PROBE_UNAVAILABLE,
            probe=self.probe.name,
            reason=reason,
            consecutive_failures=self.consecutive_probe_failures,
            has_last_known=self._last_raw is not None,
        )
        if self._last_raw is not None:
            return self._last_raw.as_fallback()
        return RawMetrics(cpu_usage_pct=0.0, memory_usage_pct=0.0, probe_succeeded=False)

    async def _sample_fans(self) -> Mapping[str, float]:
        """Probe fan speeds; any failure means no fan data this tick."""
        try:
            return await self._call_probe("fans", self.probe.sample_fan_speeds)
        except asyncio.TimeoutError:
            reason = "timeout"
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
        log.debug(FAN_DATA_UNAVAILABLE, probe=self.probe.name, reason=reason)
        return {}
