"""
Polling controller for real-time dashboard metrics.

Drives repeated metric fetches on a fixed cadence and holds the latest
MetricsSnapshot for consumers:

- start(): one immediate fetch, then a recurring timer (default 5000 ms)
- stop(): cancel the timer; in-flight results are discarded
- refresh(): one extra fetch, timer untouched
- dispose(): stop for good; nothing lands afterwards
- page hidden -> stop(), page visible -> start()

Fetch failures never propagate: they keep the previous metrics and set
the snapshot's ``error``. The timer keeps running and the next tick
retries at the same cadence (no backoff).

Every fetch cycle is tagged with the current generation id and its own
increasing sequence number. stop() and dispose() advance the generation,
so late results from a stopped or disposed poller are dropped rather than
cancelled. Overlapping cycles (a fetch slower than the interval, or a
refresh during a tick) all complete; a result older than the last one
applied is dropped so the snapshot never goes backwards.
"""

import asyncio
import enum
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Sequence

import structlog

from insights.exceptions import ControllerDisposed, FetchFailure
from insights.metrics import (
    dashboard_metric_change_percent,
    dashboard_metric_value,
    metrics_fetch_duration_seconds,
    metrics_fetch_total,
    metrics_stale_results_discarded_total,
    polling_active_gauge,
)
from insights.schemas.metric import Metric, MetricsSnapshot
from insights.services.visibility import VisibilitySource
from insights.tracing import get_tracer

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)

FetchMetrics = Callable[[], Awaitable[Sequence[Metric]]]

DEFAULT_INTERVAL_MS = 5000


class PollingState(str, enum.Enum):
    """Lifecycle state of the poller."""

    IDLE = "idle"  # never started
    POLLING = "polling"  # timer armed
    STOPPED = "stopped"  # explicitly halted (or disposed)


def _validate_interval(interval_ms: int) -> int:
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
        raise ValueError(f"interval_ms must be a positive integer, got {interval_ms!r}")
    return interval_ms


class PollingController:
    """Owns the metrics polling lifecycle and the current snapshot."""

    def __init__(
        self,
        fetch: FetchMetrics,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        visibility: Optional[VisibilitySource] = None,
    ):
        """
        Initialize the controller. Nothing runs until open() or start().

        Args:
            fetch: Async callable returning the overview metrics
            interval_ms: Polling cadence in milliseconds
            visibility: Page-visibility signal source; polling pauses while hidden
        """
        self._fetch = fetch
        self._interval_ms = _validate_interval(interval_ms)
        self._visibility = visibility

        self._snapshot = MetricsSnapshot.initial()
        self._state = PollingState.IDLE
        self._timer: Optional[asyncio.Task] = None
        self._inflight: set[asyncio.Task] = set()
        self._generation = 0
        self._sequence = 0
        self._applied_sequence = 0
        self._disposed = False
        self._subscribed = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> PollingState:
        return self._state

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def generation(self) -> int:
        return self._generation

    def get_snapshot(self) -> MetricsSnapshot:
        """Current snapshot. Snapshots are immutable, so this is a read-only view."""
        return self._snapshot

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def configure(self, interval_ms: int) -> None:
        """
        Set the polling cadence.

        Takes effect from the next start(); a running timer keeps its cadence.

        Raises:
            ValueError: If interval_ms is not a positive integer
        """
        self._interval_ms = _validate_interval(interval_ms)
        logger.info("polling_configured", interval_ms=interval_ms)

    def start(self) -> None:
        """
        Fetch immediately, then keep fetching every interval.

        Restarting cancels the previous timer first.

        Raises:
            ControllerDisposed: If dispose() has been called
        """
        self._ensure_live()
        self._cancel_timer()

        self._spawn_cycle()
        self._timer = asyncio.get_running_loop().create_task(
            self._run_timer(self._interval_ms / 1000),
            name="metrics-poll-timer",
        )
        self._state = PollingState.POLLING
        polling_active_gauge.set(1)

        logger.info("polling_started", interval_ms=self._interval_ms)

    def stop(self) -> None:
        """
        Cancel the timer.

        An in-flight fetch is left to finish but its result is discarded.
        """
        self._cancel_timer()
        self._generation += 1
        if self._snapshot.is_loading and self._inflight:
            self._snapshot = self._snapshot.model_copy(update={"is_loading": False})

        if self._state is not PollingState.STOPPED:
            logger.info("polling_stopped", interval_ms=self._interval_ms)
        self._state = PollingState.STOPPED
        polling_active_gauge.set(0)

    def refresh(self) -> asyncio.Task:
        """
        Fetch once without touching the timer.

        Returns:
            The fetch cycle task; await it to wait for the result to land

        Raises:
            ControllerDisposed: If dispose() has been called
        """
        self._ensure_live()
        return self._spawn_cycle()

    def dispose(self) -> None:
        """Stop polling permanently and detach from the visibility source."""
        if self._disposed:
            return

        self.stop()
        self._unsubscribe()
        self._disposed = True
        logger.info("polling_disposed", pending_fetches=len(self._inflight))

    async def open(self) -> "PollingController":
        """Subscribe to visibility changes and start polling."""
        self._ensure_live()
        if self._visibility is not None and not self._subscribed:
            self._visibility.subscribe(self._on_visibility_change)
            self._subscribed = True
        self.start()
        return self

    async def aclose(self) -> None:
        """Dispose and wait for any in-flight fetches to settle."""
        self.dispose()
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def __aenter__(self) -> "PollingController":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_live(self) -> None:
        if self._disposed:
            raise ControllerDisposed()

    def _unsubscribe(self) -> None:
        if self._visibility is not None and self._subscribed:
            self._visibility.unsubscribe(self._on_visibility_change)
            self._subscribed = False

    def _on_visibility_change(self, hidden: bool) -> None:
        if self._disposed:
            return
        if hidden:
            self.stop()
        else:
            self.start()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _run_timer(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            self._spawn_cycle()

    def _spawn_cycle(self) -> asyncio.Task:
        self._sequence += 1
        task = asyncio.get_running_loop().create_task(self._fetch_cycle(self._generation, self._sequence))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    def _is_stale(self, generation: int, sequence: int) -> bool:
        return generation != self._generation or sequence <= self._applied_sequence

    async def _fetch_cycle(self, generation: int, sequence: int) -> None:
        if self._disposed or generation != self._generation:
            # stopped before it got to run
            return

        self._snapshot = self._snapshot.loading()
        started = time.perf_counter()

        with tracer.start_as_current_span("metrics.fetch_cycle") as span:
            span.set_attribute("insights.generation", generation)
            span.set_attribute("insights.sequence", sequence)
            try:
                metrics = await self._fetch()
            except Exception as exc:
                if self._is_stale(generation, sequence):
                    self._discard(generation, sequence, outcome="failed")
                    return
                self._applied_sequence = sequence
                message = str(exc) or FetchFailure.default_message
                self._snapshot = self._snapshot.failed(message)
                metrics_fetch_total.labels(status="failed").inc()
                span.record_exception(exc)
                logger.warning(
                    "metrics_fetch_failed",
                    error=message,
                    error_type=type(exc).__name__,
                    generation=generation,
                    sequence=sequence,
                )
                return
            finally:
                metrics_fetch_duration_seconds.observe(time.perf_counter() - started)

            if self._is_stale(generation, sequence):
                self._discard(generation, sequence, outcome="success")
                return

            self._applied_sequence = sequence

            self._snapshot = MetricsSnapshot(
                timestamp=datetime.now(timezone.utc),
                metrics=tuple(metrics),
                is_loading=False,
                error=None,
            )
            metrics_fetch_total.labels(status="success").inc()
            for metric in self._snapshot.metrics:
                dashboard_metric_value.labels(title=metric.title.value).set(metric.raw_value)
                dashboard_metric_change_percent.labels(title=metric.title.value).set(metric.change_percent)

            logger.debug(
                "metrics_snapshot_updated",
                generation=generation,
                sequence=sequence,
                metric_count=len(metrics),
            )

    def _discard(self, generation: int, sequence: int, outcome: str) -> None:
        metrics_stale_results_discarded_total.inc()
        logger.debug(
            "stale_metrics_discarded",
            generation=generation,
            current_generation=self._generation,
            sequence=sequence,
            applied_sequence=self._applied_sequence,
            outcome=outcome,
        )
