"""Thread-safe registry of named counters accumulated over cycles.

Producers call :meth:`MetricRegistry.accumulate` from any thread. A single
periodic caller logs :meth:`MetricRegistry.snapshot` and closes the window
with :meth:`MetricRegistry.roll_cycle`; at shutdown
:meth:`MetricRegistry.summarize` logs average, peak and total per metric.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from cycle_metrics.config import settings
from cycle_metrics.utils.formatting import format_number
from cycle_metrics.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MetricStats:
    """Consistent view of one metric's counters."""

    current: float
    peak: float
    total: float


@dataclass
class MetricState:
    """Counters for a single metric, guarded by their own lock."""

    current: float = 0.0
    peak: float = 0.0
    total: float = 0.0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def add(self, value: float) -> None:
        with self._lock:
            self.current += value
            self.total += value

    def roll(self) -> None:
        """Fold the cycle value into the peak and start a new cycle."""
        with self._lock:
            self.peak = max(self.peak, self.current)
            self.current = 0.0

    def stats(self) -> MetricStats:
        with self._lock:
            return MetricStats(current=self.current, peak=self.peak, total=self.total)


class MetricRegistry:
    """In-process metrics with per-cycle snapshots and end-of-run totals."""

    def __init__(
        self,
        start: int,
        *,
        sink: logging.Logger | None = None,
        min_run_seconds: int | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            start: Run start time in milliseconds since the epoch.
            sink: Logger receiving report lines. Defaults to this module's logger.
            min_run_seconds: Lower bound for the duration used in averages.
        """
        self._start = start
        self._sink = sink or logger
        self._min_run_seconds = max(
            1, settings.min_run_seconds if min_run_seconds is None else min_run_seconds
        )
        self._metrics: dict[str, MetricState] = {}
        self._lock = threading.Lock()

    @property
    def start(self) -> int:
        return self._start

    def __len__(self) -> int:
        return len(self._metrics)

    def __contains__(self, name: object) -> bool:
        return name in self._metrics

    def _state_for(self, name: str) -> MetricState:
        state = self._metrics.get(name)
        if state is not None:
            return state
        with self._lock:
            state = self._metrics.get(name)
            if state is None:
                state = MetricState()
                self._metrics[name] = state
            return state

    def _entries(self) -> list[tuple[str, MetricState]]:
        # Brief copy so reporting never iterates the live dict while it grows.
        with self._lock:
            return list(self._metrics.items())

    def accumulate(self, name: str, value: float) -> None:
        """Add ``value`` to the metric ``name``, creating it on first use."""
        self._state_for(name).add(value)

    def get(self, name: str) -> MetricStats | None:
        """Return the counters for ``name``, or None if it was never accumulated."""
        state = self._metrics.get(name)
        return state.stats() if state is not None else None

    def names(self) -> list[str]:
        """Return the names of all known metrics."""
        return [name for name, _ in self._entries()]

    def snapshot(self) -> str:
        """Log and return the current cycle value of every metric."""
        parts = [
            f"{name}: {format_number(state.stats().current)}" for name, state in self._entries()
        ]
        line = f"Metric stats: {' '.join(parts)}".rstrip()
        self._sink.info(line)
        return line

    def roll_cycle(self) -> None:
        """Close the current cycle for every metric and open a new one."""
        for _, state in self._entries():
            state.roll()

    def summarize(self, end: int) -> list[str]:
        """Log run duration and average, peak and total for every metric.

        Args:
            end: Run end time in milliseconds since the epoch.

        Returns:
            The emitted lines, banner first.
        """
        seconds = max((end - self._start) // 1000, 0)
        divisor = max(seconds, self._min_run_seconds)
        if divisor != seconds:
            self._sink.warning(
                f"Run time of {seconds}s is below {self._min_run_seconds}s; "
                f"averaging over {divisor}s"
            )

        lines = [f"** Logging metrics. Total run time: {seconds} seconds **"]
        for name, state in self._entries():
            stats = state.stats()
            lines.append(
                f"{name}: average: {format_number(stats.total / divisor)} "
                f"peak: {format_number(stats.peak)} total: {format_number(stats.total)}"
            )

        for line in lines:
            self._sink.info(line)
        return lines
