"""Background scheduler that drives registry cycles."""

from __future__ import annotations

import threading

from cycle_metrics.config import settings
from cycle_metrics.registry import MetricRegistry
from cycle_metrics.utils.clock import now_millis
from cycle_metrics.utils.logging import generate_run_id, get_logger, set_run_id

logger = get_logger(__name__)


class CycleDriver:
    """Periodically snapshot and roll over a registry on a daemon thread."""

    def __init__(
        self,
        registry: MetricRegistry,
        cycle_seconds: float | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            registry: The registry to drive.
            cycle_seconds: Cycle period. Defaults to ``settings.cycle_seconds``.
            run_id: Correlation ID bound to the worker's log records.

        Raises:
            ValueError: If the cycle period is not positive.
        """
        self.registry = registry
        self.cycle_seconds = settings.cycle_seconds if cycle_seconds is None else cycle_seconds
        if self.cycle_seconds <= 0:
            msg = f"cycle_seconds must be positive, got {self.cycle_seconds}"
            raise ValueError(msg)
        self.run_id = run_id or generate_run_id()
        self.cycles = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the cycle thread.

        Raises:
            RuntimeError: If the driver was already started.
        """
        if self._thread is not None:
            msg = "Cycle driver already started"
            raise RuntimeError(msg)
        self._thread = threading.Thread(
            target=self._loop, name=f"cycle-driver-{self.run_id}", daemon=True
        )
        self._thread.start()
        logger.info(f"Started cycle driver: run_id={self.run_id}, period={self.cycle_seconds}s")

    def _loop(self) -> None:
        set_run_id(self.run_id)
        while not self._stop.wait(self.cycle_seconds):
            self.registry.snapshot()
            self.registry.roll_cycle()
            self.cycles += 1

    def stop(self, summarize: bool = True) -> list[str]:
        """Stop the cycle thread and optionally log the run summary.

        Returns:
            The summary lines, or an empty list when not summarizing.
        """
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        logger.info(f"Stopped cycle driver: run_id={self.run_id}, cycles={self.cycles}")

        if not summarize:
            return []
        return self.registry.summarize(now_millis())

    def __enter__(self) -> CycleDriver:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
