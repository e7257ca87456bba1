"""Production loop — fires the idle tick on a fixed interval."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from barista.data.balance import BALANCE

logger = logging.getLogger(__name__)


class ProductionLoop:
    """Recurring background task that calls ``callback`` every ``interval`` seconds.

    Register once at startup, ``stop()`` on teardown::

        loop = ProductionLoop(engine.tick)
        loop.start()
        ...
        loop.stop()
    """

    def __init__(
        self,
        callback: Callable[[], object],
        interval: float = BALANCE.tick_interval_s,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            raise RuntimeError("production loop already running")
        # Each run owns its event so a restart can't revive a thread still winding down
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="barista-production", daemon=True
        )
        self._thread.start()
        logger.info("production loop started (every %.2fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop ticking and wait for the thread to exit."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info("production loop stopped")

    def _run(self, stop_event: threading.Event) -> None:
        # wait() returns True once stop() is called
        while not stop_event.wait(self._interval):
            self._callback()

    def __enter__(self) -> ProductionLoop:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
