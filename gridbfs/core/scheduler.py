# gridbfs/core/scheduler.py
#!/usr/bin/env python3
"""
Fixed-cadence driver for a SearchSession.

The scheduler never owns a thread or timer. Callers feed it the current time
through tick(now) (the viewer does so once per frame) or hand over control
with run(). At most one step() is in flight and stepping stops the moment a
terminal state is seen.
"""

import logging
import time
from typing import Callable, List, Optional

from gridbfs.config import STEP_INTERVAL_MS, clamp_interval
from gridbfs.core.session import SearchSession
from gridbfs.core.types import StepResult

log = logging.getLogger(__name__)

Listener = Callable[[StepResult], None]


class StepScheduler:
    def __init__(self, session: SearchSession, interval_ms: int = STEP_INTERVAL_MS):
        self.session = session
        self.interval_ms = clamp_interval(interval_ms)
        self.running = False
        self.last_result: Optional[StepResult] = None
        self._listeners: List[Listener] = []
        self._last_step_t: Optional[float] = None
        self._generation: Optional[int] = None
        self._in_step = False

    # -------------------- control --------------------

    def start(self) -> None:
        if self.session.is_terminal or self.session.grid is None:
            return
        self.running = True
        self._generation = self.session.generation
        self._last_step_t = None

    def pause(self) -> None:
        self.running = False

    def cancel(self) -> None:
        self.running = False
        self._generation = None
        self._last_step_t = None
        self.last_result = None

    def toggle(self) -> None:
        if self.running:
            self.pause()
        else:
            self.start()

    def set_interval_ms(self, ms: int) -> None:
        self.interval_ms = clamp_interval(ms)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # -------------------- stepping --------------------

    def _stale(self) -> bool:
        return self._generation is not None and self._generation != self.session.generation

    def step_once(self) -> Optional[StepResult]:
        """Advance a single step unless one is in flight or the search is over."""
        if self._in_step or self.session.grid is None or self.session.is_terminal:
            return None
        self._in_step = True
        try:
            res = self.session.step()
            self.last_result = res
            if res.status.is_terminal:
                self.running = False
                log.info("search %s after %d steps", res.status.value, res.metrics.get("steps", 0))
            # listeners run inside the guard; calls back into the scheduler are dropped
            for listener in list(self._listeners):
                listener(res)
        finally:
            self._in_step = False
        return res

    def tick(self, now: float) -> Optional[StepResult]:
        """Fire one step if running and `interval_ms` has passed since the last one."""
        if not self.running:
            return None
        if self._stale():
            # session restarted underneath us
            self.cancel()
            return None
        if self.session.is_terminal:
            self.running = False
            return None
        if self._last_step_t is not None and (now - self._last_step_t) * 1000.0 < self.interval_ms:
            return None
        self._last_step_t = now
        return self.step_once()

    def run(self, clock: Callable[[], float] = time.monotonic,
            sleep: Callable[[float], None] = time.sleep,
            max_steps: Optional[int] = None) -> Optional[StepResult]:
        """Block until the search ends, is cancelled, or max_steps steps fired."""
        self.start()
        fired = 0
        while self.running and (max_steps is None or fired < max_steps):
            if self.tick(clock()) is not None:
                fired += 1
            elif self.running:
                sleep(self.interval_ms / 1000.0)
        if max_steps is not None and fired >= max_steps:
            self.pause()
        return self.last_result
