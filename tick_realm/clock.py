"""Clock and TickContext for a variable-timestep engine."""
from __future__ import annotations

import math
import random

import structlog

from tick_realm.types import TickContext

logger = structlog.get_logger()


class Clock:
    """Counts ticks and turns a driver-reported dt into a safe step.

    A negative or NaN dt becomes 0. A dt above ``max_step_ms`` (a suspended
    host, a clock jump) is cut to ``max_step_ms`` rather than applied whole.
    """

    def __init__(self, max_step_ms: float) -> None:
        if max_step_ms <= 0:
            raise ValueError("max_step_ms must be positive")
        self._max_step_ms = max_step_ms
        self._tick_number = 0
        self._elapsed = 0.0

    @property
    def max_step_ms(self) -> float:
        return self._max_step_ms

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        """Seconds of simulated time applied so far."""
        return self._elapsed

    def clamp(self, dt_ms: float) -> float:
        """Clamped step in milliseconds."""
        if math.isnan(dt_ms) or dt_ms < 0:
            logger.debug("dt_rejected", dt_ms=dt_ms)
            return 0.0
        if dt_ms > self._max_step_ms:
            logger.warning("dt_clamped", dt_ms=dt_ms, applied_ms=self._max_step_ms)
            return self._max_step_ms
        return float(dt_ms)

    def advance(self, dt_ms: float, rng: random.Random) -> TickContext:
        dt = self.clamp(dt_ms) / 1000
        self._tick_number += 1
        self._elapsed += dt
        return TickContext(
            tick_number=self._tick_number,
            dt=dt,
            elapsed=self._elapsed,
            random=rng,
        )

    def reset(self, tick_number: int = 0, elapsed: float = 0.0) -> None:
        self._tick_number = tick_number
        self._elapsed = elapsed
