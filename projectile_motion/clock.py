"""
Fixed-Step Clock
================
Turns variable wall-clock frame times into a whole number of fixed physics
ticks. Time that does not add up to a full tick is carried over to the next
call rather than dropped, so the simulated time tracks the elapsed time.
"""

from typing import Callable

from .constants import TIME_PER_DATA_POINT


class EventTimer:
    """
    Calls ``on_tick(period)`` once per elapsed ``period`` seconds.

    Parameters
    ----------
    on_tick : callable
        Receives the fixed tick length.
    period : float
        Tick length (s).
    """

    def __init__(self, on_tick: Callable[[float], None], period: float = TIME_PER_DATA_POINT):
        if period <= 0:
            raise ValueError(f"Period must be positive, got {period}")
        self._on_tick = on_tick
        self.period = period
        self.time_before_next_tick = period

    def step(self, dt: float) -> int:
        """Consume ``dt`` seconds and return the number of ticks fired."""
        ticks = 0
        while dt >= self.time_before_next_tick:
            dt -= self.time_before_next_tick
            self.time_before_next_tick = self.period
            self._on_tick(self.period)
            ticks += 1
        self.time_before_next_tick -= dt
        return ticks

    def reset(self):
        self.time_before_next_tick = self.period
