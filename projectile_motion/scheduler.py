"""
Rapid-Fire Scheduler
====================
Auto-fires single shots at a fixed cadence while armed.

  IDLE  --arm()-->  ARMED  --disarm()-->  IDLE

While armed and the clock is playing, elapsed time accumulates as
``speed_scale · dt``. When it reaches the cadence one shot is fired and the
accumulator restarts from zero; any overshoot is dropped. If the
moving-projectile cap is reached the shot is deferred and retried on the
next step.
"""

from enum import Enum
from typing import Callable

from .constants import RAPID_FIRE_DELTA_TIME
from .logger import logger


class SchedulerState(Enum):
    IDLE = 'idle'
    ARMED = 'armed'


class RapidFireScheduler:

    def __init__(self, fire: Callable[[], None], can_fire: Callable[[], bool],
                 cadence: float = RAPID_FIRE_DELTA_TIME):
        if cadence <= 0:
            raise ValueError(f"Cadence must be positive, got {cadence}")
        self._fire = fire
        self._can_fire = can_fire
        self.cadence = cadence
        self.state = SchedulerState.IDLE
        self.time_since_last_shot = 0.0

    @property
    def armed(self) -> bool:
        return self.state is SchedulerState.ARMED

    def arm(self):
        self.state = SchedulerState.ARMED

    def disarm(self):
        self.state = SchedulerState.IDLE

    def reset(self):
        self.state = SchedulerState.IDLE
        self.time_since_last_shot = 0.0

    def step(self, dt: float, speed_scale: float = 1.0, playing: bool = True) -> bool:
        """Advance the cadence timer; returns True if a shot was fired."""
        if not (playing and self.armed):
            return False

        self.time_since_last_shot += speed_scale * dt
        if self.time_since_last_shot < self.cadence:
            return False
        if not self._can_fire():
            logger.debug("rapid-fire shot deferred: moving projectile cap reached")
            return False

        self._fire()
        self.time_since_last_shot = 0.0
        return True
