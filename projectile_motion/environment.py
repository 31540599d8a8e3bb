"""
Shared Environment
==================
Global state read by every live trajectory on each tick: gravity, altitude,
air-resistance switch, the derived air density, and the number of
projectiles still in flight.

Changing gravity or the air density emits ``changed`` so the collection can
flag trajectories whose path changed mid-air. Only future ticks see the new
values; recorded data points are never rewritten.
"""

from .atmosphere import air_density
from .constants import GRAVITY_ON_EARTH
from .events import Emitter
from .logger import logger


class Environment:
    """Gravity, altitude and air resistance for one simulation session."""

    def __init__(self, gravity: float = GRAVITY_ON_EARTH, altitude: float = 0.0,
                 air_resistance_on: bool = False):
        if gravity <= 0:
            raise ValueError(f"Gravity must be positive, got {gravity}")
        self._gravity = float(gravity)
        self._altitude = float(altitude)
        self._air_resistance_on = bool(air_resistance_on)
        self._air_density = air_density(self._altitude, self._air_resistance_on)
        self._moving_count = 0

        self._defaults = (self._gravity, self._altitude, self._air_resistance_on)

        # emits (environment) after gravity or air density changed
        self.changed = Emitter()
        # emits (count) whenever the moving-projectile count changes
        self.moving_count_changed = Emitter()

    # ── Gravity ───────────────────────────────────────────────────────────
    @property
    def gravity(self) -> float:
        return self._gravity

    @gravity.setter
    def gravity(self, value: float):
        if value <= 0:
            raise ValueError(f"Gravity must be positive, got {value}")
        value = float(value)
        if value != self._gravity:
            self._gravity = value
            logger.debug("gravity set to %.3f m/s²", value)
            self.changed.emit(self)

    # ── Air ───────────────────────────────────────────────────────────────
    @property
    def altitude(self) -> float:
        return self._altitude

    @altitude.setter
    def altitude(self, value: float):
        self._altitude = float(value)
        self._update_air_density()

    @property
    def air_resistance_on(self) -> bool:
        return self._air_resistance_on

    @air_resistance_on.setter
    def air_resistance_on(self, value: bool):
        self._air_resistance_on = bool(value)
        self._update_air_density()

    @property
    def air_density(self) -> float:
        """Derived from altitude and the air-resistance switch (read-only)."""
        return self._air_density

    def _update_air_density(self):
        density = air_density(self._altitude, self._air_resistance_on)
        if density != self._air_density:
            self._air_density = density
            logger.debug("air density set to %.5f kg/m³", density)
            self.changed.emit(self)

    # ── Moving projectiles ────────────────────────────────────────────────
    @property
    def moving_count(self) -> int:
        return self._moving_count

    def increment_moving(self):
        self._moving_count += 1
        self.moving_count_changed.emit(self._moving_count)

    def decrement_moving(self):
        assert self._moving_count > 0, 'moving projectile count would go negative'
        self._moving_count = max(self._moving_count - 1, 0)
        self.moving_count_changed.emit(self._moving_count)

    def reset_moving(self):
        if self._moving_count != 0:
            self._moving_count = 0
            self.moving_count_changed.emit(0)

    def reset(self):
        """Restore gravity, altitude and air resistance to construction values."""
        gravity, altitude, air_resistance_on = self._defaults
        self.gravity = gravity
        self._altitude = altitude
        self.air_resistance_on = air_resistance_on

    def __repr__(self):
        return (f"Environment(gravity={self._gravity}, altitude={self._altitude}, "
                f"air_resistance_on={self._air_resistance_on}, "
                f"air_density={self._air_density:.5f}, moving={self._moving_count})")
