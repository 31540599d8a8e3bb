"""
Data Point
==========
One immutable, timestamped kinematic sample on a trajectory.

Vectors are 2-element numpy arrays ``[x, y]`` that are made read-only on
construction, so a recorded sample can be shared with listeners safely.
"""

import math
from dataclasses import dataclass

import numpy as np


def _frozen_vector(value) -> np.ndarray:
    vec = np.array(value, dtype=float).reshape(2)
    vec.setflags(write=False)
    return vec


@dataclass(frozen=True, eq=False)
class DataPoint:
    """Snapshot of one projectile at one instant."""
    time: float                  # s
    position: np.ndarray         # [x, y] m
    air_density: float           # kg/m³
    velocity: np.ndarray         # [vx, vy] m/s
    acceleration: np.ndarray     # [ax, ay] m/s²
    drag_force: np.ndarray       # [Fx, Fy] N
    force_gravity: float         # N
    apex: bool = False
    reached_ground: bool = False

    def __post_init__(self):
        assert not math.isnan(self.time), f'DataPoint time is {self.time}'
        for name in ('position', 'velocity', 'acceleration', 'drag_force'):
            object.__setattr__(self, name, _frozen_vector(getattr(self, name)))
        assert self.time != 0 or self.position[0] == 0, \
            f'Time is {self.time}, but x is {self.position[0]}'

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance (m) from this sample's position to (x, y)."""
        return math.hypot(self.position[0] - x, self.position[1] - y)

    def equals(self, other: 'DataPoint') -> bool:
        """Value equality on the kinematic fields (flags excluded)."""
        return (self.time == other.time
                and np.array_equal(self.position, other.position)
                and self.air_density == other.air_density
                and np.array_equal(self.velocity, other.velocity)
                and np.array_equal(self.acceleration, other.acceleration)
                and np.array_equal(self.drag_force, other.drag_force)
                and self.force_gravity == other.force_gravity)
