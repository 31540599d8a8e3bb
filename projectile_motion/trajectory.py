"""
Trajectory
==========
The flight record of one fired projectile: its launch parameters, the
chronological list of recorded data points, and summary statistics that
are kept current as points are added.

Environment values (gravity, air density) are read on every step, so a
change while the projectile is in the air bends the rest of its path but
never rewrites points already recorded.
"""

from typing import Callable, Dict, List, Optional

import numpy as np

from .data_point import DataPoint
from .environment import Environment
from .events import Emitter
from .integrator import StepParameters, initial_data_point, step_data_point
from .logger import logger
from .object_types import ObjectType


class Trajectory:
    """
    One shot, from the muzzle to the ground.

    Parameters
    ----------
    object_type : ObjectType
        Kind of projectile (carried for display; numeric values below win).
    mass, diameter, drag_coefficient : float
        Projectile parameters at the time of firing (kg, m, -).
    initial_speed, initial_height, initial_angle : float
        Launch speed (m/s), cannon height (m) and angle (degrees).
    environment : Environment
        Shared gravity / air density, read on every step.
    check_if_hit_target : callable, optional
        Called with the landing x; returns whether the target was hit.
    """

    def __init__(self, object_type: ObjectType, mass: float, diameter: float,
                 drag_coefficient: float, initial_speed: float, initial_height: float,
                 initial_angle: float, environment: Environment,
                 check_if_hit_target: Optional[Callable[[float], bool]] = None):
        self.object_type = object_type
        self.mass = mass
        self.diameter = diameter
        self.drag_coefficient = drag_coefficient
        self.initial_speed = initial_speed
        self.initial_height = initial_height
        self.initial_angle = initial_angle
        self.environment = environment
        self._check_if_hit_target = check_if_hit_target

        self.apex_point: Optional[DataPoint] = None
        self.max_height = initial_height
        self.horizontal_displacement = 0.0
        self.flight_time = 0.0
        self.has_hit_target = False
        self.reached_ground = False
        self.changed_in_mid_air = False
        # number of shots fired after this one
        self.rank = 0

        self.data_points: List[DataPoint] = []

        # emits (data_point) for every recorded sample
        self.data_point_added = Emitter()
        # emits (trajectory) once, after the terminal sample is recorded
        self.landed = Emitter()

        self._add_data_point(initial_data_point(initial_speed, initial_angle, initial_height,
                                                self._step_parameters()))

    def _step_parameters(self) -> StepParameters:
        return StepParameters(
            mass=self.mass,
            diameter=self.diameter,
            drag_coefficient=self.drag_coefficient,
            gravity=self.environment.gravity,
            air_density=self.environment.air_density,
        )

    @property
    def last_point(self) -> Optional[DataPoint]:
        return self.data_points[-1] if self.data_points else None

    @property
    def landing_x(self) -> Optional[float]:
        """x of the terminal sample, or None while in flight."""
        return self.data_points[-1].x if self.reached_ground else None

    def increment_rank(self):
        self.rank += 1

    def step(self, dt: float) -> List[DataPoint]:
        """
        Advance by one tick and return the samples recorded.

        Drivers may call this on projectiles already at rest, so a landed
        trajectory simply records nothing.
        """
        if self.reached_ground or not self.data_points:
            return []

        added = []
        for point in step_data_point(self.data_points[-1], dt, self._step_parameters()):
            if point.apex:
                assert self.apex_point is None, 'already have an apex point'
                if self.apex_point is not None:
                    logger.warning("ignoring second apex at t=%.3f s", point.time)
                    continue
                self.apex_point = point
            self._add_data_point(point)
            added.append(point)

        if self.reached_ground:
            self._handle_landing()
        return added

    def _add_data_point(self, point: DataPoint):
        self.data_points.append(point)
        self.max_height = max(point.position[1], self.max_height)
        self.horizontal_displacement = float(point.position[0])
        self.flight_time = point.time
        if point.reached_ground:
            self.reached_ground = True
        self.data_point_added.emit(point)

    def _handle_landing(self):
        self.environment.decrement_moving()
        landing_x = self.data_points[-1].x
        if self._check_if_hit_target is not None:
            self.has_hit_target = bool(self._check_if_hit_target(landing_x))
        logger.debug("trajectory landed at x=%.3f m after %.3f s (hit=%s)",
                     landing_x, self.flight_time, self.has_hit_target)
        self.landed.emit(self)

    def get_nearest_point(self, x: float, y: float) -> Optional[DataPoint]:
        """
        The recorded sample closest to (x, y), or None if nothing is recorded.

        Equal distances resolve to the later sample.
        """
        if not self.data_points:
            return None

        nearest = self.data_points[0]
        min_distance = nearest.distance_to(x, y)
        for point in self.data_points:
            distance = point.distance_to(x, y)
            if distance <= min_distance:
                nearest = point
                min_distance = distance
        return nearest

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Recorded samples as column arrays, keyed by quantity."""
        points = self.data_points
        positions = np.array([p.position for p in points]).reshape(-1, 2)
        velocities = np.array([p.velocity for p in points]).reshape(-1, 2)
        accelerations = np.array([p.acceleration for p in points]).reshape(-1, 2)
        return {
            'time': np.array([p.time for p in points]),
            'x': positions[:, 0],
            'y': positions[:, 1],
            'vx': velocities[:, 0],
            'vy': velocities[:, 1],
            'ax': accelerations[:, 0],
            'ay': accelerations[:, 1],
            'air_density': np.array([p.air_density for p in points]),
        }

    def dispose(self):
        self.apex_point = None
        self.data_points = []
        self.data_point_added.dispose()
        self.landed.dispose()

    def __repr__(self):
        return (f"Trajectory(speed={self.initial_speed:.2f}, angle={self.initial_angle:.2f}, "
                f"points={len(self.data_points)}, rank={self.rank}, "
                f"reached_ground={self.reached_ground})")
