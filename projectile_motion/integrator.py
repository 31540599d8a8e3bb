"""
Fixed-Tick Integration Engine
=============================
Advances a single trajectory by one fixed tick using the
constant-acceleration-per-tick update

    x_{n+1} = x_n + v_n·dt + ½·a_n·dt²
    v_{n+1} = v_n + a_n·dt

with quadratic drag

    F_drag = v · (½ ρ A Cd |v|),   A = π d² / 4
    a      = -F_drag / m + (0, -g)

and resolves the two sub-tick events exactly:

1. **Apex** — v_y crosses from positive to negative. The crossing time is
   found by linear interpolation of v_y across the tick and an extra
   sample flagged ``apex`` is emitted.
2. **Ground** — y reaches 0. The time to ground is solved from the
   quadratic y(t) = 0 and a terminal sample flagged ``reached_ground``
   is emitted, at rest.

Acceleration is treated as constant over the whole tick in both solvers,
even with drag on. Trajectory shapes depend on this approximation.
"""

import math
from dataclasses import dataclass
from typing import List

import numpy as np

from .data_point import DataPoint

ZERO_VECTOR = (0.0, 0.0)


@dataclass(frozen=True)
class StepParameters:
    """Everything one tick needs besides the previous sample."""
    mass: float                 # kg
    diameter: float             # m
    drag_coefficient: float
    gravity: float              # m/s²
    air_density: float          # kg/m³

    @property
    def area(self) -> float:
        return math.pi * self.diameter * self.diameter / 4


def drag_force_for_velocity(velocity: np.ndarray, air_density: float,
                            diameter: float, drag_coefficient: float) -> np.ndarray:
    """
    Drag force vector (N), aligned with the velocity.

    The sign convention matches the acceleration formula above: the force
    is subtracted, so the resulting acceleration opposes the motion.
    """
    velocity = np.asarray(velocity, dtype=float)
    area = math.pi * diameter * diameter / 4
    return velocity * (0.5 * air_density * area * drag_coefficient * np.linalg.norm(velocity))


def acceleration_for_drag(drag_force: np.ndarray, mass: float, gravity: float) -> np.ndarray:
    """Acceleration (m/s²) from drag and gravity."""
    return np.array([-drag_force[0] / mass, -gravity - drag_force[1] / mass])


def next_position(position: float, velocity: float, acceleration: float, time: float) -> float:
    """1-D kinematic position after ``time`` under constant acceleration."""
    return position + velocity * time + 0.5 * acceleration * time * time


def initial_data_point(speed: float, angle_deg: float, height: float,
                       params: StepParameters) -> DataPoint:
    """The t = 0 sample at the cannon muzzle."""
    angle = math.radians(angle_deg)
    velocity = np.array([speed * math.cos(angle), speed * math.sin(angle)])
    drag = drag_force_for_velocity(velocity, params.air_density, params.diameter,
                                   params.drag_coefficient)
    return DataPoint(
        time=0.0,
        position=(0.0, height),
        air_density=params.air_density,
        velocity=velocity,
        acceleration=acceleration_for_drag(drag, params.mass, params.gravity),
        drag_force=drag,
        force_gravity=-params.gravity * params.mass,
    )


def time_to_ground(y: float, vy: float, ay: float) -> float:
    """
    Time (s) for y(t) = y + vy·t + ½·ay·t² to reach zero.

    The negative square root is taken, which selects the first crossing
    forward in time for both falling (ay < 0) and drag-dominated (ay > 0)
    motion.
    """
    if ay == 0:
        if vy == 0:
            # already on the ground; not reached in normal flight
            return 0.0
        return -y / vy
    root = math.sqrt(max(vy * vy - 2.0 * ay * y, 0.0))
    if vy < 0:
        # same root, without cancellation when ay is tiny (near terminal velocity)
        return 2.0 * y / (root - vy)
    return (-root - vy) / ay


def _apex_point(previous: DataPoint, new_position: np.ndarray, new_velocity: np.ndarray,
                new_drag: np.ndarray, dt: float, params: StepParameters) -> DataPoint:
    prev_vy = previous.velocity[1]
    dt_apex = dt * prev_vy / (prev_vy - new_velocity[1])
    fraction = dt_apex / dt

    apex_x = previous.position[0] + (new_position[0] - previous.position[0]) * fraction
    apex_y = next_position(previous.position[1], prev_vy, previous.acceleration[1], dt_apex)
    apex_vx = previous.velocity[0] + (new_velocity[0] - previous.velocity[0]) * fraction
    apex_drag = previous.drag_force + (new_drag - previous.drag_force) * fraction

    return DataPoint(
        time=previous.time + dt_apex,
        position=(apex_x, apex_y),
        air_density=params.air_density,
        velocity=(apex_vx, 0.0),
        acceleration=acceleration_for_drag(apex_drag, params.mass, params.gravity),
        drag_force=apex_drag,
        force_gravity=-params.gravity * params.mass,
        apex=True,
    )


def _ground_point(previous: DataPoint, params: StepParameters) -> DataPoint:
    t = time_to_ground(previous.position[1], previous.velocity[1], previous.acceleration[1])
    x = next_position(previous.position[0], previous.velocity[0], previous.acceleration[0], t)
    return DataPoint(
        time=previous.time + t,
        position=(x, 0.0),
        air_density=params.air_density,
        velocity=ZERO_VECTOR,
        acceleration=ZERO_VECTOR,
        drag_force=ZERO_VECTOR,
        force_gravity=-params.gravity * params.mass,
        reached_ground=True,
    )


def step_data_point(previous: DataPoint, dt: float, params: StepParameters) -> List[DataPoint]:
    """
    Advance one tick from ``previous``.

    Returns the new samples in chronological order: one in-flight sample,
    an apex sample followed by the tick's sample, or a terminal ground
    sample (possibly preceded by an apex sample).
    """
    px, py = previous.position
    vx, vy = previous.velocity
    ax, ay = previous.acceleration

    new_x = next_position(px, vx, ax, dt)
    new_y = next_position(py, vy, ay, dt)
    new_vx = vx + ax * dt
    new_vy = vy + ay * dt

    # Drag must not push the projectile backwards: stop x motion at the
    # instant vx reaches zero instead.
    if np.sign(new_vx) != np.sign(vx) and ax != 0:
        new_vx = 0.0
        new_x = next_position(px, vx, ax, -vx / ax)

    new_position = np.array([new_x, new_y])
    new_velocity = np.array([new_vx, new_vy])
    new_drag = drag_force_for_velocity(new_velocity, params.air_density, params.diameter,
                                       params.drag_coefficient)

    points = []
    if vy > 0 and new_vy < 0:
        points.append(_apex_point(previous, new_position, new_velocity, new_drag, dt, params))

    if new_y > 0:
        points.append(DataPoint(
            time=previous.time + dt,
            position=new_position,
            air_density=params.air_density,
            velocity=new_velocity,
            acceleration=acceleration_for_drag(new_drag, params.mass, params.gravity),
            drag_force=new_drag,
            force_gravity=-params.gravity * params.mass,
        ))
    else:
        points.append(_ground_point(previous, params))
    return points
