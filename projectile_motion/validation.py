"""
Validation Against Closed-Form Motion
=====================================
With air resistance off the integrator must reproduce ideal projectile
motion exactly, because every tick uses the exact constant-acceleration
update and the apex / ground instants are solved analytically.

For launch speed v0, angle θ, height h and gravity g:

    apex height  = h + (v0·sinθ)² / (2g)
    flight time  = (v0·sinθ + sqrt((v0·sinθ)² + 2gh)) / g
    range        = v0·cosθ · flight time

This module compares simulated shots against those values.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .constants import GRAVITY_ON_EARTH, TIME_PER_DATA_POINT
from .environment import Environment
from .object_types import CANNONBALL
from .projectile import LaunchConditions, Projectile
from .trajectory import Trajectory


# (speed m/s, angle°, height m) launches checked by validate_against_closed_form
REFERENCE_CASES: List[Tuple[float, float, float]] = [
    (20.0, 45.0, 0.0),
    (18.0, 80.0, 0.0),
    (15.0, 60.0, 2.0),
    (25.0, 30.0, 10.0),
    (10.0, 0.0, 15.0),
]


@dataclass
class ClosedFormReference:
    apex_height: float      # m
    flight_time: float      # s
    range: float            # m


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    conditions: LaunchConditions
    reference: ClosedFormReference
    sim_apex_height: float
    sim_flight_time: float
    sim_range: float

    @property
    def apex_error_pct(self) -> float:
        return _error_pct(self.sim_apex_height, self.reference.apex_height)

    @property
    def flight_time_error_pct(self) -> float:
        return _error_pct(self.sim_flight_time, self.reference.flight_time)

    @property
    def range_error_pct(self) -> float:
        return _error_pct(self.sim_range, self.reference.range)


def _error_pct(simulated: float, reference: float) -> float:
    if reference == 0:
        return 0.0 if simulated == 0 else math.inf
    return 100.0 * (simulated - reference) / reference


def closed_form_reference(speed: float, angle_deg: float, height: float = 0.0,
                          gravity: float = GRAVITY_ON_EARTH) -> ClosedFormReference:
    """Ideal (drag-free) apex height, flight time and range."""
    angle = math.radians(angle_deg)
    vx = speed * math.cos(angle)
    vy = speed * math.sin(angle)
    apex = height + max(vy, 0.0) ** 2 / (2 * gravity)
    flight_time = (vy + math.sqrt(vy * vy + 2 * gravity * height)) / gravity
    return ClosedFormReference(apex_height=apex, flight_time=flight_time, range=vx * flight_time)


def simulate_shot(projectile: Projectile, conditions: LaunchConditions,
                  environment: Environment, dt: float = TIME_PER_DATA_POINT,
                  max_time: float = 300.0) -> Trajectory:
    """
    Fly one shot at the mean speed / angle until it lands or ``max_time``
    of simulated time has passed.
    """
    trajectory = Trajectory(
        projectile.object_type, projectile.mass, projectile.diameter,
        projectile.drag_coefficient, conditions.speed, conditions.height,
        conditions.angle_deg, environment,
    )
    environment.increment_moving()
    while not trajectory.reached_ground and trajectory.flight_time < max_time:
        trajectory.step(dt)
    return trajectory


def validate_against_closed_form(cases=None, gravity: float = GRAVITY_ON_EARTH,
                                 dt: float = TIME_PER_DATA_POINT,
                                 verbose: bool = True) -> List[ValidationResult]:
    """
    Simulate each (speed, angle, height) case with air resistance off and
    compare against the closed-form values.
    """
    cases = REFERENCE_CASES if cases is None else cases
    projectile = Projectile.from_object_type(CANNONBALL)
    results = []

    if verbose:
        print(f"\n{'='*75}")
        print(f"  VALIDATION: drag-free motion, g = {gravity} m/s², dt = {dt*1000:.0f} ms")
        print(f"{'='*75}")
        print(f"{'v0':>5} {'θ°':>5} {'h':>5} {'Ref apex':>9} {'Sim apex':>9} "
              f"{'Ref T':>7} {'Sim T':>7} {'Ref R':>8} {'Sim R':>8} {'Err %':>9}")
        print("-" * 75)

    for speed, angle, height in cases:
        environment = Environment(gravity=gravity, air_resistance_on=False)
        conditions = LaunchConditions(speed=speed, angle_deg=angle, height=height)
        trajectory = simulate_shot(projectile, conditions, environment, dt=dt)
        ref = closed_form_reference(speed, angle, height, gravity)

        vr = ValidationResult(
            conditions=conditions,
            reference=ref,
            sim_apex_height=trajectory.max_height,
            sim_flight_time=trajectory.flight_time,
            sim_range=trajectory.horizontal_displacement,
        )
        results.append(vr)

        if verbose:
            print(f"{speed:>5.1f} {angle:>5.1f} {height:>5.1f} "
                  f"{ref.apex_height:>9.3f} {vr.sim_apex_height:>9.3f} "
                  f"{ref.flight_time:>7.3f} {vr.sim_flight_time:>7.3f} "
                  f"{ref.range:>8.3f} {vr.sim_range:>8.3f} {vr.range_error_pct:>+9.2e}")

    if verbose:
        worst = np.max([abs(r.range_error_pct) for r in results])
        print("-" * 75)
        print(f"  Worst range error: {worst:.2e}%")
        status = "✓ PASS" if worst < 1e-6 else "✗ CHECK INTEGRATOR"
        print(f"  Status: {status}")
        print(f"{'='*75}\n")

    return results


if __name__ == "__main__":
    validate_against_closed_form(verbose=True)
