"""
Projectile Object Types
=======================
Benchmark objects that can be fired from the cannon. Each type carries the
numeric parameters the integrator needs (mass, diameter, drag coefficient)
plus the slider ranges the controls offer for it and a purely visual
``rotates`` flag.

Drag coefficients are for subsonic flow around the object's overall shape:
  - Sphere-like objects (cannonball, pumpkin): ~0.47-0.6
  - Streamlined objects (football, tank shell): ~0.05
  - Bluff bodies (piano): upper end of the range
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .constants import PROJECTILE_DRAG_COEFFICIENT_RANGE


@dataclass(frozen=True)
class ObjectType:
    """
    Parameters of one kind of projectile.
    """
    name: Optional[str]
    mass: float                       # kg
    diameter: float                   # m
    drag_coefficient: float           # dimensionless
    benchmark: Optional[str] = None   # lookup key
    rotates: bool = False             # visual only, never simulated
    mass_range: Tuple[float, float] = (1.0, 10.0)
    diameter_range: Tuple[float, float] = (0.1, 1.0)
    drag_coefficient_range: Tuple[float, float] = field(
        default=(PROJECTILE_DRAG_COEFFICIENT_RANGE[0], 1.0))

    def __post_init__(self):
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.diameter <= 0:
            raise ValueError(f"Diameter must be positive, got {self.diameter}")
        if self.drag_coefficient < 0:
            raise ValueError(f"Drag coefficient must be non-negative, got {self.drag_coefficient}")

    @property
    def area(self) -> float:
        """Cross-sectional area (m²)."""
        return math.pi * self.diameter ** 2 / 4


# ══════════════════════════════════════════════════════════════════════════
#  Benchmarks
# ══════════════════════════════════════════════════════════════════════════

CANNONBALL = ObjectType('Cannonball', 17.6, 0.18, 0.47, 'cannonball', False,
                        mass_range=(1.0, 31.0), diameter_range=(0.1, 1.0))
PUMPKIN = ObjectType('Pumpkin', 5.0, 0.37, 0.6, 'pumpkin', False,
                     mass_range=(1.0, 1000.0), diameter_range=(0.1, 3.0))
BASEBALL = ObjectType('Baseball', 0.15, 0.07, 0.35, 'baseball', False,
                      mass_range=(0.01, 5.0), diameter_range=(0.01, 1.0))
CAR = ObjectType('Car', 2000.0, 2.0, 0.55, 'car', True,
                 mass_range=(100.0, 5000.0), diameter_range=(0.5, 3.0))
FOOTBALL = ObjectType('Football', 0.41, 0.17, 0.05, 'football', True,
                      mass_range=(0.01, 5.0), diameter_range=(0.01, 1.0))
HUMAN = ObjectType('Human', 70.0, 0.5, 0.6, 'human', True,
                   mass_range=(10.0, 200.0), diameter_range=(0.1, 1.5))
PIANO = ObjectType('Piano', 400.0, 2.2, PROJECTILE_DRAG_COEFFICIENT_RANGE[1], 'piano', False,
                   mass_range=(50.0, 1000.0), diameter_range=(0.5, 3.0),
                   drag_coefficient_range=PROJECTILE_DRAG_COEFFICIENT_RANGE)
GOLF_BALL = ObjectType('Golf Ball', 0.05, 0.04, 0.25, 'golfBall', False,
                       mass_range=(0.01, 5.0), diameter_range=(0.01, 1.0))
TANK_SHELL = ObjectType('Tank Shell', 42.0, 0.15, 0.06, 'tankShell', True,
                        mass_range=(5.0, 200.0), diameter_range=(0.1, 1.0))
CUSTOM = ObjectType('Custom', 100.0, 1.0, 0.47, 'custom', True,
                    mass_range=(1.0, 5000.0), diameter_range=(0.01, 3.0),
                    drag_coefficient_range=(0.04, 1.0))

ALL_OBJECT_TYPES: Dict[str, ObjectType] = {
    t.benchmark: t for t in (
        CANNONBALL, PUMPKIN, BASEBALL, CAR, FOOTBALL,
        HUMAN, PIANO, GOLF_BALL, TANK_SHELL, CUSTOM,
    )
}

# Order offered on the group-statistics screen
STATS_OBJECT_TYPES = (
    CANNONBALL, TANK_SHELL, GOLF_BALL, BASEBALL, FOOTBALL,
    PUMPKIN, HUMAN, PIANO, CAR,
)


def get_object_type(benchmark: str) -> ObjectType:
    """Look up a benchmark object type by its key (e.g. ``'tankShell'``)."""
    if benchmark not in ALL_OBJECT_TYPES:
        raise ValueError(
            f"Unknown object type '{benchmark}'. "
            f"Available: {list(ALL_OBJECT_TYPES.keys())}"
        )
    return ALL_OBJECT_TYPES[benchmark]
