"""
Projectile & Launch Definition
==============================
What is fired (object type plus its current mass, diameter and drag
coefficient) and how it is fired (speed, angle, cannon height and the
standard deviations used for group-statistics shots).

Coordinate system:
  x = horizontal distance from the cannon (m)
  y = height above the ground (m, up positive)
"""

from dataclasses import dataclass
from typing import Optional

from .object_types import CANNONBALL, ObjectType


@dataclass
class Projectile:
    """
    A projectile as configured at the cannon. Values start from the object
    type and may then be edited independently.
    """
    object_type: ObjectType = CANNONBALL
    mass: Optional[float] = None        # kg
    diameter: Optional[float] = None    # m
    drag_coefficient: Optional[float] = None

    def __post_init__(self):
        if self.mass is None:
            self.mass = self.object_type.mass
        if self.diameter is None:
            self.diameter = self.object_type.diameter
        if self.drag_coefficient is None:
            self.drag_coefficient = self.object_type.drag_coefficient
        if self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.diameter <= 0:
            raise ValueError(f"Diameter must be positive, got {self.diameter}")
        if self.drag_coefficient < 0:
            raise ValueError(f"Drag coefficient must be non-negative, got {self.drag_coefficient}")

    @classmethod
    def from_object_type(cls, object_type: ObjectType) -> 'Projectile':
        return cls(object_type=object_type)


@dataclass
class LaunchConditions:
    """
    Cannon settings. Each shot draws its speed and angle from normal
    distributions centered on ``speed`` / ``angle_deg``.
    """
    speed: float = 18.0                 # m/s  mean launch speed
    angle_deg: float = 80.0             # degrees above horizontal
    height: float = 0.0                 # m    cannon height
    speed_std_dev: float = 0.0          # m/s
    angle_std_dev: float = 0.0          # degrees

    def __post_init__(self):
        if self.speed_std_dev < 0 or self.angle_std_dev < 0:
            raise ValueError("Standard deviations must be non-negative")
