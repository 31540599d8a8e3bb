"""
Projectile Motion Core
======================
Fixed-tick simulation of projectiles fired from a cannon under gravity and
optional quadratic air drag:
  - Exact apex and ground-impact detection within a tick
  - Bounded collection of trajectories with age rank and eviction
  - Box–Muller sampling of launch speed / angle for group statistics
  - Rapid-fire scheduling at a fixed cadence
  - Target scoring and a nearest-sample data probe

Units are meters, kilograms and seconds throughout.
"""

from .atmosphere import air_density, density_profile
from .data_point import DataPoint
from .environment import Environment
from .integrator import StepParameters, step_data_point, drag_force_for_velocity
from .object_types import ObjectType, ALL_OBJECT_TYPES, get_object_type
from .projectile import Projectile, LaunchConditions
from .trajectory import Trajectory
from .collection import TrajectoryCollection, LandingStatistics
from .sampler import NormalSampler
from .scheduler import RapidFireScheduler, SchedulerState
from .target import Target, score
from .probe import DataProbe, query
from .clock import EventTimer
from .model import ModelConfig, ProjectileMotionModel, StatsModel, TimeSpeed
from .validation import closed_form_reference, simulate_shot, validate_against_closed_form

__version__ = "1.0.0"
__all__ = [
    'DataPoint', 'Environment', 'StepParameters', 'step_data_point',
    'drag_force_for_velocity',
    'ObjectType', 'ALL_OBJECT_TYPES', 'get_object_type',
    'Projectile', 'LaunchConditions', 'Trajectory',
    'TrajectoryCollection', 'LandingStatistics',
    'NormalSampler', 'RapidFireScheduler', 'SchedulerState',
    'Target', 'score', 'DataProbe', 'query', 'EventTimer',
    'ModelConfig', 'ProjectileMotionModel', 'StatsModel', 'TimeSpeed',
    'air_density', 'density_profile',
    'closed_form_reference', 'simulate_shot', 'validate_against_closed_form',
]
