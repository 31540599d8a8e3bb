"""
Simulation Model
================
Wires the core together for one screen session:

    EventTimer ─► TrajectoryCollection.step ─► Trajectory.step ─► integrator
                        │                           │
                        └── capacity / rank         └── Target, DataProbe

``ProjectileMotionModel`` is the general screen. ``StatsModel`` adds group
firing and the rapid-fire scheduler used for statistical exploration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .clock import EventTimer
from .collection import TrajectoryCollection
from .constants import (
    DEFAULT_ZOOM, GRAVITY_ON_EARTH, GROUP_SIZE_DEFAULT, GROUP_SIZE_INCREMENT,
    GROUP_SIZE_MAX, MAX_NUMBER_OF_TRAJECTORIES, MAX_NUMBER_OF_TRAJECTORIES_STATS,
    MAX_ZOOM, MIN_ZOOM, NORMAL_MOTION_FACTOR, SLOW_MOTION_FACTOR, TARGET_X_DEFAULT,
    TARGET_X_STATS, TIME_PER_DATA_POINT,
)
from .environment import Environment
from .logger import logger
from .object_types import CANNONBALL, ObjectType, STATS_OBJECT_TYPES
from .probe import DataProbe
from .projectile import LaunchConditions, Projectile
from .sampler import NormalSampler
from .scheduler import RapidFireScheduler
from .target import Target
from .trajectory import Trajectory


class TimeSpeed(Enum):
    NORMAL = NORMAL_MOTION_FACTOR
    SLOW = SLOW_MOTION_FACTOR


@dataclass
class ModelConfig:
    """Defaults for a screen."""
    max_projectiles: int = MAX_NUMBER_OF_TRAJECTORIES
    cannon_height: float = 0.0          # m
    cannon_angle: float = 80.0          # degrees
    initial_speed: float = 18.0         # m/s
    speed_std_dev: float = 0.0          # m/s
    angle_std_dev: float = 0.0          # degrees
    target_x: float = TARGET_X_DEFAULT  # m
    air_resistance_on: bool = False
    object_type: ObjectType = CANNONBALL
    seed: Optional[int] = None          # sampler seed

    @classmethod
    def stats(cls, **overrides) -> 'ModelConfig':
        """Group-statistics screen defaults."""
        values = dict(
            max_projectiles=MAX_NUMBER_OF_TRAJECTORIES_STATS,
            cannon_height=2.0,
            cannon_angle=60.0,
            initial_speed=15.0,
            speed_std_dev=1.0,
            angle_std_dev=2.0,
            target_x=TARGET_X_STATS,
        )
        values.update(overrides)
        return cls(**values)


class ProjectileMotionModel:

    def __init__(self, config: Optional[ModelConfig] = None,
                 object_types: Sequence[ObjectType] = (CANNONBALL,)):
        self.config = config if config is not None else ModelConfig()
        cfg = self.config
        if cfg.object_type not in object_types:
            object_types = (cfg.object_type,) + tuple(object_types)
        self.object_types = tuple(object_types)

        self.max_projectiles = cfg.max_projectiles
        self.environment = Environment(GRAVITY_ON_EARTH, 0.0, cfg.air_resistance_on)
        self.target = Target(cfg.target_x)
        self.sampler = NormalSampler(cfg.seed)
        self.collection = TrajectoryCollection(
            self.environment, cfg.max_projectiles, self.sampler, self.target.check_if_hit_target)
        self.probe = DataProbe(self.collection, zoom=DEFAULT_ZOOM)

        self.launch = LaunchConditions(cfg.initial_speed, cfg.cannon_angle, cfg.cannon_height,
                                       cfg.speed_std_dev, cfg.angle_std_dev)
        self._selected_object_type = cfg.object_type
        self.projectile = Projectile.from_object_type(cfg.object_type)

        self.time_speed = TimeSpeed.NORMAL
        self.is_playing = True
        self.rapid_fire_mode = False
        self.event_timer = EventTimer(self.step_model_elements, TIME_PER_DATA_POINT)

    # ── Object type / zoom ────────────────────────────────────────────────
    @property
    def selected_object_type(self) -> ObjectType:
        return self._selected_object_type

    @selected_object_type.setter
    def selected_object_type(self, object_type: ObjectType):
        if object_type not in self.object_types:
            raise ValueError(f"{object_type.name!r} is not offered on this screen")
        self._selected_object_type = object_type
        self.projectile = Projectile.from_object_type(object_type)

    @property
    def zoom(self) -> float:
        return self.probe.zoom

    @zoom.setter
    def zoom(self, value: float):
        if not MIN_ZOOM <= value <= MAX_ZOOM:
            raise ValueError(f"Zoom must be within [{MIN_ZOOM}, {MAX_ZOOM}], got {value}")
        self.probe.zoom = value

    # ── Firing ────────────────────────────────────────────────────────────
    @property
    def trajectories(self) -> List[Trajectory]:
        return self.collection.trajectories

    @property
    def moving_count(self) -> int:
        return self.environment.moving_count

    @property
    def fire_enabled(self) -> bool:
        return not self.rapid_fire_mode and self.moving_count < self.max_projectiles

    def fire_num_projectiles(self, n: int) -> List[Trajectory]:
        return self.collection.fire(n, self.projectile, self.launch)

    def fire(self) -> List[Trajectory]:
        """Fire button: one shot, ignored when the moving cap is reached."""
        if not self.fire_enabled:
            logger.debug("fire ignored: %d projectiles in flight", self.moving_count)
            return []
        return self.fire_num_projectiles(1)

    def erase_trajectories(self):
        self.collection.erase_all()

    # ── Time ──────────────────────────────────────────────────────────────
    @property
    def speed_scale(self) -> float:
        return self.time_speed.value

    def step(self, dt: float):
        """Advance by wall-clock ``dt`` seconds."""
        if self.is_playing:
            self.event_timer.step(self.speed_scale * dt)

    def step_model_elements(self, dt: float):
        """One fixed tick; also used by the single-step button."""
        self.collection.step(dt)

    def reset(self):
        self.erase_trajectories()
        cfg = self.config
        self.target.reset()
        self.probe.reset()
        self.probe.zoom = DEFAULT_ZOOM
        self.launch = LaunchConditions(cfg.initial_speed, cfg.cannon_angle, cfg.cannon_height,
                                       cfg.speed_std_dev, cfg.angle_std_dev)
        self.selected_object_type = cfg.object_type
        self.environment.reset()
        self.time_speed = TimeSpeed.NORMAL
        self.is_playing = True
        self.rapid_fire_mode = False
        self.event_timer.reset()


class StatsModel(ProjectileMotionModel):
    """Group-statistics screen: fires groups or a rapid-fire stream of shots."""

    def __init__(self, config: Optional[ModelConfig] = None):
        super().__init__(config if config is not None else ModelConfig.stats(),
                         STATS_OBJECT_TYPES)
        self._group_size = GROUP_SIZE_DEFAULT
        self.scheduler = RapidFireScheduler(
            fire=lambda: self.fire_num_projectiles(1),
            can_fire=lambda: self.moving_count < self.max_projectiles,
        )

    @property
    def group_size(self) -> int:
        return self._group_size

    @group_size.setter
    def group_size(self, value: int):
        if not GROUP_SIZE_INCREMENT <= value <= GROUP_SIZE_MAX:
            raise ValueError(f"Group size must be within [{GROUP_SIZE_INCREMENT}, {GROUP_SIZE_MAX}]")
        self._group_size = int(value)

    @property
    def fire_multiple_enabled(self) -> bool:
        return (not self.rapid_fire_mode
                and self.moving_count + self._group_size <= MAX_NUMBER_OF_TRAJECTORIES_STATS)

    def fire_multiple(self) -> List[Trajectory]:
        if not self.fire_multiple_enabled:
            return []
        return self.fire_num_projectiles(self._group_size)

    def set_rapid_fire_mode(self, on: bool):
        self.rapid_fire_mode = on
        if on:
            self.scheduler.arm()
        else:
            self.scheduler.disarm()

    def step(self, dt: float):
        super().step(dt)
        self.scheduler.step(dt, self.speed_scale, self.is_playing)

    def reset(self):
        self.scheduler.reset()
        self._group_size = GROUP_SIZE_DEFAULT
        super().reset()
