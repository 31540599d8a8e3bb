"""
Trajectory Collection
=====================
Owns every live trajectory. Responsibilities:

  - Firing: sample launch speed / angle per shot, create the trajectory,
    bump the rank of older shots and the moving-projectile count.
  - Capacity: keep at most ``max_trajectories`` by evicting the oldest
    trajectories that have already landed. Projectiles still in the air
    are never evicted, so the cap may be exceeded until they land.
  - Mid-air changes: when gravity or air density changes, every
    trajectory still in flight is flagged ``changed_in_mid_air``.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

import numpy as np

from .constants import MAX_NUMBER_OF_TRAJECTORIES
from .environment import Environment
from .events import Emitter
from .logger import logger
from .projectile import LaunchConditions, Projectile
from .sampler import NormalSampler
from .trajectory import Trajectory


@dataclass
class LandingStatistics:
    """Distribution of landing distances over landed trajectories."""
    count: int
    hits: int
    mean: float
    std: float
    min: float
    max: float

    @property
    def hit_fraction(self) -> float:
        return self.hits / self.count if self.count else 0.0


class TrajectoryCollection:
    """
    Ordered, capacity-bounded set of trajectories (oldest first).

    Parameters
    ----------
    environment : Environment
        Shared environment handed to every trajectory.
    max_trajectories : int
        Soft cap on live trajectories.
    sampler : NormalSampler, optional
        Source of randomized launch speed / angle.
    check_if_hit_target : callable, optional
        Scoring callback handed to every trajectory.
    """

    def __init__(self, environment: Environment,
                 max_trajectories: int = MAX_NUMBER_OF_TRAJECTORIES,
                 sampler: Optional[NormalSampler] = None,
                 check_if_hit_target: Optional[Callable[[float], bool]] = None):
        if max_trajectories < 1:
            raise ValueError(f"max_trajectories must be at least 1, got {max_trajectories}")
        self.environment = environment
        self.max_trajectories = max_trajectories
        self.sampler = sampler if sampler is not None else NormalSampler()
        self.check_if_hit_target = check_if_hit_target
        self.trajectories: List[Trajectory] = []

        self.trajectory_added = Emitter()       # (trajectory)
        self.trajectory_disposed = Emitter()    # (trajectory)
        self.data_point_added = Emitter()       # (trajectory, data_point)
        self.trajectory_landed = Emitter()      # (trajectory)
        self.rank_updated = Emitter()           # ()

        environment.changed.add_listener(self._on_environment_changed)

    def __len__(self) -> int:
        return len(self.trajectories)

    def __iter__(self) -> Iterator[Trajectory]:
        return iter(self.trajectories)

    def __getitem__(self, index: int) -> Trajectory:
        return self.trajectories[index]

    @property
    def moving(self) -> List[Trajectory]:
        return [t for t in self.trajectories if not t.reached_ground]

    @property
    def landed(self) -> List[Trajectory]:
        return [t for t in self.trajectories if t.reached_ground]

    # ── Firing ────────────────────────────────────────────────────────────
    def fire(self, n: int, projectile: Projectile, conditions: LaunchConditions) -> List[Trajectory]:
        """Fire ``n`` shots, each with its own sampled speed and angle."""
        fired = []
        for _ in range(n):
            speed = self.sampler.sample(conditions.speed, conditions.speed_std_dev)
            angle = self.sampler.sample(conditions.angle_deg, conditions.angle_std_dev)

            # rank counts shots fired after a trajectory, so age the old ones first
            for trajectory in self.trajectories:
                trajectory.increment_rank()
            self.rank_updated.emit()

            trajectory = Trajectory(
                projectile.object_type, projectile.mass, projectile.diameter,
                projectile.drag_coefficient, speed, conditions.height, angle,
                self.environment, self.check_if_hit_target,
            )
            self._attach(trajectory)
            self.environment.increment_moving()
            fired.append(trajectory)
            logger.debug("fired shot: speed=%.3f m/s angle=%.3f°", speed, angle)

        self.limit_trajectories()
        return fired

    def _attach(self, trajectory: Trajectory):
        self.trajectories.append(trajectory)
        trajectory.data_point_added.add_listener(
            lambda point: self.data_point_added.emit(trajectory, point))
        trajectory.landed.add_listener(self.trajectory_landed.emit)
        self.trajectory_added.emit(trajectory)
        # the muzzle sample was recorded before the relay was wired
        for point in list(trajectory.data_points):
            self.data_point_added.emit(trajectory, point)

    # ── Capacity ──────────────────────────────────────────────────────────
    def limit_trajectories(self) -> List[Trajectory]:
        """Evict the oldest landed trajectories while over the cap."""
        excess = len(self.trajectories) - self.max_trajectories
        if excess <= 0:
            return []

        # collect first so the list is not mutated while scanning it
        to_dispose = []
        for trajectory in self.trajectories:
            if trajectory.reached_ground:
                to_dispose.append(trajectory)
                if len(to_dispose) >= excess:
                    break

        for trajectory in to_dispose:
            self._dispose(trajectory)
        if len(to_dispose) < excess:
            logger.debug("%d trajectories over the cap are still in flight",
                         excess - len(to_dispose))
        return to_dispose

    def _dispose(self, trajectory: Trajectory):
        self.trajectories.remove(trajectory)
        logger.debug("evicted %r", trajectory)
        self.trajectory_disposed.emit(trajectory)
        trajectory.dispose()

    def erase_all(self):
        """Remove every trajectory and reset the moving count."""
        for trajectory in list(self.trajectories):
            self._dispose(trajectory)
        self.environment.reset_moving()

    # ── Stepping ──────────────────────────────────────────────────────────
    def step(self, dt: float):
        """Advance every trajectory still in flight by one tick, oldest first."""
        for trajectory in list(self.trajectories):
            if not trajectory.reached_ground:
                trajectory.step(dt)

    def _on_environment_changed(self, environment: Environment):
        for trajectory in self.trajectories:
            if not trajectory.reached_ground and not trajectory.changed_in_mid_air:
                trajectory.changed_in_mid_air = True

    # ── Statistics ────────────────────────────────────────────────────────
    def landing_statistics(self) -> Optional[LandingStatistics]:
        """Summary of landing x over landed trajectories, None if none landed."""
        landed = self.landed
        if not landed:
            return None
        xs = np.array([t.landing_x for t in landed])
        return LandingStatistics(
            count=len(landed),
            hits=sum(1 for t in landed if t.has_hit_target),
            mean=float(np.mean(xs)),
            std=float(np.std(xs)),
            min=float(np.min(xs)),
            max=float(np.max(xs)),
        )
