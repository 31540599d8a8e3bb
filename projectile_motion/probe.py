"""
Data Probe
==========
Reads back recorded samples near a point in the play area.

A sample is *readable* if it is the apex, lies on the ground, or was
recorded on a minor-dot time step (a whole multiple of 100 ms). The search
runs over trajectories from the newest to the oldest; within a trajectory
its apex wins if it is in range, otherwise the nearest readable sample is
taken. The first trajectory that yields a match decides the result.

The sensing radius is fixed in view space, so in model space it shrinks
as the zoom factor grows.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from .collection import TrajectoryCollection
from .constants import DEFAULT_ZOOM, SENSING_RADIUS, TIME_PER_MINOR_DOT_MS
from .data_point import DataPoint
from .trajectory import Trajectory


def is_readable(point: Optional[DataPoint]) -> bool:
    """True for apex, ground and minor-dot samples."""
    return point is not None and (
        point.apex
        or point.position[1] == 0
        or round(point.time * 1000) % TIME_PER_MINOR_DOT_MS == 0
    )


def within_tolerance(position: np.ndarray, point: Tuple[float, float], tolerance: float) -> bool:
    return float(np.hypot(position[0] - point[0], position[1] - point[1])) <= tolerance


def query(trajectories: Sequence[Trajectory], point: Tuple[float, float],
          tolerance: float) -> Optional[DataPoint]:
    """
    The best readable sample within ``tolerance`` of ``point``, or None.

    ``trajectories`` is ordered oldest first, as the collection stores them.
    """
    x, y = point
    for trajectory in reversed(trajectories):
        apex = trajectory.apex_point
        if apex is not None and within_tolerance(apex.position, point, tolerance):
            return apex
        nearest = trajectory.get_nearest_point(x, y)
        if is_readable(nearest) and within_tolerance(nearest.position, point, tolerance):
            return nearest
    return None


class DataProbe:
    """
    Probe tool state: position, whether it is in the play area, and the
    sample currently displayed.
    """

    def __init__(self, collection: TrajectoryCollection, x: float = 10.0, y: float = 10.0,
                 zoom: float = DEFAULT_ZOOM, sensing_radius: float = SENSING_RADIUS):
        self.collection = collection
        self._initial_position = (x, y)
        self.position = (x, y)
        self.sensing_radius = sensing_radius
        self._zoom = DEFAULT_ZOOM
        self.zoom = zoom
        self.is_active = False
        self.data_point: Optional[DataPoint] = None

        collection.trajectory_disposed.add_listener(self._on_trajectory_disposed)
        collection.data_point_added.add_listener(self._on_data_point_added)

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value: float):
        if value <= 0:
            raise ValueError(f"Zoom must be positive, got {value}")
        self._zoom = value

    @property
    def tolerance(self) -> float:
        """Sensing radius in model units at the current zoom."""
        return self.sensing_radius / self._zoom

    def reset(self):
        self.position = self._initial_position
        self.data_point = None
        self.is_active = False

    def move_to(self, x: float, y: float) -> Optional[DataPoint]:
        self.position = (x, y)
        return self.update_data()

    def update_data(self) -> Optional[DataPoint]:
        """Re-run the search at the current position."""
        self.data_point = query(self.collection.trajectories, self.position, self.tolerance)
        return self.data_point

    def update_data_if_within_range(self, point: DataPoint):
        """Show a freshly recorded sample if it is readable and in range."""
        if is_readable(point) and within_tolerance(point.position, self.position, self.tolerance):
            self.data_point = point

    def _on_trajectory_disposed(self, trajectory: Trajectory):
        if self.is_active:
            self.update_data()

    def _on_data_point_added(self, trajectory: Trajectory, point: DataPoint):
        self.update_data_if_within_range(point)
