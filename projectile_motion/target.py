"""
Target Scoring
==============
Landings are scored by their horizontal distance d from the target center.
Zones are nested and checked tightest first; a landing exactly on a
boundary belongs to the tighter zone.

    d <= w/6  →  3 stars (bullseye)
    d <= w/3  →  2 stars
    d <= w/2  →  1 star  (edge of target)
    otherwise →  0 (miss)
"""

from .constants import TARGET_WIDTH, TARGET_X_DEFAULT
from .events import Emitter
from .logger import logger


def score(landing_x: float, target_center_x: float, target_width: float = TARGET_WIDTH) -> int:
    """Number of stars (0-3) earned by a landing at ``landing_x``."""
    distance = abs(landing_x - target_center_x)
    if distance <= target_width / 6:
        return 3
    elif distance <= target_width / 3:
        return 2
    elif distance <= target_width / 2:
        return 1
    return 0


class Target:
    """Target on the ground; emits ``scored`` with the star count on every hit."""

    def __init__(self, x: float = TARGET_X_DEFAULT, width: float = TARGET_WIDTH):
        if width <= 0:
            raise ValueError(f"Target width must be positive, got {width}")
        self._initial_x = x
        self.x = x
        self.width = width
        self.scored = Emitter()

    def reset(self):
        self.x = self._initial_x

    def check_if_hit_target(self, projectile_x: float) -> bool:
        stars = score(projectile_x, self.x, self.width)
        if stars > 0:
            logger.debug("target hit at x=%.3f m: %d star(s)", projectile_x, stars)
            self.scored.emit(stars)
        return stars > 0
