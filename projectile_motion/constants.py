"""
Simulation Constants
====================
Global constants shared by the model: physics tick size, data-point dot
intervals, trajectory caps, rapid-fire cadence, target geometry and the
parameter ranges exposed to the controls.

Times are in seconds unless the name says otherwise.
"""


# ── Physics clock ─────────────────────────────────────────────────────────
# Lower values give smoother slow motion but record more data points.
TIME_PER_DATA_POINT_MS = 12          # ms per physics tick
TIME_PER_DATA_POINT = TIME_PER_DATA_POINT_MS / 1000.0
TIME_PER_MINOR_DOT_MS = 100          # ms between small trajectory dots
TIME_PER_MAJOR_DOT_MS = 1000         # ms between large trajectory dots
SLOW_MOTION_FACTOR = 0.33            # time slowdown factor
NORMAL_MOTION_FACTOR = 1.0

GRAVITY_ON_EARTH = 9.8               # m/s²

# ── Trajectory caps ───────────────────────────────────────────────────────
MAX_NUMBER_OF_TRAJECTORIES = 10
MAX_NUMBER_OF_TRAJECTORIES_STATS = 20
RAPID_FIRE_DELTA_TIME = 0.2          # s between rapid-fire shots

# ── Group firing (stats mode) ─────────────────────────────────────────────
GROUP_SIZE_DEFAULT = 10
GROUP_SIZE_INCREMENT = 1
GROUP_SIZE_MAX = 20

# ── Parameter ranges (min, max) ───────────────────────────────────────────
CANNON_HEIGHT_RANGE = (0.0, 15.0)                    # m
CANNON_ANGLE_RANGE = (-90.0, 90.0)                   # degrees
LAUNCH_VELOCITY_RANGE = (0.0, 30.0)                  # m/s
SPEED_STANDARD_DEVIATION_RANGE = (0.0, 10.0)         # m/s
ANGLE_STANDARD_DEVIATION_RANGE = (0.0, 30.0)         # degrees
PROJECTILE_MASS_RANGE = (0.01, 5000.0)               # kg
PROJECTILE_DIAMETER_RANGE = (0.01, 3.0)              # m
PROJECTILE_DRAG_COEFFICIENT_RANGE = (0.04, 1.2)      # teardrop .. hemisphere
ALTITUDE_RANGE = (0.0, 5000.0)                       # m
GRAVITY_RANGE = (1.0, 20.0)                          # m/s²

# ── Target ────────────────────────────────────────────────────────────────
TARGET_X_DEFAULT = 15.0              # m
TARGET_X_STATS = 20.0                # m
TARGET_WIDTH = 3.0                   # m
TARGET_HEIGHT = 0.6                  # m

# ── Probe and zoom ────────────────────────────────────────────────────────
SENSING_RADIUS = 0.2                 # m at zoom 1
MIN_ZOOM = 0.25
MAX_ZOOM = 2.0
DEFAULT_ZOOM = 1.0
