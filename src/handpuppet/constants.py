"""Shared constants for the hand puppet."""

# Hand topology (21 landmarks, 4 per finger after the wrist)
LANDMARK_COUNT = 21
FINGER_COUNT = 5
WRIST = 0
INDEX_MCP = 5
PINKY_MCP = 17


def finger_start_index(n: int) -> int:
    """Landmark index of the base joint read for finger n."""
    return 4 * n + 1


def finger_end_index(n: int) -> int:
    """Landmark index of the tip read for finger n."""
    return 4 * n + 4


# Chain geometry defaults
CHAIN_R = 150.0         # length of one "<" (two segments of r/2)
CHAIN_OFFSET = 60.0     # lateral gap between the left and right chevrons
CHAIN_SCALE = 1.0       # input flex distance -> drawn distance

SIDES = ("left", "right")
POINTS_PER_SIDE = 3
POINTS_PER_FINGER = POINTS_PER_SIDE * len(SIDES)
CHAIN_POINT_COUNT = POINTS_PER_FINGER * FINGER_COUNT  # 30
EDGES_PER_SIDE = 2
EDGE_COUNT = EDGES_PER_SIDE * len(SIDES) * FINGER_COUNT  # 20

# Physics
FIXED_TIMESTEP = 1.0 / 60.0
GRAVITY_SCALE = 1000.0  # engine gravity unit -> px/s^2
DEFAULT_ENGINE_GRAVITY = 1.0
EDGE_THICKNESS = 1.0
FLOOR_THICKNESS = 10.0
CIRCLE_MASS = 1.0
CIRCLE_FRICTION = 0.1
CIRCLE_ELASTICITY = 0.5

# Animation
FRAME_INTERVAL_MS = 16
MAX_DELTA_TIME = 0.1  # Clamp dt to avoid large jumps

# Landmark smoothing
SMOOTHING_WINDOW = 5
