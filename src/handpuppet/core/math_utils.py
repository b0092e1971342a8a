"""NumPy-backed 2D math utilities.

Points are plain numpy arrays of shape (2,). Transforms are 3x3 homogeneous
matrices acting on column vectors in canvas coordinates (y grows downward),
so composing ``m @ mat3_translation(...)`` moves the local origin the same
way a canvas ``translate`` call does.
"""

import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Vec2 = NDArray[np.float64]
Mat3 = NDArray[np.float64]


def vec2(x: float = 0.0, y: float = 0.0) -> Vec2:
    return np.array([x, y], dtype=np.float64)


def mat3_identity() -> Mat3:
    return np.eye(3, dtype=np.float64)


def mat3_translation(x: float, y: float) -> Mat3:
    m = np.eye(3, dtype=np.float64)
    m[0, 2] = x
    m[1, 2] = y
    return m


def mat3_rotation(angle_rad: float) -> Mat3:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(3, dtype=np.float64)
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def origin_of(m: Mat3) -> Vec2:
    """Position of the local origin of ``m`` in the parent frame."""
    return m[:2, 2].copy()


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def midpoint(a: Vec2, b: Vec2) -> Vec2:
    return vec2((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def segment_angle(a: Vec2, b: Vec2) -> float:
    """Angle of the segment a -> b, measured like ``atan2(dy, dx)``."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def segment_length(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])
