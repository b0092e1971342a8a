"""Chevron chain geometry: hand landmarks -> ordered chain points.

The chain is drawn bottom-up, one finger per row::

    <> pinky
    <> ring
    <> middle
    <> index
    <> thumb

Each row holds a left and a right chevron whose opening follows how far
the corresponding finger has closed.  Rows are stacked in a running chain
frame: after each finger the frame moves up by the mean closure of both
sides and tilts toward the more closed side, so the rows above lean and
dip with the fingers below them.

Points are emitted in canvas coordinates, three per side per finger
(start joint, apex, end joint), left side first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from handpuppet.constants import (
    CHAIN_POINT_COUNT,
    FINGER_COUNT,
    finger_end_index,
    finger_start_index,
)
from handpuppet.core.config import ChainConfig
from handpuppet.core.hands import HandsFrame, LandmarkSet
from handpuppet.core.math_utils import (
    Mat3,
    Vec2,
    clamp,
    mat3_rotation,
    mat3_translation,
    origin_of,
)

# Lateral sign per side; left chevrons open toward -x.
SIDE_SIGNS = (("left", -1.0), ("right", 1.0))


@dataclass
class FlexPair:
    """Clamped flex distances of one finger, one value per side."""
    left: float = 0.0
    right: float = 0.0


@dataclass
class ChainResult:
    """Output of one geometry pass."""
    points: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros((0, 2), dtype=np.float64)
    )
    flex: list[FlexPair] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return len(self.points) == CHAIN_POINT_COUNT


def new_flex_pairs(count: int = FINGER_COUNT) -> list[FlexPair]:
    """One fresh FlexPair per finger (never a shared instance)."""
    return [FlexPair() for _ in range(count)]


def raw_flex_distance(landmarks: LandmarkSet, finger: int, scale: float) -> float:
    """Scaled vertical delta from the finger's base joint to its tip.

    Negative when the tip sits above the base (finger closing upward in
    canvas coordinates).
    """
    start = landmarks[finger_start_index(finger)]
    end = landmarks[finger_end_index(finger)]
    return float((end[1] - start[1]) * scale)


def clamp_flex(d: float, r: float) -> float:
    """Clamp a flex distance into [-r, 0]; opening motion is ignored."""
    return clamp(d, -r, 0.0)


def frame_flex(d: float, r: float) -> float:
    """Flex value used to advance the chain frame.

    Any magnitude beyond ``r`` counts as fully closed, whatever its sign.
    """
    if abs(d) > r:
        return -r
    if d > 0:
        return 0.0
    return d


def apex_half_span(d: float, r: float) -> float:
    """Lateral extent of a chevron whose two arms are r/2 each.

    ``d`` must already be clamped into [-r, 0].
    """
    return math.sqrt(r * r - d * d)


def chevron_points(frame: Mat3, sign: float, d: float, cfg: ChainConfig) -> list[Vec2]:
    """Start joint, apex and end joint of one chevron drawn in ``frame``."""
    span = sign * apex_half_span(d, cfg.r) / 2.0
    local = frame @ mat3_translation(sign * cfg.offset, 0.0)
    apex = local @ mat3_translation(span, d / 2.0)
    end = apex @ mat3_translation(-span, d / 2.0)
    return [origin_of(local), origin_of(apex), origin_of(end)]


def advance_frame(frame: Mat3, left_d: float, right_d: float, cfg: ChainConfig) -> Mat3:
    """Chain frame for the next finger, given this finger's raw distances."""
    tmp_l = frame_flex(left_d, cfg.r)
    tmp_r = frame_flex(right_d, cfg.r)
    frame = frame @ mat3_translation(0.0, (tmp_l + tmp_r) / 2.0)
    return frame @ mat3_rotation(-math.atan2(tmp_l - tmp_r, 2.0 * cfg.offset))


def build_chain(frame: HandsFrame, cfg: ChainConfig, origin: Mat3) -> ChainResult:
    """Build the full chain for a frame that has both sides populated.

    ``origin`` is the chain frame at the thumb row, typically a translation
    to the canvas anchor.  A frame with an empty side produces an empty
    result instead of a partial chain.
    """
    result = ChainResult()
    if not (frame.has_left and frame.has_right):
        return result

    result.flex = new_flex_pairs()
    points: list[Vec2] = []
    chain_frame = origin
    for n in range(FINGER_COUNT):
        raw = {
            "left": raw_flex_distance(frame.left, n, cfg.scale),
            "right": raw_flex_distance(frame.right, n, cfg.scale),
        }
        pair = result.flex[n]
        for side, sign in SIDE_SIGNS:
            d = clamp_flex(raw[side], cfg.r)
            setattr(pair, side, d)
            points.extend(chevron_points(chain_frame, sign, d, cfg))

        chain_frame = advance_frame(chain_frame, raw["left"], raw["right"], cfg)

    result.points = np.array(points, dtype=np.float64)
    return result
