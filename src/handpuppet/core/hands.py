"""Hand landmark data model shared by the tracker side and the puppet.

A landmark set is a ``(21, 2)`` float array in canvas pixels, or a
``(0, 2)`` array when the hand was not detected this frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from handpuppet.constants import INDEX_MCP, LANDMARK_COUNT, PINKY_MCP, WRIST

LandmarkSet = NDArray[np.float64]

HANDEDNESS = ("Left", "Right")


def empty_landmarks() -> LandmarkSet:
    return np.zeros((0, 2), dtype=np.float64)


def landmarks_from(points: Any) -> LandmarkSet:
    """Coerce ``points`` into a landmark set.

    Accepts any ``(21, 2+)`` array-like (extra columns such as z are
    dropped) or an empty sequence.
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return empty_landmarks()
    if arr.ndim != 2 or arr.shape[0] != LANDMARK_COUNT or arr.shape[1] < 2:
        raise ValueError(
            f"Expected {LANDMARK_COUNT} landmarks with x, y; got shape {arr.shape}"
        )
    return np.ascontiguousarray(arr[:, :2])


def is_empty(landmarks: LandmarkSet) -> bool:
    return len(landmarks) == 0


@dataclass(frozen=True, eq=False)
class HandsFrame:
    """Left/right landmark sets for one frame; either side may be empty."""
    left: LandmarkSet
    right: LandmarkSet

    @classmethod
    def empty(cls) -> HandsFrame:
        return cls(empty_landmarks(), empty_landmarks())

    @property
    def has_left(self) -> bool:
        return not is_empty(self.left)

    @property
    def has_right(self) -> bool:
        return not is_empty(self.right)

    @property
    def is_empty(self) -> bool:
        return not (self.has_left or self.has_right)


@dataclass(frozen=True, eq=False)
class DetectedHand:
    """One detection as reported by the hand-landmark model."""
    handedness: str
    score: float
    keypoints: LandmarkSet

    def __post_init__(self):
        object.__setattr__(self, "keypoints", landmarks_from(self.keypoints))

    @classmethod
    def from_dict(cls, data: dict) -> DetectedHand:
        handedness = str(data.get("handedness", ""))
        if handedness not in HANDEDNESS:
            raise ValueError(f"handedness must be one of {HANDEDNESS}, got {handedness!r}")
        keypoints = data.get("keypoints", [])
        # detector dumps often store keypoints as {"x": .., "y": ..} objects
        if len(keypoints) and isinstance(keypoints[0], dict):
            keypoints = [(kp["x"], kp["y"]) for kp in keypoints]
        return cls(handedness, float(data.get("score", 0.0)), landmarks_from(keypoints))

    def to_dict(self) -> dict:
        return {
            "handedness": self.handedness,
            "score": self.score,
            "keypoints": self.keypoints.tolist(),
        }


class HandSlot:
    """Single-slot reference holding the latest detections.

    The producer overwrites the slot whenever it has a result; the frame
    loop reads whatever was written last.
    """

    def __init__(self) -> None:
        self._hands: list[DetectedHand] = []

    def write(self, hands: Iterable[DetectedHand]) -> None:
        self._hands = list(hands)

    def read(self) -> list[DetectedHand]:
        return self._hands

    def clear(self) -> None:
        self._hands = []


def mirror_landmarks(landmarks: LandmarkSet, width: float) -> LandmarkSet:
    """Reflect x about the vertical line at ``width / 2``."""
    if is_empty(landmarks):
        return landmarks
    out = landmarks.copy()
    out[:, 0] = width - out[:, 0]
    return out


def convert_hands(
    hands: Sequence[DetectedHand],
    mirror: bool = False,
    width: float = 0.0,
) -> HandsFrame:
    """Route detections to the left/right slots of a HandsFrame.

    When two detections share a handedness the higher score wins.  With
    ``mirror`` the view is a selfie mirror: keypoints are reflected about
    half the canvas width and Left/Right trade places.
    """
    best: dict[str, Optional[DetectedHand]] = {"Left": None, "Right": None}
    for hand in hands:
        if hand.handedness not in best or is_empty(hand.keypoints):
            continue
        current = best[hand.handedness]
        if current is None or hand.score > current.score:
            best[hand.handedness] = hand

    def _points(label: str) -> LandmarkSet:
        hand = best[label]
        if hand is None:
            return empty_landmarks()
        if mirror:
            return mirror_landmarks(hand.keypoints, width)
        return hand.keypoints

    if mirror:
        return HandsFrame(left=_points("Right"), right=_points("Left"))
    return HandsFrame(left=_points("Left"), right=_points("Right"))


def is_front(keypoints: LandmarkSet, handedness: str) -> bool:
    """Whether the palm faces the camera.

    Uses the winding of wrist -> index MCP -> pinky MCP in canvas
    coordinates (y down); the winding flips between hands.
    """
    if is_empty(keypoints):
        return False
    wrist = keypoints[WRIST]
    a = keypoints[INDEX_MCP] - wrist
    b = keypoints[PINKY_MCP] - wrist
    cross = a[0] * b[1] - a[1] * b[0]
    if handedness.lower() == "right":
        return bool(cross > 0)
    return bool(cross < 0)
