"""Moving-average landmark smoothing.

The caller owns the history value and threads it through
``smooth_hands`` every frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from handpuppet.constants import SMOOTHING_WINDOW
from handpuppet.core.hands import HandsFrame, LandmarkSet, empty_landmarks, is_empty


@dataclass(frozen=True)
class HandsHistory:
    """Most recent raw landmark sets per side, oldest first."""
    left: tuple[LandmarkSet, ...] = field(default_factory=tuple)
    right: tuple[LandmarkSet, ...] = field(default_factory=tuple)


def _push(history: tuple[LandmarkSet, ...], landmarks: LandmarkSet, window: int) -> tuple[LandmarkSet, ...]:
    # a missing hand breaks the run
    if is_empty(landmarks):
        return ()
    return (history + (landmarks,))[-window:]


def update_history(raw: HandsFrame, history: HandsHistory, window: int = SMOOTHING_WINDOW) -> HandsHistory:
    return HandsHistory(
        left=_push(history.left, raw.left, window),
        right=_push(history.right, raw.right, window),
    )


def _average(history: tuple[LandmarkSet, ...]) -> LandmarkSet:
    if not history:
        return empty_landmarks()
    return np.mean(np.stack(history), axis=0)


def smooth_hands(
    raw: HandsFrame,
    history: HandsHistory,
    window: int = SMOOTHING_WINDOW,
) -> tuple[HandsFrame, HandsHistory]:
    """Fold ``raw`` into the history and return the averaged frame.

    A side that is empty in ``raw`` stays empty in the output.
    """
    history = update_history(raw, history, window)
    smoothed = HandsFrame(left=_average(history.left), right=_average(history.right))
    return smoothed, history
