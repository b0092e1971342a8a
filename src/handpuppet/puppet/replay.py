"""Recorded detector output played back into a HandSlot.

A replay file is a JSON list of frames; each frame is a list of hands::

    [
      [{"handedness": "Left", "score": 0.97, "keypoints": [[x, y], ...]}],
      [],
      ...
    ]

An empty frame means no hand was detected at that tick.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from handpuppet.core.config_loader import load_json
from handpuppet.core.hands import DetectedHand, HandSlot

logger = logging.getLogger(__name__)


def parse_replay(data) -> list[list[DetectedHand]]:
    if not isinstance(data, list):
        raise ValueError(f"Replay must be a list of frames, got {type(data).__name__}")
    frames: list[list[DetectedHand]] = []
    for i, frame in enumerate(data):
        if not isinstance(frame, list):
            raise ValueError(f"Replay frame {i} must be a list of hands")
        try:
            frames.append([DetectedHand.from_dict(h) for h in frame])
        except (TypeError, KeyError, ValueError) as e:
            raise ValueError(f"Replay frame {i}: {e}") from e
    return frames


def load_replay(path: Path) -> list[list[DetectedHand]]:
    try:
        frames = parse_replay(load_json(Path(path)))
    except ValueError as e:
        logger.warning("Could not load replay %s: %s", path, e)
        raise
    logger.info("Loaded replay %s (%d frames)", path, len(frames))
    return frames


class ReplaySource:
    """Writes one recorded frame into the slot per ``advance`` call."""

    def __init__(self, frames: Sequence[Sequence[DetectedHand]], slot: HandSlot, loop: bool = True):
        self.frames = [list(f) for f in frames]
        self.slot = slot
        self.loop = loop
        self._index = 0

    @classmethod
    def from_file(cls, path: Path, slot: HandSlot, loop: bool = True) -> ReplaySource:
        return cls(load_replay(path), slot, loop)

    @property
    def finished(self) -> bool:
        return not self.loop and self._index >= len(self.frames)

    def advance(self) -> None:
        if not self.frames:
            return
        if self._index >= len(self.frames):
            if not self.loop:
                self.slot.clear()
                return
            self._index = 0
        self.slot.write(self.frames[self._index])
        self._index += 1
