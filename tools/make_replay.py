"""Generate a synthetic replay: one or two hands slowly closing and opening.

Usage::

    python tools/make_replay.py out.json --frames 600 --hands both
"""

import argparse
import json
import math
import sys
sys.path.insert(0, "src")

import numpy as np

from handpuppet.constants import FINGER_COUNT, LANDMARK_COUNT, finger_end_index, finger_start_index
from handpuppet.core.hands import DetectedHand


def synthetic_hand(cx: float, cy: float, closure: float, phase: float = 0.0) -> np.ndarray:
    """21 keypoints of an upright hand; closure 0 = open, 1 = fist.

    Only the y of each fingertip relative to its base matters to the
    puppet, so the rest of the skeleton is a rough fan around the wrist.
    """
    pts = np.zeros((LANDMARK_COUNT, 2), dtype=np.float64)
    pts[0] = (cx, cy)
    for n in range(FINGER_COUNT):
        x = cx + (n - 2) * 30.0
        base_y = cy - 60.0
        # per-finger phase so the chain ripples instead of folding at once
        c = min(1.0, max(0.0, closure + 0.15 * math.sin(phase + n)))
        reach = 120.0 * (1.0 - c) - 20.0 * c
        start = finger_start_index(n)
        end = finger_end_index(n)
        for k, idx in enumerate(range(start, end + 1)):
            pts[idx] = (x, base_y - reach * k / 3.0)
    return pts


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("output")
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--hands", choices=("left", "right", "both"), default="both")
    parser.add_argument("--gap", type=int, default=60, help="empty frames appended at the end")
    args = parser.parse_args()

    frames = []
    for i in range(args.frames):
        t = i / 60.0
        closure = 0.5 - 0.5 * math.cos(t * 1.5)
        hands = []
        if args.hands in ("left", "both"):
            hands.append(DetectedHand("Left", 0.95, synthetic_hand(700, 600, closure, t)))
        if args.hands in ("right", "both"):
            hands.append(DetectedHand("Right", 0.93, synthetic_hand(300, 600, closure * 0.7, -t)))
        frames.append([h.to_dict() for h in hands])
    frames.extend([] for _ in range(args.gap))

    with open(args.output, "w") as f:
        json.dump(frames, f)
    print(f"Wrote {len(frames)} frames to {args.output}")


if __name__ == "__main__":
    main()
