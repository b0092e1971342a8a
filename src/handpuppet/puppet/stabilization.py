"""Fallback policy for frames where one or both hands are missing."""

from typing import Optional

from handpuppet.core.hands import HandsFrame


def stabilize(frame: HandsFrame) -> Optional[HandsFrame]:
    """Return the frame the chain should be built from, or None to skip.

    One missing side is filled with the other side's landmarks so the
    puppet stays symmetric; with no hands at all there is nothing to build.
    """
    if frame.is_empty:
        return None
    if not frame.has_left:
        return HandsFrame(left=frame.right, right=frame.right)
    if not frame.has_right:
        return HandsFrame(left=frame.left, right=frame.left)
    return frame
