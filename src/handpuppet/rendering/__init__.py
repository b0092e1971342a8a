"""Rendering subsystem -- QPainter canvas driven by a QTimer."""

from handpuppet.rendering.puppet_canvas import PuppetCanvas

__all__ = [
    "PuppetCanvas",
]
