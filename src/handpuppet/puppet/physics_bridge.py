"""Physics bridge: persistent pymunk bodies driven by the chevron chain.

The bridge owns a pymunk ``Space`` with three kinds of bodies, all created
once in ``__init__``:

- 20 kinematic edge boxes (``r/2 x 1``), one per chevron segment.  They
  never integrate; every frame they are teleported onto the matching pair
  of chain points so the circle can collide with the puppet.
- A static floor box spanning the canvas at ``floor_y_factor`` height.
- A dynamic bounce circle that falls under gravity, lands on the floor or
  the puppet, and is respawned at the top once it drops past a threshold.

Positions are taken from the canvas size at construction; they are not
rescaled when the canvas is resized later.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import pymunk

from handpuppet.constants import (
    CHAIN_POINT_COUNT,
    CIRCLE_ELASTICITY,
    CIRCLE_FRICTION,
    CIRCLE_MASS,
    DEFAULT_ENGINE_GRAVITY,
    EDGE_COUNT,
    EDGE_THICKNESS,
    FIXED_TIMESTEP,
    FLOOR_THICKNESS,
    GRAVITY_SCALE,
    POINTS_PER_SIDE,
)
from handpuppet.core.config import PuppetConfig
from handpuppet.core.math_utils import midpoint, segment_angle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyPose:
    x: float
    y: float
    angle: float = 0.0


@dataclass(frozen=True)
class PhysicsSnapshot:
    """Read-only view of the bodies for rendering."""
    edges: tuple[BodyPose, ...]
    edge_size: tuple[float, float]
    floor: BodyPose
    floor_size: tuple[float, float]
    circle: BodyPose
    circle_radius: float


def gravity_from_config(cfg: PuppetConfig) -> float:
    """Vertical gravity in px/s^2 (engine units scaled by GRAVITY_SCALE)."""
    g = DEFAULT_ENGINE_GRAVITY if cfg.gravity_y is None else cfg.gravity_y
    return g * GRAVITY_SCALE


class PhysicsBridge:
    """Owns the physics space and every body in it.

    Parameters
    ----------
    config : PuppetConfig
        Scene layout and physics options.
    width, height : float
        Canvas size used to place the floor, spawn point and the initial
        edge poses.
    """

    def __init__(self, config: PuppetConfig, width: float, height: float) -> None:
        self.config = config
        self.width = float(width)
        self.height = float(height)

        self.space = pymunk.Space()
        self.space.gravity = (0.0, gravity_from_config(config))

        r = config.chain.r
        anchor = (self.width / 2.0, self.height * config.floor_y_factor)

        # ── Edges ──
        self.edge_size = (r / 2.0, EDGE_THICKNESS)
        self._edges: list[pymunk.Body] = []
        for _ in range(EDGE_COUNT):
            body = pymunk.Body(body_type=pymunk.Body.KINEMATIC)
            body.position = anchor
            shape = pymunk.Poly.create_box(body, self.edge_size)
            self.space.add(body, shape)
            self._edges.append(body)

        # ── Floor ──
        self.floor_size = (self.width * config.floor_width_factor, FLOOR_THICKNESS)
        self.floor_body = pymunk.Body(body_type=pymunk.Body.STATIC)
        self.floor_body.position = anchor
        floor_shape = pymunk.Poly.create_box(self.floor_body, self.floor_size)
        floor_shape.friction = CIRCLE_FRICTION
        self.space.add(self.floor_body, floor_shape)

        # ── Bounce circle ──
        self.spawn_point = (self.width / 2.0, config.circle_spawn_y)
        radius = config.circle_size
        self.circle_body = pymunk.Body(
            CIRCLE_MASS, pymunk.moment_for_circle(CIRCLE_MASS, 0, radius)
        )
        self.circle_body.position = self.spawn_point
        circle_shape = pymunk.Circle(self.circle_body, radius)
        circle_shape.friction = CIRCLE_FRICTION
        circle_shape.elasticity = CIRCLE_ELASTICITY
        self.space.add(self.circle_body, circle_shape)

        self._closed = False
        logger.debug(
            "Physics space ready: %d edges, floor at y=%.1f, gravity=%.1f px/s^2",
            EDGE_COUNT, anchor[1], self.space.gravity[1],
        )

    # ── Public API ──

    @property
    def edges(self) -> tuple[pymunk.Body, ...]:
        return tuple(self._edges)

    def step(self, dt: float = FIXED_TIMESTEP) -> None:
        """Advance the world by one step."""
        if self._closed:
            return
        self.space.step(dt)

    def sync_edges(self, points: Sequence) -> bool:
        """Move the edge bodies onto the chain; return True if applied.

        Only a complete chain is applied.  Anything else leaves every edge
        at its previous pose.
        """
        n = len(points)
        if n != CHAIN_POINT_COUNT:
            if n:
                logger.debug("Chain not ready (%d points), edges keep last pose", n)
            return False
        if self._closed:
            return False

        for i in range(CHAIN_POINT_COUNT // POINTS_PER_SIDE):
            p0, p1, p2 = points[3 * i], points[3 * i + 1], points[3 * i + 2]
            self._place_edge(self._edges[2 * i], p0, p1)
            self._place_edge(self._edges[2 * i + 1], p1, p2)
        return True

    def apply_respawn(self) -> bool:
        """Teleport the circle back to its spawn point once it falls too far."""
        if self._closed:
            return False
        if self.circle_body.position.y <= self.config.circle_respawn_threshold_y:
            return False
        self.circle_body.position = self.spawn_point
        self.circle_body.velocity = (0.0, 0.0)
        self.circle_body.angular_velocity = 0.0
        self.space.reindex_shapes_for_body(self.circle_body)
        logger.info("Circle respawned at (%.1f, %.1f)", *self.spawn_point)
        return True

    def update(self, points: Sequence) -> tuple[bool, bool]:
        """Per-frame body work after the step: edge sync, then respawn.

        Returns ``(synced, respawned)``.
        """
        synced = self.sync_edges(points)
        respawned = self.apply_respawn()
        return synced, respawned

    def edge_poses(self) -> tuple[BodyPose, ...]:
        return tuple(BodyPose(b.position.x, b.position.y, b.angle) for b in self._edges)

    def snapshot(self) -> PhysicsSnapshot:
        c = self.circle_body
        f = self.floor_body
        return PhysicsSnapshot(
            edges=self.edge_poses(),
            edge_size=self.edge_size,
            floor=BodyPose(f.position.x, f.position.y, f.angle),
            floor_size=self.floor_size,
            circle=BodyPose(c.position.x, c.position.y, c.angle),
            circle_radius=self.config.circle_size,
        )

    def close(self) -> None:
        """Remove every body from the space; further calls are no-ops."""
        if self._closed:
            return
        self.space.remove(*self.space.shapes)
        self.space.remove(*self.space.bodies)
        self._edges.clear()
        self._closed = True

    # ── Internals ──

    def _place_edge(self, body: pymunk.Body, a, b) -> None:
        mid = midpoint(a, b)
        body.position = (float(mid[0]), float(mid[1]))
        body.angle = segment_angle(a, b)
        body.velocity = (0.0, 0.0)
        body.angular_velocity = 0.0
        self.space.reindex_shapes_for_body(body)
