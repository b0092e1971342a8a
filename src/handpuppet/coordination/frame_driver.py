"""Per-frame orchestrator for the hand puppet."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterable, Optional

from handpuppet.core.config import PuppetConfig
from handpuppet.core.events import EventBus, EventType
from handpuppet.core.hands import DetectedHand, HandSlot, HandsFrame, convert_hands, is_front
from handpuppet.core.math_utils import Mat3, mat3_translation
from handpuppet.puppet.chain_geometry import ChainResult, build_chain
from handpuppet.puppet.physics_bridge import PhysicsBridge, PhysicsSnapshot
from handpuppet.puppet.smoothing import HandsHistory, smooth_hands
from handpuppet.puppet.stabilization import stabilize

logger = logging.getLogger(__name__)


class FrameState(Enum):
    IDLE = auto()   # no hand this frame
    READY = auto()  # chain built from at least one hand


@dataclass(frozen=True)
class DebugEntry:
    label: str
    value: Any


Smoother = Callable[[HandsFrame, Any], tuple[HandsFrame, Any]]
Monitor = Callable[[list[DebugEntry]], None]
DebugHook = Callable[[DetectedHand], list[DebugEntry]]


@dataclass
class FrameResult:
    """Everything the canvas needs to draw one frame."""
    index: int
    state: FrameState
    chain: ChainResult
    physics: PhysicsSnapshot
    hands: Optional[HandsFrame] = None  # after stabilization
    synced: bool = False
    respawned: bool = False
    debug: list[DebugEntry] = field(default_factory=list)


def is_front_readout(hand: DetectedHand) -> list[DebugEntry]:
    """Debug hook reporting whether each detected palm faces the camera."""
    return [DebugEntry(
        f"{hand.handedness} is front",
        is_front(hand.keypoints, hand.handedness.lower()),
    )]


class FrameDriver:
    """Runs the puppet pipeline once per animation frame.

    Call order:
      1. Physics step (fixed timestep)
      2. Read the hand slot, convert and smooth
      3. Stabilize (mirror a missing hand, or skip)
      4. Build the chevron chain
      5. Sync edge bodies, respawn the circle
      6. Push debug entries to the monitor

    The chain frame is rebuilt from the canvas anchor every frame; the
    only state carried between frames is the smoothing history, the
    physics bodies and the READY/IDLE flag.
    """

    def __init__(
        self,
        config: PuppetConfig,
        physics: PhysicsBridge,
        slot: HandSlot,
        width: float,
        height: float,
        smoother: Smoother = smooth_hands,
        history: Any = None,
        monitor: Optional[Monitor] = None,
        event_bus: Optional[EventBus] = None,
        debug_hooks: Iterable[DebugHook] = (),
    ):
        self.config = config
        self.physics = physics
        self.slot = slot
        self.width = float(width)
        self.height = float(height)

        self.smoother = smoother
        self._history = history if history is not None else HandsHistory()
        self.monitor = monitor
        self.event_bus = event_bus
        self.debug_hooks: list[DebugHook] = list(debug_hooks)

        self.state = FrameState.IDLE
        self.frame_index = 0
        self.last_result: Optional[FrameResult] = None

    def resize(self, width: float, height: float) -> None:
        """Follow a canvas resize. Physics bodies are not rescaled."""
        self.width = float(width)
        self.height = float(height)
        if self.event_bus is not None:
            self.event_bus.publish(EventType.CANVAS_RESIZED, width=int(width), height=int(height))

    def chain_origin(self) -> Mat3:
        """Chain frame of the thumb row: centred, at floor height."""
        return mat3_translation(self.width / 2.0, self.height * self.config.floor_y_factor)

    def step(self, fps: Optional[float] = None) -> FrameResult:
        """Advance one frame and return its render snapshot."""
        # 1. Physics
        self.physics.step()

        # 2. Hands
        detected = self.slot.read()
        raw = convert_hands(detected, mirror=self.config.mirror_half_width, width=self.width)
        smoothed, self._history = self.smoother(raw, self._history)

        # 3. Stabilization
        hands = stabilize(smoothed)
        self._set_state(FrameState.IDLE if hands is None else FrameState.READY)

        # 4. Geometry
        if hands is not None:
            chain = build_chain(hands, self.config.chain, self.chain_origin())
        else:
            chain = ChainResult()

        # 5. Bodies
        synced, respawned = self.physics.update(chain.points)
        if respawned and self.event_bus is not None:
            self.event_bus.publish(EventType.CIRCLE_RESPAWNED, position=self.physics.spawn_point)

        # 6. Debug
        debug = self._debug_entries(detected, fps)
        if self.monitor is not None:
            self.monitor(debug)

        result = FrameResult(
            index=self.frame_index,
            state=self.state,
            chain=chain,
            physics=self.physics.snapshot(),
            hands=hands,
            synced=synced,
            respawned=respawned,
            debug=debug,
        )
        self.frame_index += 1
        self.last_result = result
        if self.event_bus is not None:
            self.event_bus.publish(EventType.FRAME_UPDATE, result=result)
        return result

    def close(self) -> None:
        self.physics.close()
        self.slot.clear()

    # ── Internals ──

    def _set_state(self, state: FrameState) -> None:
        if state is self.state:
            return
        previous = self.state
        self.state = state
        logger.info("Hands %s -> %s", previous.name, state.name)
        if self.event_bus is not None:
            self.event_bus.publish(EventType.HANDS_STATE_CHANGED, state=state, previous=previous)

    def _debug_entries(self, detected: list[DetectedHand], fps: Optional[float]) -> list[DebugEntry]:
        entries = [DebugEntry("state", self.state.name)]
        if fps is not None:
            entries.append(DebugEntry("fps", round(fps, 1)))
        for hand in detected:
            entries.append(DebugEntry(f"{hand.handedness} accuracy", hand.score))
            for hook in self.debug_hooks:
                entries.extend(hook(hand))
        return entries
