"""Puppet configuration: chain geometry and presentation options.

The two presentation variants share one pipeline and differ only in the
values collected here.  ``gravity_y`` of ``None`` means "leave the engine
default" (see ``DEFAULT_ENGINE_GRAVITY``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

from handpuppet.constants import CHAIN_OFFSET, CHAIN_R, CHAIN_SCALE


@dataclass(frozen=True)
class ChainConfig:
    """Chevron chain geometry."""
    r: float = CHAIN_R            # arm length of one "<"
    offset: float = CHAIN_OFFSET  # lateral offset of each side from the centre line
    scale: float = CHAIN_SCALE    # flex distance scale


@dataclass(frozen=True)
class PuppetConfig:
    """Everything a renderer instance needs besides hand input."""
    chain: ChainConfig = field(default_factory=ChainConfig)

    # Presentation
    stroke_color: tuple[int, int, int] = (0, 0, 0)
    stroke_weight: float = 10.0
    background_color: Optional[tuple[int, int, int]] = (230, 226, 218)  # None = widget background
    circle_color: tuple[int, int, int] = (255, 255, 255)
    draw_edges: bool = False

    # Scene layout (fractions of the canvas size at body-creation time)
    circle_size: float = 80.0
    floor_y_factor: float = 2.0 / 3.0
    floor_width_factor: float = 1.0

    # Physics
    gravity_y: Optional[float] = 0.1
    circle_spawn_y: float = -1000.0
    circle_respawn_threshold_y: float = 2000.0

    # Input handling
    mirror_half_width: bool = False

    # Debug readouts
    show_is_front: bool = True


VARIANTS: dict[str, PuppetConfig] = {
    "organ": PuppetConfig(),
    "mirror": PuppetConfig(
        stroke_color=(255, 255, 255),
        background_color=(0, 0, 0),
        circle_color=(128, 128, 128),
        circle_size=60.0,
        gravity_y=None,
        circle_spawn_y=-200.0,
        circle_respawn_threshold_y=1000.0,
        mirror_half_width=True,
        show_is_front=False,
    ),
}

DEFAULT_VARIANT = "organ"


def get_variant(name: str) -> PuppetConfig:
    """Return the preset for a named presentation variant."""
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown variant {name!r}; expected one of {sorted(VARIANTS)}"
        ) from None


NUMBER_KEYS = (
    "stroke_weight",
    "circle_size",
    "floor_y_factor",
    "floor_width_factor",
    "circle_spawn_y",
    "circle_respawn_threshold_y",
)
FLAG_KEYS = ("draw_edges", "mirror_half_width", "show_is_front")


def _as_number(key: str, value: Any) -> float:
    # JSON true/false would pass isinstance(int)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    return float(value)


def _as_flag(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def _as_color(key: str, value: Any) -> tuple[int, int, int]:
    # a single number means grey, like a canvas stroke(0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        v = int(value)
        return (v, v, v)
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{key} must be a grey level or an [r, g, b] triple, got {value!r}")
    r, g, b = (int(_as_number(key, c)) for c in value)
    return (r, g, b)


def config_from_dict(data: dict[str, Any], base: Optional[PuppetConfig] = None) -> PuppetConfig:
    """Overlay a (JSON-style) dict onto ``base``.

    Accepts a nested ``"chain"`` mapping and the flat presentation keys.
    Raises ``ValueError`` for unknown keys, values of the wrong type or
    non-positive sizes.
    """
    base = base if base is not None else VARIANTS[DEFAULT_VARIANT]
    data = dict(data)

    chain_data = data.pop("chain", {}) or {}
    if not isinstance(chain_data, dict):
        raise ValueError(f"chain must be an object, got {chain_data!r}")
    chain_keys = {f.name for f in fields(ChainConfig)}
    unknown = set(chain_data) - chain_keys
    if unknown:
        raise ValueError(f"Unknown chain config keys: {sorted(unknown)}")
    chain = replace(
        base.chain,
        **{k: _as_number(f"chain.{k}", v) for k, v in chain_data.items()},
    )

    top_keys = {f.name for f in fields(PuppetConfig)} - {"chain"}
    unknown = set(data) - top_keys
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")

    for key in NUMBER_KEYS:
        if key in data:
            data[key] = _as_number(key, data[key])
    if data.get("gravity_y") is not None:
        data["gravity_y"] = _as_number("gravity_y", data["gravity_y"])
    for key in FLAG_KEYS:
        if key in data:
            data[key] = _as_flag(key, data[key])
    for key in ("stroke_color", "circle_color"):
        if key in data:
            data[key] = _as_color(key, data[key])
    if data.get("background_color") is not None:
        data["background_color"] = _as_color("background_color", data["background_color"])

    cfg = replace(base, chain=chain, **data)
    validate_config(cfg)
    return cfg


def validate_config(cfg: PuppetConfig) -> None:
    if cfg.chain.r <= 0:
        raise ValueError(f"chain.r must be positive, got {cfg.chain.r}")
    if cfg.chain.offset <= 0:
        raise ValueError(f"chain.offset must be positive, got {cfg.chain.offset}")
    if cfg.circle_size <= 0:
        raise ValueError(f"circle_size must be positive, got {cfg.circle_size}")
    if cfg.circle_respawn_threshold_y <= cfg.circle_spawn_y:
        raise ValueError("circle_respawn_threshold_y must lie below circle_spawn_y")
