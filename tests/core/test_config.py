"""Tests for puppet configuration and presets."""

import json

import pytest

from handpuppet.core.config import (
    ChainConfig,
    PuppetConfig,
    VARIANTS,
    config_from_dict,
    get_variant,
)
from handpuppet.core.config_loader import load_puppet_config


def test_defaults():
    cfg = PuppetConfig()
    assert cfg.chain == ChainConfig(r=150.0, offset=60.0, scale=1.0)
    assert cfg.circle_size == 80.0
    assert cfg.floor_y_factor == pytest.approx(2 / 3)
    assert cfg.gravity_y == 0.1


def test_variants_differ_only_in_presentation():
    organ, mirror = get_variant("organ"), get_variant("mirror")
    assert organ.chain == mirror.chain
    assert organ.gravity_y == 0.1
    assert mirror.gravity_y is None
    assert organ.circle_respawn_threshold_y != mirror.circle_respawn_threshold_y
    assert mirror.mirror_half_width and not organ.mirror_half_width
    assert organ.show_is_front and not mirror.show_is_front


def test_unknown_variant():
    with pytest.raises(ValueError):
        get_variant("puppet")


def test_config_from_dict_overlays():
    cfg = config_from_dict({"chain": {"r": 100}, "circle_size": 40, "stroke_color": 255})
    assert cfg.chain.r == 100.0
    assert cfg.chain.offset == 60.0
    assert cfg.circle_size == 40
    assert cfg.stroke_color == (255, 255, 255)


def test_config_from_dict_keeps_base():
    base = VARIANTS["mirror"]
    cfg = config_from_dict({"draw_edges": True}, base)
    assert cfg.draw_edges
    assert cfg.gravity_y is None
    assert not base.draw_edges


@pytest.mark.parametrize("data", [
    {"colour": 1},
    {"chain": {"radius": 3}},
    {"chain": {"r": 0}},
    {"chain": {"offset": -5}},
    {"circle_size": 0},
    {"circle_spawn_y": 10, "circle_respawn_threshold_y": 5},
    {"circle_size": "80"},
    {"floor_y_factor": "0.5"},
    {"gravity_y": "0.1"},
    {"stroke_weight": None},
    {"chain": {"r": "150"}},
    {"chain": [150]},
    {"draw_edges": "yes"},
    {"mirror_half_width": 1},
    {"circle_size": True},
    {"stroke_color": "red"},
    {"circle_color": [1, 2]},
])
def test_config_from_dict_rejects(data):
    with pytest.raises(ValueError):
        config_from_dict(data)


def test_load_without_file():
    assert load_puppet_config(None, "mirror") is VARIANTS["mirror"]


def test_load_from_file(tmp_path):
    path = tmp_path / "puppet.json"
    path.write_text(json.dumps({"variant": "mirror", "gravity_y": 0.5, "chain": {"scale": 2}}))
    cfg = load_puppet_config(path)
    assert cfg.gravity_y == 0.5
    assert cfg.chain.scale == 2.0
    assert cfg.mirror_half_width


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "puppet.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_puppet_config(path)


def test_config_from_dict_coerces_numbers():
    cfg = config_from_dict({"circle_size": 40, "gravity_y": 1, "circle_spawn_y": -50})
    assert isinstance(cfg.circle_size, float)
    assert isinstance(cfg.gravity_y, float)
    assert cfg.circle_spawn_y == -50.0


def test_config_from_dict_allows_null_gravity():
    assert config_from_dict({"gravity_y": None}).gravity_y is None


def test_load_rejects_wrong_types(tmp_path):
    path = tmp_path / "puppet.json"
    path.write_text(json.dumps({"circle_size": "80"}))
    with pytest.raises(ValueError):
        load_puppet_config(path)
