"""Tests for the chevron chain builder."""

import math

import numpy as np
import pytest

from handpuppet.constants import CHAIN_POINT_COUNT, FINGER_COUNT, LANDMARK_COUNT
from handpuppet.core.config import ChainConfig
from handpuppet.core.hands import HandsFrame, empty_landmarks
from handpuppet.core.math_utils import mat3_identity, mat3_translation, segment_length
from handpuppet.puppet.chain_geometry import (
    FlexPair,
    advance_frame,
    apex_half_span,
    build_chain,
    chevron_points,
    clamp_flex,
    frame_flex,
    new_flex_pairs,
    raw_flex_distance,
)
from handpuppet.puppet.stabilization import stabilize

CFG = ChainConfig(r=150.0, offset=60.0, scale=1.0)


def _hand(deltas, base_y=500.0):
    """21 landmarks where finger n has end.y - start.y == deltas[n]."""
    if np.isscalar(deltas):
        deltas = [deltas] * FINGER_COUNT
    pts = np.zeros((LANDMARK_COUNT, 2), dtype=np.float64)
    for n, d in enumerate(deltas):
        x = 100.0 + 20.0 * n
        pts[4 * n + 1] = (x, base_y)
        pts[4 * n + 4] = (x, base_y + d)
    return pts


def _segments(points):
    for i in range(0, len(points), 3):
        yield points[i], points[i + 1]
        yield points[i + 1], points[i + 2]


def test_clamp_flex_range():
    for d in np.linspace(-500, 500, 101):
        c = clamp_flex(float(d), 150.0)
        assert -150.0 <= c <= 0.0
    assert clamp_flex(40.0, 150.0) == 0.0
    assert clamp_flex(-40.0, 150.0) == -40.0
    assert clamp_flex(-400.0, 150.0) == -150.0


def test_frame_flex_rules():
    assert frame_flex(-50.0, 150.0) == -50.0
    assert frame_flex(30.0, 150.0) == 0.0
    assert frame_flex(-200.0, 150.0) == -150.0
    # beyond r in either direction counts as fully closed
    assert frame_flex(200.0, 150.0) == -150.0


@pytest.mark.parametrize("d", [0.0, -1.0, -37.5, -75.0, -120.0, -149.9, -150.0])
def test_chevron_segments_are_half_r(d):
    for sign in (-1.0, 1.0):
        p0, p1, p2 = chevron_points(mat3_identity(), sign, d, CFG)
        assert segment_length(p0, p1) == pytest.approx(CFG.r / 2)
        assert segment_length(p1, p2) == pytest.approx(CFG.r / 2)


def test_apex_half_span_at_bounds():
    assert apex_half_span(0.0, 150.0) == pytest.approx(150.0)
    assert apex_half_span(-150.0, 150.0) == pytest.approx(0.0)
    assert apex_half_span(-50.0, 150.0) == pytest.approx(141.42, abs=0.01)


def test_chevron_layout_left_side():
    p0, p1, p2 = chevron_points(mat3_identity(), -1.0, -50.0, CFG)
    span = math.sqrt(150.0 ** 2 - 50.0 ** 2) / 2
    np.testing.assert_array_almost_equal(p0, [-60.0, 0.0])
    np.testing.assert_array_almost_equal(p1, [-60.0 - span, -25.0])
    np.testing.assert_array_almost_equal(p2, [-60.0, -50.0])


def test_reads_only_start_and_end_landmarks():
    rng = np.random.default_rng(3)
    hand = rng.uniform(0, 400, size=(LANDMARK_COUNT, 2))
    hand[4 * 2 + 1, 1] = 300.0
    hand[4 * 2 + 4, 1] = 280.0
    base = build_chain(HandsFrame(hand, hand), CFG, mat3_identity())

    read = {4 * n + 1 for n in range(FINGER_COUNT)} | {4 * n + 4 for n in range(FINGER_COUNT)}
    noisy = hand.copy()
    for idx in range(LANDMARK_COUNT):
        if idx not in read:
            noisy[idx] = rng.uniform(-1000, 1000, size=2)
    # x of the read landmarks is ignored too
    for idx in read:
        noisy[idx, 0] += 77.0
    other = build_chain(HandsFrame(noisy, noisy), CFG, mat3_identity())
    np.testing.assert_array_almost_equal(base.points, other.points)

    moved = hand.copy()
    moved[4 * 2 + 4, 1] -= 30.0
    changed = build_chain(HandsFrame(moved, moved), CFG, mat3_identity())
    assert not np.allclose(base.points, changed.points)


def test_raw_flex_distance_uses_scale():
    hand = _hand(-40.0)
    assert raw_flex_distance(hand, 0, 1.0) == pytest.approx(-40.0)
    assert raw_flex_distance(hand, 3, 2.5) == pytest.approx(-100.0)


def test_mirrored_scenario():
    frame = stabilize(HandsFrame(_hand(-50.0), empty_landmarks()))
    np.testing.assert_array_equal(frame.right, frame.left)

    result = build_chain(frame, CFG, mat3_identity())
    assert result.is_complete
    assert len(result.points) == 30
    for pair in result.flex:
        assert pair.left == -50.0
        assert pair.right == -50.0

    segments = list(_segments(result.points))
    assert len(segments) == 20
    for a, b in segments:
        assert segment_length(a, b) == pytest.approx(75.0)

    # first finger, left side: apex sits half the span out from the start joint
    start, apex = result.points[0], result.points[1]
    assert abs(apex[0] - start[0]) == pytest.approx(141.42 / 2, abs=0.01)


def test_symmetric_rows_stack_vertically():
    result = build_chain(HandsFrame(_hand(-50.0), _hand(-50.0)), CFG, mat3_translation(500, 400))
    starts = result.points[0::6]
    np.testing.assert_array_almost_equal(starts[:, 0], [440.0] * FINGER_COUNT)
    np.testing.assert_array_almost_equal(starts[:, 1], [400.0 - 50.0 * n for n in range(FINGER_COUNT)])


def test_asymmetric_rows_tilt():
    left = _hand([-100.0, 0, 0, 0, 0])
    right = _hand([0.0, 0, 0, 0, 0])
    result = build_chain(HandsFrame(left, right), CFG, mat3_identity())

    theta = -math.atan2(-100.0, 120.0)
    second_left_start = result.points[6]
    np.testing.assert_array_almost_equal(
        second_left_start,
        [-60.0 * math.cos(theta), -50.0 - 60.0 * math.sin(theta)],
    )


def test_advance_frame_ignores_opening():
    f = advance_frame(mat3_identity(), 80.0, 10.0, CFG)
    np.testing.assert_array_almost_equal(f, mat3_identity())


def test_positive_flex_beyond_r_still_tilts_frame():
    # the chevron itself stays open, but the frame treats it as fully closed
    left = _hand([400.0, 0, 0, 0, 0])
    right = _hand(0.0)
    result = build_chain(HandsFrame(left, right), CFG, mat3_identity())
    assert result.flex[0].left == 0.0
    assert result.points[6][1] < 0.0


def test_extreme_input_stays_finite():
    hand = _hand([-1e6, 1e6, -151.0, 0.0, 151.0])
    result = build_chain(HandsFrame(hand, hand), CFG, mat3_identity())
    assert np.all(np.isfinite(result.points))
    for pair in result.flex:
        assert -CFG.r <= pair.left <= 0.0
        assert -CFG.r <= pair.right <= 0.0


def test_empty_side_gives_empty_chain():
    result = build_chain(HandsFrame(_hand(-10.0), empty_landmarks()), CFG, mat3_identity())
    assert len(result.points) == 0
    assert not result.is_complete
    result = build_chain(HandsFrame.empty(), CFG, mat3_identity())
    assert len(result.points) == 0


def test_point_count_matches_constant():
    result = build_chain(HandsFrame(_hand(-20.0), _hand(-70.0)), CFG, mat3_identity())
    assert len(result.points) == CHAIN_POINT_COUNT


def test_flex_pairs_are_independent():
    pairs = new_flex_pairs()
    assert len(pairs) == FINGER_COUNT
    pairs[0].left = -12.0
    assert all(p.left == 0.0 for p in pairs[1:])
    assert len({id(p) for p in pairs}) == FINGER_COUNT
    assert FlexPair() is not FlexPair()
