"""Tests for lone-pair angle placement."""

import math

import pytest

from vseprlayout.builders import diatomic, vsepr_molecule
from vseprlayout.flat import layout_flat
from vseprlayout.lonepairs import (
    MIN_BOND_CLEARANCE,
    LonePairRole,
    curated_lone_pair_angles,
    even_lone_pair_angles,
    gap_lone_pair_angles,
    lone_pair_angles,
    lone_pair_dots,
    place_lone_pairs,
)
from vseprlayout.types import Atom, Molecule
from vseprlayout.utils import angular_distance


def test_gap_four_equal_bonds():
    (angle,) = gap_lone_pair_angles([0, 90, 180, 270], 1)
    assert angle in {45.0, 135.0, 225.0, 315.0}


def test_gap_two_opposite_bonds():
    (angle,) = gap_lone_pair_angles([0, 180], 1)
    assert angle in {90.0, 270.0}


def test_gap_prefers_largest():
    assert gap_lone_pair_angles([0, 90], 1) == pytest.approx([225.0])


def test_gap_wraps_past_360():
    assert gap_lone_pair_angles([300, 20], 1) == pytest.approx([160.0])


def test_gap_unsorted_input():
    assert gap_lone_pair_angles([180, 0, 90], 2) == pytest.approx([270.0, 45.0])


def test_gap_more_pairs_than_gaps():
    assert gap_lone_pair_angles([0], 3) == pytest.approx([90.0, 180.0, 270.0])
    assert gap_lone_pair_angles([0, 180], 3) == pytest.approx([60.0, 120.0, 270.0])


def test_even_spread_without_bonds():
    angles = lone_pair_angles([], 3)
    assert len(angles) == 3
    for i, a in enumerate(angles):
        for b in angles[i + 1 :]:
            assert angular_distance(a, b) == pytest.approx(120.0)
    assert angles[0] == 270.0  # starts at "up"


@pytest.mark.parametrize("count", [0, -1])
def test_zero_lone_pairs(count):
    assert lone_pair_angles([0.0], count) == []
    assert gap_lone_pair_angles([0.0], count) == []
    assert even_lone_pair_angles(count) == []
    assert curated_lone_pair_angles("bent", count) == []


def test_curated_lookup():
    assert curated_lone_pair_angles("bent", 2) == [225.0, 315.0]
    assert curated_lone_pair_angles("trigonal-pyramidal", 1) == [270.0]
    assert curated_lone_pair_angles("linear", 3) == [270.0, 45.0, 135.0]
    assert curated_lone_pair_angles("octahedral", 1) is None
    assert curated_lone_pair_angles(None, 1) is None
    assert curated_lone_pair_angles(None, 2, LonePairRole.TERMINAL) == [135.0, 225.0]


def test_curated_central_water():
    assert lone_pair_angles([142.25, 37.75], 2, "bent") == [225.0, 315.0]


def test_curated_terminal_rotates_with_bond():
    assert lone_pair_angles([0.0], 3, role=LonePairRole.TERMINAL) == pytest.approx([120.0, 180.0, 240.0])
    assert lone_pair_angles([90.0], 1, role=LonePairRole.TERMINAL) == pytest.approx([270.0])


def test_curated_collision_falls_back_to_gaps():
    # curated [270] sits 20 degrees from the bond at 250
    assert lone_pair_angles([250.0, 0.0], 1, "bent") == pytest.approx([125.0])


def test_uncurated_case_uses_gaps():
    assert lone_pair_angles([0.0, 180.0], 1, "octahedral") == pytest.approx([90.0])


def test_place_lone_pairs_water():
    m = vsepr_molecule("H₂O", 2, central="O")
    pos = layout_flat(m, 250, 250, 18)
    placed = place_lone_pairs(m, pos)
    assert list(placed) == ["o-central"]
    assert placed["o-central"] == pytest.approx([225.0, 315.0])


def test_place_lone_pairs_clear_bonds():
    m = vsepr_molecule("NH₃", 1)
    pos = layout_flat(m, 250, 250, 18)
    (angle,) = place_lone_pairs(m, pos)["n-central"]
    for h in ("h-0", "h-1", "h-2"):
        bond = math.degrees(math.atan2(pos[h][1] - pos["n-central"][1], pos[h][0] - pos["n-central"][0]))
        assert angular_distance(angle, bond) >= MIN_BOND_CLEARANCE


def test_place_lone_pairs_linear_three_pairs():
    m = vsepr_molecule("XeF₂", 3)
    pos = layout_flat(m, 250, 250, 18)
    placed = place_lone_pairs(m, pos)["xe-central"]
    assert placed == pytest.approx([270.0, 45.0, 135.0])
    for angle in placed:
        assert angular_distance(angle, 0.0) >= MIN_BOND_CLEARANCE
        assert angular_distance(angle, 180.0) >= MIN_BOND_CLEARANCE


def test_place_lone_pairs_terminal():
    m = diatomic("H", "F", lone_pairs2=3)
    pos = layout_flat(m, 250, 250, 18)
    placed = place_lone_pairs(m, pos)
    assert list(placed) == ["f-1"]
    # F sits left of H, so its pairs wrap around the left side
    assert placed["f-1"] == pytest.approx([120.0, 180.0, 240.0])


def test_place_lone_pairs_isolated_atom():
    m = Molecule("ne", "Ne", atoms=(Atom("ne", "Ne", lone_pairs=4),))
    placed = place_lone_pairs(m, layout_flat(m, 100, 100, 10))
    assert placed["ne"] == pytest.approx([270.0, 0.0, 90.0, 180.0])


def test_lone_pair_dots():
    lp = lone_pair_dots((0.0, 0.0), 0.0, 10.0, dot_size=4.0)
    assert lp.center == pytest.approx((10.0, 0.0))
    d1, d2 = lp.dots
    assert d1 == pytest.approx((10.0, 2.4))
    assert d2 == pytest.approx((10.0, -2.4))
