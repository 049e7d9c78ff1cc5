"""Tests for depth styling."""

import numpy as np
import pytest

from vseprlayout.builders import vsepr_molecule
from vseprlayout.depth import (
    OPACITY_FLOOR,
    SCALE_FLOOR,
    config_depth_styles,
    depth_style,
    depth_styles,
    geometry_depth_styles,
)
from vseprlayout.types import DepthStyle, LayoutConfig


def test_closest_is_full_strength():
    assert depth_style(1.0) == DepthStyle(opacity=1.0, scale=1.0)


def test_nearer_than_near_is_clamped():
    assert depth_style(3.0) == DepthStyle(opacity=1.0, scale=1.0)


def test_monotonic_and_floored():
    styles = [depth_style(z) for z in np.linspace(1.0, -3.0, 41)]
    for near, far in zip(styles, styles[1:]):
        assert far.opacity <= near.opacity
        assert far.scale <= near.scale
    for s in styles:
        assert s.opacity >= OPACITY_FLOOR
        assert s.scale >= SCALE_FLOOR
    assert styles[-1].opacity == pytest.approx(OPACITY_FLOOR)
    assert styles[-1].scale == pytest.approx(SCALE_FLOOR)


def test_midpoint():
    s = depth_style(0.0)
    assert s.opacity == pytest.approx(0.7)
    assert s.scale == pytest.approx(0.85)


def test_custom_floors():
    s = depth_style(-5.0, opacity_floor=0.1, scale_floor=0.5)
    assert s.opacity == pytest.approx(0.1)
    assert s.scale == pytest.approx(0.5)


def test_depth_styles_in_bond_lengths():
    styles = depth_styles({"a": (0.0, 0.0, 1.5), "b": (0.0, 0.0, -1.5)}, bond_length=1.5)
    assert styles["a"] == DepthStyle(opacity=1.0, scale=1.0)
    assert styles["b"].opacity == pytest.approx(OPACITY_FLOOR)


def test_flat_positions_have_no_depth():
    styles = depth_styles({"a": (10.0, 20.0)})
    assert styles["a"].opacity == pytest.approx(0.7)


def test_geometry_depth_follows_table_slots():
    m = vsepr_molecule("CH₄", 0)
    styles = geometry_depth_styles(m)
    assert styles["c-central"] == DepthStyle()
    # slots: up (z=0), front-left, front-right, back
    assert styles["h-1"].opacity > styles["h-0"].opacity > styles["h-3"].opacity
    assert styles["h-1"] == styles["h-2"]


def test_geometry_depth_without_shape():
    m = vsepr_molecule("CH₄", 0, "not-a-shape")
    assert geometry_depth_styles(m) == {}


def test_config_depth_styles_uses_floors():
    cfg = LayoutConfig(bond_length=1.0, opacity_floor=0.2, scale_floor=0.6)
    styles = config_depth_styles({"a": (0.0, 0.0, -4.0)}, cfg)
    assert styles["a"].opacity == pytest.approx(0.2)
    assert styles["a"].scale == pytest.approx(0.6)
