"""Tests for the spatial (3D) solver."""

import itertools

import numpy as np
import pytest

from vseprlayout.builders import vsepr_molecule
from vseprlayout.geometry import directions_3d
from vseprlayout.spatial import (
    PARK_RADIUS,
    SECOND_SHELL_OFFSET,
    even_directions,
    fibonacci_sphere,
    layout_spatial,
    spatial_layout,
)
from vseprlayout.types import Atom, Bond, LayoutConfig, Molecule
from vseprlayout.utils import vector_angle


def _mol(ids, bonds, geometry=None):
    atoms = tuple(Atom(i, "C") for i in ids)
    return Molecule("m", "M", atoms=atoms, bonds=tuple(Bond(a, b) for a, b in bonds), geometry=geometry)


_STAR = [("B", "A"), ("B", "C"), ("B", "D")]


def test_most_bonded_atom_at_origin():
    pos = layout_spatial(_mol(["A", "B", "C", "D"], _STAR), bond_length=1.5)
    assert pos["B"] == (0.0, 0.0, 0.0)
    for aid in ("A", "C", "D"):
        assert np.linalg.norm(pos[aid]) == pytest.approx(1.5)


def test_center_independent_of_atom_order():
    a = layout_spatial(_mol(["A", "B", "C", "D"], _STAR))
    b = layout_spatial(_mol(["D", "C", "B", "A"], _STAR))
    assert a == b
    assert list(b) == ["D", "C", "B", "A"]


def test_table_directions_in_bond_order():
    m = _mol(["A", "B", "C", "D"], _STAR, geometry="trigonal-pyramidal")
    pos = layout_spatial(m, bond_length=2.0)
    table = directions_3d("trigonal-pyramidal")
    for aid, d in zip(("A", "C", "D"), table, strict=True):
        assert np.allclose(pos[aid], d * 2.0)


def test_geometry_argument_overrides_molecule():
    m = _mol(["A", "B", "C", "D"], _STAR, geometry="trigonal-pyramidal")
    pos = layout_spatial(m, bond_length=1.0, geometry="trigonal-planar")
    assert np.allclose(pos["A"], directions_3d("trigonal-planar")[0])


def test_unknown_geometry_uses_spiral():
    m = _mol(["A", "B", "C", "D"], _STAR)
    assert layout_spatial(m, geometry="hexagonal") == layout_spatial(m)
    assert np.allclose(layout_spatial(m, bond_length=1.0)["A"], fibonacci_sphere(3)[0])


def test_table_truncated_to_neighbors():
    m = _mol(["A", "B"], [("A", "B")], geometry="octahedral")
    pos = layout_spatial(m, bond_length=1.0)
    assert np.allclose(pos["B"], [0.0, 1.0, 0.0])


def test_remainder_spread_after_table():
    ids = ["X", "A", "B", "C"]
    m = _mol(ids, [("X", "A"), ("X", "B"), ("X", "C")], geometry="linear")
    pos = layout_spatial(m, bond_length=1.0)
    assert np.allclose(pos["A"], [-1.0, 0.0, 0.0])
    assert np.allclose(pos["B"], [1.0, 0.0, 0.0])
    assert np.linalg.norm(pos["C"]) == pytest.approx(1.0)
    assert vector_angle(pos["C"], pos["A"]) > 60.0
    assert vector_angle(pos["C"], pos["B"]) > 60.0


def test_two_neighbors_opposite():
    m = _mol(["X", "A", "B"], [("X", "A"), ("X", "B")])
    pos = layout_spatial(m, bond_length=1.0)
    assert vector_angle(pos["A"], pos["B"]) == pytest.approx(180.0)


def test_second_shell_offset():
    ids = ["C", "H1", "H2", "O", "H3"]
    m = _mol(ids, [("C", "H1"), ("C", "H2"), ("C", "O"), ("O", "H3")])
    pos = layout_spatial(m, bond_length=1.5)
    assert pos["C"] == (0.0, 0.0, 0.0)
    offset = np.subtract(pos["H3"], pos["O"])
    assert np.linalg.norm(offset) == pytest.approx(SECOND_SHELL_OFFSET * 1.5)
    # points away from the centre
    assert np.linalg.norm(pos["H3"]) > np.linalg.norm(pos["O"])


def test_second_shell_siblings_do_not_overlap():
    ids = ["C", "A", "B", "N", "H1", "H2"]
    m = _mol(ids, [("C", "A"), ("C", "B"), ("C", "N"), ("N", "H1"), ("N", "H2")])
    pos = layout_spatial(m)
    assert not np.allclose(pos["H1"], pos["H2"])
    for h in ("H1", "H2"):
        assert np.linalg.norm(np.subtract(pos[h], pos["N"])) == pytest.approx(SECOND_SHELL_OFFSET * 1.5)


def test_disconnected_atom_parked():
    m = _mol(["A", "B", "Z"], [("A", "B")])
    pos = layout_spatial(m, bond_length=1.0)
    assert np.linalg.norm(pos["Z"]) == pytest.approx(PARK_RADIUS)


def test_dangling_bond_ignored():
    m = _mol(["A", "B"], [("A", "B"), ("A", "ghost")])
    pos = layout_spatial(m)
    assert set(pos) == {"A", "B"}


def test_empty_molecule():
    assert layout_spatial(Molecule("e", "")) == {}


def test_deterministic():
    m = vsepr_molecule("PCl₅", 0)
    assert layout_spatial(m) == layout_spatial(m)


def test_spatial_layout_uses_config_bond_length():
    m = vsepr_molecule("CH₄", 0)
    pos = spatial_layout(m, LayoutConfig(bond_length=2.5))
    assert np.linalg.norm(pos["h-0"]) == pytest.approx(2.5)


def test_fibonacci_sphere_unit_and_spread():
    pts = fibonacci_sphere(12)
    assert pts.shape == (12, 3)
    assert np.allclose(np.linalg.norm(pts, axis=1), 1.0)
    assert min(vector_angle(u, v) for u, v in itertools.combinations(pts, 2)) > 30.0


def test_even_directions_edge_cases():
    assert even_directions(0).shape == (0, 3)
    assert np.allclose(even_directions(2), [[0.0, 1.0, 0.0], [0.0, -1.0, 0.0]])
    assert np.allclose(np.linalg.norm(even_directions(1), axis=1), 1.0)
