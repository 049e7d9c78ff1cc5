"""Tests for molecule builders."""

import pytest

import vseprlayout
from vseprlayout.builders import (
    Substituent,
    diatomic,
    infer_geometry,
    lewis_molecule,
    molecule_id,
    parse_formula,
    vsepr_molecule,
)
from vseprlayout.dipole import DipoleDirection, DipoleMoment
from vseprlayout.geometry import Geometry
from vseprlayout.types import BondType


@pytest.mark.parametrize(
    ("lone_pairs", "bonded", "expected"),
    [
        (0, 2, Geometry.LINEAR),
        (0, 3, Geometry.TRIGONAL_PLANAR),
        (1, 2, Geometry.BENT),
        (0, 4, Geometry.TETRAHEDRAL),
        (1, 3, Geometry.TRIGONAL_PYRAMIDAL),
        (2, 2, Geometry.BENT),
        (0, 5, Geometry.TRIGONAL_BIPYRAMIDAL),
        (1, 4, Geometry.SEE_SAW),
        (2, 3, Geometry.T_SHAPED),
        (3, 2, Geometry.LINEAR),
        (0, 6, Geometry.OCTAHEDRAL),
        (1, 5, Geometry.SQUARE_PYRAMIDAL),
        (2, 4, Geometry.SQUARE_PLANAR),
        (3, 1, Geometry.LINEAR),
        (0, 7, None),
    ],
)
def test_infer_geometry(lone_pairs, bonded, expected):
    assert infer_geometry(lone_pairs, bonded) is expected


def test_parse_formula():
    assert parse_formula("H₂O") == ("H", [("O", 1)])
    assert parse_formula("XeF₄") == ("Xe", [("F", 4)])
    assert parse_formula("") == ("C", [])


def test_molecule_id():
    assert molecule_id("SO₄²⁻") == "so"
    assert molecule_id("CO2") == "co2"


def test_vsepr_molecule_infers_shape():
    m = vsepr_molecule("CH₄", 0, name="methane")
    assert m.id == "ch"
    assert m.name == "methane"
    assert m.geometry is Geometry.TETRAHEDRAL
    assert m.atom_ids == ["c-central", "h-0", "h-1", "h-2", "h-3"]
    assert all(b.from_id == "c-central" for b in m.bonds)
    assert m.atom("c-central").lone_pairs == 0


def test_vsepr_molecule_explicit_central():
    m = vsepr_molecule("H₂O", 2, central="O")
    assert m.atoms[0].symbol == "O"
    assert m.atom_ids == ["o-central", "h-0", "h-1"]
    assert m.geometry is Geometry.BENT


def test_vsepr_molecule_explicit_and_unknown_geometry():
    assert vsepr_molecule("ClF₃", 2, "T-shaped").geometry is Geometry.T_SHAPED
    assert vsepr_molecule("ClF₃", 2, "propeller").geometry is None


def test_lewis_molecule():
    o = Substituent("O", BondType.DOUBLE, lone_pairs=2)
    m = lewis_molecule("C", [o, o], 0, "CO₂", name="carbon dioxide")
    assert m.geometry is Geometry.LINEAR
    assert m.atom_ids == ["c-central", "o-0", "o-1"]
    assert {b.type for b in m.bonds} == {BondType.DOUBLE}
    assert m.atom("o-1").lone_pairs == 2


def test_lewis_molecule_charges():
    subs = [Substituent("O", "double", 2), Substituent("O", "single", 3, formal_charge=-1)]
    m = lewis_molecule("N", subs, 1, "NO₂⁻", central_formal_charge=0, radical=False)
    assert m.geometry is Geometry.BENT
    assert m.atom("o-1").formal_charge == -1
    assert m.bonds[0].type is BondType.DOUBLE
    assert m.bonds[1].type is BondType.SINGLE


def test_package_exports_builder_inputs():
    assert {"Substituent", "DipoleDirection", "DipoleMoment", "dipole_arrow"} <= set(vseprlayout.__all__)
    o = vseprlayout.Substituent("O", "double", 2)
    m = vseprlayout.lewis_molecule("C", [o, o], 0, "CO₂")
    assert m.geometry is Geometry.LINEAR


def test_vsepr_molecule_carries_dipole():
    dipole = DipoleMoment(DipoleDirection.UP)
    assert vsepr_molecule("NH₃", 1, dipole=dipole).dipole is dipole
    assert vsepr_molecule("NH₃", 1).dipole is None


def test_diatomic():
    m = diatomic("N", "N", BondType.TRIPLE, 1, 1)
    assert m.atom_ids == ["n-0", "n-1"]
    assert m.geometry is Geometry.LINEAR
    assert m.bonds[0].type is BondType.TRIPLE
    assert m.formula == "NN"
