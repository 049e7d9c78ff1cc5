"""Build :class:`Molecule` descriptions from compact VSEPR / Lewis data."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vseprlayout.geometry import Geometry
from vseprlayout.types import Atom, Bond, BondType, Molecule

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vseprlayout.dipole import DipoleMoment

logger = logging.getLogger(__name__)

_SUBSCRIPTS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")
_ID_STRIP = re.compile(r"[₀₁₂₃₄₅₆₇₈₉⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻]")
_ELEMENT = re.compile(r"([A-Z][a-z]?)(\d*)")

# (electron domains, lone pairs) -> shape
_SHAPES: dict[tuple[int, int], Geometry] = {
    (2, 0): Geometry.LINEAR,
    (3, 0): Geometry.TRIGONAL_PLANAR,
    (3, 1): Geometry.BENT,
    (4, 0): Geometry.TETRAHEDRAL,
    (4, 1): Geometry.TRIGONAL_PYRAMIDAL,
    (4, 2): Geometry.BENT,
    (5, 0): Geometry.TRIGONAL_BIPYRAMIDAL,
    (5, 1): Geometry.SEE_SAW,
    (5, 2): Geometry.T_SHAPED,
    (5, 3): Geometry.LINEAR,
    (6, 0): Geometry.OCTAHEDRAL,
    (6, 1): Geometry.SQUARE_PYRAMIDAL,
    (6, 2): Geometry.SQUARE_PLANAR,
}


@dataclass(frozen=True)
class Substituent:
    """An atom bonded to the central atom in a Lewis structure."""

    symbol: str
    bond_type: BondType = BondType.SINGLE
    lone_pairs: int = 0
    formal_charge: int | None = None


def molecule_id(formula: str) -> str:
    """Lowercase id with subscript digits and charge marks removed.

    Examples
    --------
    >>> molecule_id("H₂O")
    'ho'
    >>> molecule_id("NH₄⁺")
    'nh'
    """
    return _ID_STRIP.sub("", formula).lower()


def parse_formula(formula: str) -> tuple[str, list[tuple[str, int]]]:
    """Split a formula into its first (central) element and the rest with counts.

    Examples
    --------
    >>> parse_formula("CH₄")
    ('C', [('H', 4)])
    >>> parse_formula("SF4")
    ('S', [('F', 4)])
    """
    parts = _elements(formula)
    if not parts:
        return "C", []
    return parts[0][0], parts[1:]


def infer_geometry(lone_pairs: int, bonded: int) -> Geometry | None:
    """Molecular shape from the central atom's lone pairs and bonded-atom count.

    Multiple bonds count as one domain, so ``bonded`` is the number of
    bonded atoms, not the bond order sum.

    Examples
    --------
    >>> infer_geometry(2, 2)
    <Geometry.BENT: 'bent'>
    >>> infer_geometry(0, 7) is None
    True
    """
    shape = _SHAPES.get((lone_pairs + bonded, lone_pairs))
    if shape is None and bonded == 1:
        return Geometry.LINEAR
    return shape


def vsepr_molecule(
    formula: str,
    lone_pairs: int,
    geometry: str | Geometry | None = None,
    *,
    central: str | None = None,
    bond_type: BondType = BondType.SINGLE,
    name: str | None = None,
    is_polar: bool | None = None,
    dipole: DipoleMoment | None = None,
) -> Molecule:
    """Central atom plus every other atom of ``formula`` bonded to it.

    ``geometry`` names the shape; without it the shape is inferred from the
    domain count. An unrecognised name gives a molecule without a shape.
    ``central`` picks the central element when it is not written first
    (``"H₂O"`` with ``central="O"``). ``dipole`` is carried through for the
    flat layout's dipole arrow.
    """
    symbol, surrounding = parse_formula(formula)
    if central is not None and central != symbol:
        surrounding = _take_one(central, _elements(formula))
        symbol = central
    center_id = f"{symbol.lower()}-central"
    atoms = [Atom(center_id, symbol, lone_pairs=lone_pairs)]
    bonds = []
    idx = 0
    for sym, count in surrounding:
        for _ in range(count):
            aid = f"{sym.lower()}-{idx}"
            atoms.append(Atom(aid, sym))
            bonds.append(Bond(center_id, aid, bond_type))
            idx += 1

    if geometry is not None:
        shape = Geometry.parse(geometry)
        if shape is None:
            logger.debug("Unknown geometry %r for %s; no shape", geometry, formula)
    else:
        shape = infer_geometry(lone_pairs, len(bonds))
    return Molecule(
        id=molecule_id(formula),
        formula=formula,
        atoms=tuple(atoms),
        bonds=tuple(bonds),
        geometry=shape,
        name=name,
        is_polar=is_polar,
        dipole=dipole,
    )


def lewis_molecule(
    central: str,
    surrounding: Sequence[Substituent],
    central_lone_pairs: int,
    formula: str,
    *,
    name: str | None = None,
    central_formal_charge: int | None = None,
    radical: bool = False,
) -> Molecule:
    """Lewis structure with per-substituent bond orders, lone pairs and charges."""
    center_id = f"{central.lower()}-central"
    atoms = [
        Atom(center_id, central, lone_pairs=central_lone_pairs, formal_charge=central_formal_charge, is_radical=radical)
    ]
    bonds = []
    for i, sub in enumerate(surrounding):
        aid = f"{sub.symbol.lower()}-{i}"
        atoms.append(Atom(aid, sub.symbol, lone_pairs=sub.lone_pairs, formal_charge=sub.formal_charge))
        bonds.append(Bond(center_id, aid, BondType.parse(sub.bond_type)))
    return Molecule(
        id=molecule_id(formula),
        formula=formula,
        atoms=tuple(atoms),
        bonds=tuple(bonds),
        geometry=infer_geometry(central_lone_pairs, len(surrounding)),
        name=name,
    )


def diatomic(
    symbol1: str,
    symbol2: str,
    bond_type: BondType = BondType.SINGLE,
    lone_pairs1: int = 0,
    lone_pairs2: int = 0,
    *,
    formal_charges: tuple[int | None, int | None] = (None, None),
    formula: str | None = None,
) -> Molecule:
    """Two atoms, one bond, linear."""
    id1, id2 = f"{symbol1.lower()}-0", f"{symbol2.lower()}-1"
    formula = formula or f"{symbol1}{symbol2}"
    return Molecule(
        id=formula.lower(),
        formula=formula,
        atoms=(
            Atom(id1, symbol1, lone_pairs=lone_pairs1, formal_charge=formal_charges[0]),
            Atom(id2, symbol2, lone_pairs=lone_pairs2, formal_charge=formal_charges[1]),
        ),
        bonds=(Bond(id1, id2, bond_type),),
        geometry=Geometry.LINEAR,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _elements(formula: str) -> list[tuple[str, int]]:
    return [(sym, int(n) if n else 1) for sym, n in _ELEMENT.findall(formula.translate(_SUBSCRIPTS))]


def _take_one(symbol: str, parts: list[tuple[str, int]]) -> list[tuple[str, int]]:
    """``parts`` with one ``symbol`` removed (the central atom)."""
    out = []
    taken = False
    for sym, n in parts:
        if sym == symbol and not taken:
            taken = True
            if n > 1:
                out.append((sym, n - 1))
            continue
        out.append((sym, n))
    return out
