"""Lone-pair angle placement.

Angles are screen angles in degrees (0° right, clockwise, y down) measured
from the owning atom's centre. Three strategies, in order of preference:

1. a curated table for common textbook cases (:func:`curated_lone_pair_angles`);
2. the gap heuristic over existing bond angles (:func:`gap_lone_pair_angles`);
3. an even spread starting from "up" when the atom has no bonds
   (:func:`even_lone_pair_angles`).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from vseprlayout.geometry import Geometry
from vseprlayout.graph import CenterConvention, find_central_atom
from vseprlayout.types import LonePairDots
from vseprlayout.utils import angular_distance, norm_deg

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vseprlayout.types import Molecule, Point2D, PositionMap

logger = logging.getLogger(__name__)

UP = 270.0  # screen "up"
MIN_BOND_CLEARANCE = 30.0  # curated angles closer than this to a bond are rejected
_DOT_SPACING = 1.2  # dot centre spacing as a multiple of dot size


class LonePairRole(Enum):
    """Position of the atom in the molecule."""

    CENTRAL = "central"
    TERMINAL = "terminal"


# Absolute screen angles, matched to the 2D tables in vseprlayout.geometry
_CENTRAL: dict[tuple[Geometry, int], tuple[float, ...]] = {
    (Geometry.BENT, 1): (270.0,),
    (Geometry.BENT, 2): (225.0, 315.0),  # water: symmetric above both bonds
    (Geometry.TRIGONAL_PYRAMIDAL, 1): (270.0,),  # ammonia: apex
    (Geometry.LINEAR, 2): (270.0, 90.0),
    (Geometry.LINEAR, 3): (270.0, 45.0, 135.0),  # XeF2: one above, two below the axis
    (Geometry.SEE_SAW, 1): (0.0,),  # vacant equatorial slot
    (Geometry.T_SHAPED, 2): (150.0, 210.0),
    (Geometry.SQUARE_PLANAR, 2): (270.0, 90.0),  # XeF4: above and below the plane
    (Geometry.SQUARE_PYRAMIDAL, 1): (90.0,),  # opposite the apex
}

# Offsets from the terminal atom's bond direction
_TERMINAL: dict[int, tuple[float, ...]] = {
    1: (180.0,),
    2: (135.0, 225.0),
    3: (120.0, 180.0, 240.0),
}


def curated_lone_pair_angles(
    geometry: str | Geometry | None,
    count: int,
    role: LonePairRole = LonePairRole.CENTRAL,
) -> list[float] | None:
    """Curated angles for a textbook case, or None when the case is not curated.

    Central angles are absolute. Terminal angles are offsets relative to the
    atom's single bond; the caller rotates them by the bond angle.
    """
    if count <= 0:
        return []
    if role is LonePairRole.TERMINAL:
        angles = _TERMINAL.get(count)
    else:
        g = Geometry.parse(geometry)
        angles = _CENTRAL.get((g, count)) if g is not None else None
    return None if angles is None else list(angles)


def even_lone_pair_angles(count: int, start: float = UP) -> list[float]:
    """``count`` angles evenly spaced around the atom, beginning at ``start``.

    Examples
    --------
    >>> even_lone_pair_angles(2)
    [270.0, 90.0]
    """
    if count <= 0:
        return []
    step = 360.0 / count
    return [norm_deg(start + i * step) for i in range(count)]


def _gaps(bond_angles: Sequence[float]) -> list[tuple[float, float]]:
    """(start, size) of the angular gap after each sorted bond, wrapping past 360°."""
    s = sorted(norm_deg(a) for a in bond_angles)
    gaps = []
    for i, cur in enumerate(s):
        if i + 1 < len(s):
            size = s[i + 1] - cur
        else:
            size = s[0] + 360.0 - cur
        gaps.append((cur, size))
    return gaps


def gap_lone_pair_angles(bond_angles: Sequence[float], count: int) -> list[float]:
    """Place lone pairs in the largest gaps between existing bonds.

    Gaps are ranked largest first (equal gaps keep ascending bond order) and
    each of the top ``count`` gaps receives one pair at its midpoint. When
    there are more pairs than gaps, every gap gets one and each extra pair
    goes to the gap with the largest share ``size / (pairs + 1)``; a gap
    holding *k* pairs spaces them evenly across its width.

    Examples
    --------
    >>> gap_lone_pair_angles([0, 180], 1)
    [90.0]
    >>> gap_lone_pair_angles([90], 2)
    [210.0, 330.0]
    """
    if count <= 0:
        return []
    if not bond_angles:
        return even_lone_pair_angles(count)

    gaps = _gaps(bond_angles)
    ranked = sorted(range(len(gaps)), key=lambda i: -gaps[i][1])
    alloc = [0] * len(gaps)
    if count <= len(gaps):
        for i in ranked[:count]:
            alloc[i] = 1
    else:
        for i in ranked:
            alloc[i] = 1
        for _ in range(count - len(gaps)):
            # max() keeps the first of equal candidates, i.e. the higher-ranked gap
            best = max(ranked, key=lambda i: gaps[i][1] / (alloc[i] + 1))
            alloc[best] += 1

    result: list[float] = []
    for i in ranked:
        k = alloc[i]
        start, size = gaps[i]
        result.extend(norm_deg(start + size * (j + 1) / (k + 1)) for j in range(k))
    return result


def _clears_bonds(angles: Sequence[float], bond_angles: Sequence[float]) -> bool:
    return all(angular_distance(a, b) >= MIN_BOND_CLEARANCE for a in angles for b in bond_angles)


def lone_pair_angles(
    bond_angles: Sequence[float],
    count: int,
    geometry: str | Geometry | None = None,
    role: LonePairRole = LonePairRole.CENTRAL,
) -> list[float]:
    """Best available placement: curated table, then gap heuristic, then even spread."""
    if count <= 0:
        return []
    curated = None
    if role is LonePairRole.TERMINAL and len(bond_angles) == 1:
        offsets = curated_lone_pair_angles(None, count, role)
        if offsets is not None:
            curated = [norm_deg(bond_angles[0] + o) for o in offsets]
    elif role is LonePairRole.CENTRAL:
        curated = curated_lone_pair_angles(geometry, count, role)
        if curated is not None:
            curated = [norm_deg(a) for a in curated]

    if curated is not None and _clears_bonds(curated, bond_angles):
        return curated
    if curated is not None:
        logger.debug("Curated lone pairs %s collide with bonds %s; using gap heuristic", curated, list(bond_angles))
    if bond_angles:
        return gap_lone_pair_angles(bond_angles, count)
    return even_lone_pair_angles(count)


def place_lone_pairs(molecule: Molecule, positions: PositionMap) -> dict[str, list[float]]:
    """Lone-pair angles for every positioned atom that has lone pairs.

    Bond angles come from the flat ``positions``. The first atom (flat-solver
    centre) is placed with the molecule's geometry when it has two or more
    bonds; single-bonded atoms use the terminal table; anything else uses the
    gap heuristic.
    """
    from vseprlayout.flat import atom_bond_angles

    bond_angles = atom_bond_angles(molecule, positions)
    center = find_central_atom(molecule, CenterConvention.ORDER)
    out: dict[str, list[float]] = {}
    for a in molecule.atoms:
        if a.lone_pairs <= 0 or a.id not in positions:
            continue
        angles = bond_angles.get(a.id, [])
        if a.id == center and len(angles) > 1:
            out[a.id] = lone_pair_angles(angles, a.lone_pairs, molecule.geometry, LonePairRole.CENTRAL)
        elif len(angles) == 1:
            out[a.id] = lone_pair_angles(angles, a.lone_pairs, role=LonePairRole.TERMINAL)
        else:
            out[a.id] = lone_pair_angles(angles, a.lone_pairs, role=LonePairRole.CENTRAL)
    return out


def lone_pair_dots(center: Point2D, angle: float, distance: float, dot_size: float = 4.0) -> LonePairDots:
    """Pair centre at ``distance`` along ``angle`` and two dots either side of it."""
    from vseprlayout.flat import position_at_angle

    pair = position_at_angle(center, angle, distance)
    half = dot_size * _DOT_SPACING / 2
    d1 = position_at_angle(pair, angle + 90.0, half)
    d2 = position_at_angle(pair, angle + 270.0, half)
    return LonePairDots(angle=norm_deg(angle), center=pair, dots=(d1, d2))
