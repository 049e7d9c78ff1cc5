"""Spatial (3D) position solver.

Scene frame: x right, y up, z toward the viewer, units of bond length.
The most-connected atom (``CenterConvention.DEGREE``) sits at the origin and
its bonded neighbours take the idealized directions of the molecule's
geometry. Neighbours the table cannot cover, and molecules without a known
shape, use an evenly spread golden-angle spiral.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from vseprlayout.geometry import Geometry, directions_3d
from vseprlayout.graph import CenterConvention, bonded_neighbors, find_central_atom
from vseprlayout.utils import as_tuple, unit

if TYPE_CHECKING:
    from vseprlayout.types import LayoutConfig, Molecule, PositionMap

logger = logging.getLogger(__name__)

DEFAULT_BOND_LENGTH = 1.5
SECOND_SHELL_OFFSET = 0.6  # best-effort offset from the parent atom, in bond lengths
PARK_RADIUS = 2.0  # atoms with no bonded path to the centre, in bond lengths
_GOLDEN_ANGLE = np.pi * (3.0 - np.sqrt(5.0))
_SIBLING_TILT = np.radians(35.0)  # fan-out of several second-shell atoms on one parent
_MIN_CANDIDATES = 64  # spiral candidates searched when topping up a partial table


def fibonacci_sphere(n: int) -> np.ndarray:
    """``n`` unit vectors on a golden-angle spiral, ``(n, 3)``, deterministic."""
    if n <= 0:
        return np.zeros((0, 3))
    i = np.arange(n, dtype=float)
    y = 1.0 - 2.0 * (i + 0.5) / n
    r = np.sqrt(np.clip(1.0 - y * y, 0.0, None))
    theta = _GOLDEN_ANGLE * i
    return np.column_stack([r * np.cos(theta), y, r * np.sin(theta)])


def even_directions(n: int) -> np.ndarray:
    """Evenly spread unit directions for ``n`` neighbours with no shape information.

    Two neighbours are placed opposite each other; the spiral's two-point
    case is not antipodal.
    """
    if n == 2:
        return np.array([[0.0, 1.0, 0.0], [0.0, -1.0, 0.0]])
    return fibonacci_sphere(n)


def layout_spatial(
    molecule: Molecule,
    bond_length: float = DEFAULT_BOND_LENGTH,
    geometry: str | Geometry | None = None,
) -> PositionMap:
    """3D positions for every atom with the most-connected atom at the origin.

    ``geometry`` overrides ``molecule.geometry``. An unrecognised name means
    "no shape information" and selects the spiral fallback.
    """
    if not molecule.atoms:
        return {}
    center = find_central_atom(molecule, CenterConvention.DEGREE)
    shape = Geometry.parse(geometry if geometry is not None else molecule.geometry)
    neighbors = bonded_neighbors(molecule, center)

    pos: dict[str, np.ndarray] = {center: np.zeros(3)}
    dirs = _neighbor_directions(len(neighbors), directions_3d(shape))
    for nid, d in zip(neighbors, dirs, strict=True):
        pos[nid] = d * bond_length

    best_effort_placement(molecule, pos, bond_length)
    logger.debug(
        "Spatial layout %s: center=%s, %d neighbors, shape=%s",
        molecule.id,
        center,
        len(neighbors),
        shape.value if shape else None,
    )
    return {a.id: as_tuple(pos[a.id]) for a in molecule.atoms}


def spatial_layout(molecule: Molecule, config: LayoutConfig) -> PositionMap:
    """:func:`layout_spatial` with the bond length from a :class:`LayoutConfig`."""
    return layout_spatial(molecule, bond_length=config.bond_length)


def best_effort_placement(molecule: Molecule, pos: dict[str, np.ndarray], bond_length: float) -> None:
    """Place every atom not yet in ``pos``, in place.

    An atom bonded to a positioned atom goes a fixed ``SECOND_SHELL_OFFSET``
    away from it, pointing away from the origin; further siblings on the same
    parent fan out around that direction. This keeps atoms from overlapping;
    it is not a geometric solve for multi-centre molecules. Atoms with no
    bonded path to anything positioned are parked on a spiral at
    ``PARK_RADIUS`` bond lengths.
    """
    pending = [a.id for a in molecule.atoms if a.id not in pos]
    if not pending:
        return
    park = fibonacci_sphere(len(pending)) * PARK_RADIUS * bond_length
    parked = 0
    children: dict[str, int] = {}
    while pending:
        placed = False
        for aid in list(pending):
            parent = _positioned_partner(molecule, aid, pos)
            if parent is None:
                continue
            k = children.get(parent, 0)
            children[parent] = k + 1
            pos[aid] = pos[parent] + _sibling_direction(pos[parent], k) * SECOND_SHELL_OFFSET * bond_length
            pending.remove(aid)
            placed = True
        if not placed:
            aid = pending.pop(0)
            logger.debug("Atom %s has no bonded path to the centre; parking it", aid)
            pos[aid] = park[parked]
            parked += 1


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _neighbor_directions(n: int, table: np.ndarray | None) -> np.ndarray:
    """Table directions in order; whatever the table cannot cover is spread evenly."""
    if n == 0:
        return np.zeros((0, 3))
    if table is None:
        return even_directions(n)
    if n <= len(table):
        return table[:n]
    logger.debug("Shape provides %d directions for %d neighbors; spreading the rest", len(table), n)
    return np.vstack([table, _spread_remainder(table, n - len(table))])


def _spread_remainder(used: np.ndarray, m: int) -> np.ndarray:
    """Greedily pick ``m`` spiral points that stay farthest from the directions already used."""
    cand = fibonacci_sphere(max(_MIN_CANDIDATES, 4 * (len(used) + m)))
    taken = used
    chosen = []
    for _ in range(m):
        closest = (cand @ taken.T).max(axis=1)  # cosine to nearest taken direction
        i = int(np.argmin(closest))
        chosen.append(cand[i])
        taken = np.vstack([taken, cand[i]])
        cand = np.delete(cand, i, axis=0)
    return np.array(chosen)


def _positioned_partner(molecule: Molecule, atom_id: str, pos: dict[str, np.ndarray]) -> str | None:
    """First atom (in bond-list order) bonded to ``atom_id`` that already has a position."""
    for b in molecule.bonds:
        other = b.other(atom_id)
        if other is not None and other != atom_id and other in pos:
            return other
    return None


def _sibling_direction(parent: np.ndarray, k: int) -> np.ndarray:
    """Outward direction from the origin through ``parent``, tilted for the k-th sibling."""
    out = unit(parent)
    if not out.any():
        out = np.array([0.0, 1.0, 0.0])
    if k == 0:
        return out
    # Orthonormal frame around the outward axis
    helper = np.array([1.0, 0.0, 0.0]) if abs(out[0]) < 0.9 else np.array([0.0, 0.0, 1.0])
    e1 = unit(np.cross(out, helper))
    e2 = np.cross(out, e1)
    phi = _GOLDEN_ANGLE * k
    return np.cos(_SIBLING_TILT) * out + np.sin(_SIBLING_TILT) * (np.cos(phi) * e1 + np.sin(phi) * e2)
