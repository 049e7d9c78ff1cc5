"""Flat (2D) position solver.

Screen frame: canvas pixels, y down; angles in degrees, 0° pointing right,
increasing clockwise. The first atom is the anchor (``CenterConvention.ORDER``);
every other atom is placed one bond away from it, in atom-list order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np

from vseprlayout.elements import radius_factor
from vseprlayout.geometry import screen_angles
from vseprlayout.graph import CenterConvention, find_central_atom
from vseprlayout.lonepairs import gap_lone_pair_angles
from vseprlayout.types import BondSegment, FlatLayout
from vseprlayout.utils import EPS, as_tuple, norm_deg, safe_norm

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vseprlayout.types import LayoutConfig, Molecule, Point2D, PositionMap

logger = logging.getLogger(__name__)


def layout_flat(
    molecule: Molecule,
    width: float,
    height: float,
    atom_radius: float,
    *,
    angles: Sequence[float] | None = None,
    margin: float | None = None,
    max_bond_px: float | None = None,
) -> PositionMap:
    """Canvas positions for every atom, centred and scaled to fit ``width`` x ``height``.

    Directions for the non-anchor atoms come from ``angles`` if given, else
    from the molecule's geometry table, else an even spread. Atoms beyond the
    end of the chosen scheme fill the largest remaining angular gaps.
    """
    if not molecule.atoms:
        return {}
    anchor = find_central_atom(molecule, CenterConvention.ORDER)
    others = [a.id for a in molecule.atoms[1:]]

    dirs = _directions(len(others), molecule.geometry, angles)
    unit_pos = np.vstack([np.zeros((1, 2)), dirs])
    scale, offset = _fit_canvas(unit_pos, atom_radius, width, height, margin, max_bond_px)
    pos = unit_pos * scale + offset

    logger.debug(
        "Flat layout %s: %d atoms, anchor=%s, scale=%.2f", molecule.id, len(molecule.atoms), anchor, scale
    )
    return {aid: as_tuple(p) for aid, p in zip([anchor, *others], pos, strict=True)}


def bond_endpoints(p1: Point2D, p2: Point2D, r1: float, r2: float) -> tuple[Point2D, Point2D]:
    """Where the line between two atom centres leaves each atom's circle.

    Examples
    --------
    >>> bond_endpoints((0, 0), (100, 0), 10, 15)
    ((10.0, 0.0), (85.0, 0.0))
    """
    a = np.asarray(p1, dtype=float)
    b = np.asarray(p2, dtype=float)
    d = b - a
    u = d / safe_norm(d)
    return as_tuple(a + u * r1), as_tuple(b - u * r2)


def calculate_angle(p_from: Point2D, p_to: Point2D) -> float:
    """Screen angle (degrees, [0, 360)) of the direction from one point to another.

    Examples
    --------
    >>> calculate_angle((0, 0), (0, 10))
    90.0
    """
    dx = float(p_to[0]) - float(p_from[0])
    dy = float(p_to[1]) - float(p_from[1])
    if abs(dx) < EPS and abs(dy) < EPS:
        return 0.0
    return norm_deg(np.degrees(np.arctan2(dy, dx)))


def position_at_angle(center: Point2D, angle: float, distance: float) -> Point2D:
    """Point ``distance`` away from ``center`` along screen angle ``angle``."""
    rad = np.radians(angle)
    return (float(center[0] + np.cos(rad) * distance), float(center[1] + np.sin(rad) * distance))


def bond_segments(
    molecule: Molecule,
    positions: PositionMap,
    radii: Mapping[str, float] | float,
) -> list[BondSegment]:
    """Trimmed bond lines for every bond whose two atoms are positioned."""
    segments = []
    for idx, b in enumerate(molecule.bonds):
        p1, p2 = positions.get(b.from_id), positions.get(b.to_id)
        if p1 is None or p2 is None:
            logger.debug("Bond %d (%s-%s) has an unpositioned end; skipped", idx, b.from_id, b.to_id)
            continue
        r1, r2 = _radius(radii, b.from_id), _radius(radii, b.to_id)
        start, end = bond_endpoints(p1[:2], p2[:2], r1, r2)
        segments.append(BondSegment(b.from_id, b.to_id, start, end, b.type))
    return segments


def atom_bond_angles(molecule: Molecule, positions: PositionMap) -> dict[str, list[float]]:
    """Screen angle of every bond leaving each positioned atom, in bond-list order."""
    out: dict[str, list[float]] = {aid: [] for aid in positions}
    for b in molecule.bonds:
        p1, p2 = positions.get(b.from_id), positions.get(b.to_id)
        if p1 is None or p2 is None or b.from_id == b.to_id:
            continue
        out[b.from_id].append(calculate_angle(p1, p2))
        out[b.to_id].append(calculate_angle(p2, p1))
    return out


def flat_layout(molecule: Molecule, config: LayoutConfig, angles: Sequence[float] | None = None) -> FlatLayout:
    """Solve positions and trimmed bonds using a :class:`LayoutConfig`.

    Each atom's drawn radius is the configured radius times its element factor.
    """
    radii = {a.id: config.atom_radius * radius_factor(a.symbol) for a in molecule.atoms}
    fit_radius = max(radii.values(), default=config.atom_radius)
    positions = layout_flat(
        molecule,
        config.width,
        config.height,
        fit_radius,
        angles=angles,
        margin=config.margin,
        max_bond_px=config.max_bond_px,
    )
    return FlatLayout(positions=positions, segments=bond_segments(molecule, positions, radii), radii=radii)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _even_angles(n: int) -> list[float]:
    """Default spread: one or two neighbours lie on the horizontal, more start at "up"."""
    if n <= 2:
        return [0.0] if n == 1 else [180.0, 0.0][:n]
    step = 360.0 / n
    return [norm_deg(270.0 + i * step) for i in range(n)]


def _directions(n: int, geometry, angles: Sequence[float] | None) -> np.ndarray:
    """Unit screen vectors ``(n, 2)`` for the non-anchor atoms."""
    if n == 0:
        return np.zeros((0, 2))
    if angles is not None:
        scheme = [norm_deg(a) for a in angles][:n]
    else:
        scheme = (screen_angles(geometry) or [])[:n]
    if not scheme:
        scheme = _even_angles(n)
    elif len(scheme) < n:
        logger.debug("Angular scheme has %d slots for %d atoms; filling gaps", len(scheme), n)
        scheme = scheme + gap_lone_pair_angles(scheme, n - len(scheme))
    rad = np.radians(scheme)
    return np.column_stack([np.cos(rad), np.sin(rad)])


def _fit_canvas(unit_pos, radius, width, height, margin, max_bond_px):
    """Uniform scale + offset so the padded unit layout fits the canvas, centred."""
    pad = (radius if margin is None else margin) + radius
    lo = unit_pos.min(axis=0)
    hi = unit_pos.max(axis=0)
    spans = hi - lo
    avail = np.maximum(np.array([width, height], dtype=float) - 2 * pad, EPS)
    candidates = [float(a / s) for a, s in zip(avail, spans, strict=True) if s > EPS]
    if max_bond_px is not None:
        candidates.append(float(max_bond_px))
    scale = min(candidates) if candidates else 0.0
    center = (lo + hi) / 2
    offset = np.array([width / 2, height / 2], dtype=float) - center * scale
    return scale, offset


def _radius(radii: Mapping[str, float] | float, atom_id: str) -> float:
    if isinstance(radii, Mapping):
        return float(radii.get(atom_id, 0.0))
    return float(radii)
