"""Full layout for a rendering layer: positions, bonds, lone pairs and depth cues."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from vseprlayout.depth import config_depth_styles, geometry_depth_styles
from vseprlayout.dipole import dipole_arrow, dipole_length, net_dipole_direction
from vseprlayout.elements import element_style
from vseprlayout.flat import flat_layout
from vseprlayout.geometry import Geometry
from vseprlayout.graph import CenterConvention, find_central_atom
from vseprlayout.lonepairs import lone_pair_dots, place_lone_pairs
from vseprlayout.spatial import spatial_layout
from vseprlayout.types import LayoutConfig

if TYPE_CHECKING:
    from vseprlayout.types import Atom, DepthStyle, Molecule, PositionMap

logger = logging.getLogger(__name__)


class DisplayMode(Enum):
    """Which solver a caller wants."""

    FLAT = "flat"
    SPATIAL = "spatial"


def compute_layout(
    molecule: Molecule,
    config: LayoutConfig | None = None,
    mode: DisplayMode | str = DisplayMode.FLAT,
    *,
    lone_pairs: bool = True,
) -> dict[str, Any]:
    """Lay out ``molecule`` and return a JSON-ready description of the result.

    Flat mode gives canvas-pixel positions, trimmed bond segments, lone-pair
    dots and table-driven depth cues. Spatial mode gives scene positions in
    bond-length units with depth cues from each atom's z. Nothing is cached;
    callers that redraw often should memoize on the molecule and config.
    """
    cfg = config or LayoutConfig()
    mode = DisplayMode(mode)
    shape = Geometry.parse(molecule.geometry)
    out: dict[str, Any] = {
        "id": molecule.id,
        "formula": molecule.formula,
        "name": molecule.name,
        "geometry": shape.value if shape else None,
        "mode": mode.value,
    }
    if mode is DisplayMode.FLAT:
        out.update(_flat(molecule, cfg, lone_pairs))
    else:
        out.update(_spatial(molecule, cfg))
    logger.debug("Layout %s (%s): %d atoms, %d bonds", molecule.id, mode.value, len(out["atoms"]), len(out["bonds"]))
    return out


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _flat(molecule: Molecule, cfg: LayoutConfig, lone_pairs: bool) -> dict[str, Any]:
    layout = flat_layout(molecule, cfg)
    angles = place_lone_pairs(molecule, layout.positions) if lone_pairs else {}
    depth = geometry_depth_styles(molecule, opacity_floor=cfg.opacity_floor, scale_floor=cfg.scale_floor)

    atoms = []
    for a in molecule.atoms:
        p = layout.positions.get(a.id)
        if p is None:
            continue
        radius = layout.radii[a.id]
        entry = _atom_entry(a, p, depth.get(a.id))
        entry["radius"] = radius
        if a.id in angles:
            entry["lonePairs"] = []
            for angle in angles[a.id]:
                dots = lone_pair_dots(p, angle, radius + cfg.lone_pair_gap, cfg.dot_size)
                entry["lonePairs"].append(
                    {"angle": dots.angle, "center": list(dots.center), "dots": [list(d) for d in dots.dots]}
                )
        atoms.append(entry)

    bonds = [
        {"from": s.from_id, "to": s.to_id, "type": s.type.value, "start": list(s.start), "end": list(s.end)}
        for s in layout.segments
    ]
    center = find_central_atom(molecule, CenterConvention.ORDER)
    out: dict[str, Any] = {
        "center": center,
        "width": cfg.width,
        "height": cfg.height,
        "atoms": atoms,
        "bonds": bonds,
    }
    dipole = _dipole_entry(molecule, layout.positions, center, cfg)
    if dipole is not None:
        out["dipole"] = dipole
    return out


def _spatial(molecule: Molecule, cfg: LayoutConfig) -> dict[str, Any]:
    positions = spatial_layout(molecule, cfg)
    depth = config_depth_styles(positions, cfg)
    atoms = []
    for a in molecule.atoms:
        entry = _atom_entry(a, positions[a.id], depth.get(a.id))
        entry["radiusFactor"] = element_style(a.symbol).radius_factor
        atoms.append(entry)
    bonds = [
        {"from": b.from_id, "to": b.to_id, "type": b.type.value}
        for b in molecule.bonds
        if b.from_id in positions and b.to_id in positions and b.from_id != b.to_id
    ]
    return {
        "center": find_central_atom(molecule, CenterConvention.DEGREE),
        "bondLength": cfg.bond_length,
        "atoms": atoms,
        "bonds": bonds,
    }


def _atom_entry(atom: Atom, position: tuple[float, ...], depth: DepthStyle | None) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": atom.id,
        "symbol": atom.symbol,
        "position": list(position),
        "color": element_style(atom.symbol).color.hex,
    }
    if depth is not None:
        entry["depth"] = {"opacity": depth.opacity, "scale": depth.scale}
    if atom.formal_charge is not None:
        entry["formalCharge"] = atom.formal_charge
    if atom.partial_charge is not None:
        entry["partialCharge"] = atom.partial_charge
    if atom.is_radical:
        entry["isRadical"] = True
    return entry


def _dipole_entry(
    molecule: Molecule, positions: PositionMap, center: str | None, cfg: LayoutConfig
) -> dict[str, Any] | None:
    """Arrow on the anchor atom (or the centroid), pointing at the partial-negative end.

    An explicit ``molecule.dipole`` wins; a polar molecule without one falls
    back to its partial charges. Nothing is drawn otherwise.
    """
    if not positions:
        return None
    magnitude = None
    if molecule.dipole is not None:
        direction = molecule.dipole.direction
        magnitude = molecule.dipole.magnitude
    elif molecule.is_polar:
        direction = net_dipole_direction(molecule, positions)
        if direction is None:
            logger.debug("%s is polar but has no partial charges; no dipole arrow", molecule.id)
            return None
    else:
        return None

    if center is not None and center in positions:
        origin = positions[center]
    else:
        xs = [p[0] for p in positions.values()]
        ys = [p[1] for p in positions.values()]
        origin = (sum(xs) / len(xs), sum(ys) / len(ys))
    arrow = dipole_arrow(origin, direction, dipole_length(cfg.width, cfg.height, magnitude))
    return {
        "direction": direction.value,
        "magnitude": magnitude,
        "tail": list(arrow.tail),
        "head": list(arrow.head),
        "headBase": list(arrow.head_base),
        "headLeft": list(arrow.head_left),
        "headRight": list(arrow.head_right),
        "crossbar": [list(p) for p in arrow.crossbar],
        "positiveLabel": list(arrow.positive_label),
        "negativeLabel": list(arrow.negative_label),
    }
