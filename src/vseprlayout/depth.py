"""Depth cues for flat rendering: z → (opacity, scale)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from vseprlayout.geometry import directions_3d
from vseprlayout.spatial import DEFAULT_BOND_LENGTH
from vseprlayout.types import DepthStyle

if TYPE_CHECKING:
    from vseprlayout.types import LayoutConfig, Molecule, PositionMap

NEAR = 1.0  # z at or above this is drawn at full strength
FAR = -1.0  # z at or below this is drawn at the floors
OPACITY_FLOOR = 0.4
SCALE_FLOOR = 0.7


def depth_style(
    z: float,
    *,
    near: float = NEAR,
    far: float = FAR,
    opacity_floor: float = OPACITY_FLOOR,
    scale_floor: float = SCALE_FLOOR,
) -> DepthStyle:
    """Linear fade from full strength at ``near`` to the floors at ``far``, clamped.

    Examples
    --------
    >>> depth_style(1.0)
    DepthStyle(opacity=1.0, scale=1.0)
    """
    span = max(near - far, 1e-6)
    fade = float(np.clip((near - z) / span, 0.0, 1.0))  # 0 = near, 1 = far
    return DepthStyle(
        opacity=max(opacity_floor, 1.0 - (1.0 - opacity_floor) * fade),
        scale=max(scale_floor, 1.0 - (1.0 - scale_floor) * fade),
    )


def depth_styles(
    positions: PositionMap,
    bond_length: float = DEFAULT_BOND_LENGTH,
    *,
    opacity_floor: float = OPACITY_FLOOR,
    scale_floor: float = SCALE_FLOOR,
) -> dict[str, DepthStyle]:
    """Depth style per atom of a spatial layout, z measured in bond lengths."""
    bl = max(bond_length, 1e-6)
    out = {}
    for aid, p in positions.items():
        z = p[2] / bl if len(p) > 2 else 0.0
        out[aid] = depth_style(z, opacity_floor=opacity_floor, scale_floor=scale_floor)
    return out


def geometry_depth_styles(
    molecule: Molecule,
    *,
    opacity_floor: float = OPACITY_FLOOR,
    scale_floor: float = SCALE_FLOOR,
) -> dict[str, DepthStyle]:
    """Depth style straight from the shape table, matching the flat layout's slot order.

    The first atom is the centre at full strength; atom *i* takes the z of
    table slot *i - 1*. Atoms past the end of the table get no entry. Without
    a known geometry the result is empty.
    """
    table = directions_3d(molecule.geometry)
    if table is None or not molecule.atoms:
        return {}
    out = {molecule.atoms[0].id: DepthStyle()}
    for a, d in zip(molecule.atoms[1:], table, strict=False):
        out[a.id] = depth_style(float(d[2]), opacity_floor=opacity_floor, scale_floor=scale_floor)
    return out


def config_depth_styles(positions: PositionMap, config: LayoutConfig) -> dict[str, DepthStyle]:
    """:func:`depth_styles` with bond length and floors from a :class:`LayoutConfig`."""
    return depth_styles(
        positions,
        config.bond_length,
        opacity_floor=config.opacity_floor,
        scale_floor=config.scale_floor,
    )
