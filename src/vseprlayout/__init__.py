"""vseprlayout: VSEPR molecular layout for flat and 3D molecule views."""

from __future__ import annotations

import logging

from vseprlayout.builders import Substituent, diatomic, infer_geometry, lewis_molecule, vsepr_molecule
from vseprlayout.depth import depth_style, depth_styles, geometry_depth_styles
from vseprlayout.dipole import DipoleDirection, DipoleMoment, dipole_arrow
from vseprlayout.flat import bond_endpoints, bond_segments, calculate_angle, flat_layout, layout_flat
from vseprlayout.geometry import Geometry, directions_2d, directions_3d
from vseprlayout.graph import CenterConvention, find_central_atom
from vseprlayout.layout import DisplayMode, compute_layout
from vseprlayout.lonepairs import (
    LonePairRole,
    curated_lone_pair_angles,
    gap_lone_pair_angles,
    lone_pair_angles,
    place_lone_pairs,
)
from vseprlayout.spatial import fibonacci_sphere, layout_spatial, spatial_layout
from vseprlayout.types import Atom, Bond, BondType, DepthStyle, LayoutConfig, Molecule

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "CenterConvention",
    "DepthStyle",
    "DipoleDirection",
    "DipoleMoment",
    "DisplayMode",
    "Geometry",
    "LayoutConfig",
    "LonePairRole",
    "Molecule",
    "Substituent",
    "bond_endpoints",
    "bond_segments",
    "calculate_angle",
    "compute_layout",
    "configure_logging",
    "curated_lone_pair_angles",
    "depth_style",
    "depth_styles",
    "diatomic",
    "dipole_arrow",
    "directions_2d",
    "directions_3d",
    "fibonacci_sphere",
    "find_central_atom",
    "flat_layout",
    "gap_lone_pair_angles",
    "geometry_depth_styles",
    "infer_geometry",
    "layout_flat",
    "layout_spatial",
    "lewis_molecule",
    "lone_pair_angles",
    "place_lone_pairs",
    "spatial_layout",
    "vsepr_molecule",
]

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Attach a stderr handler to the package logger.

    ``debug`` wins over ``verbose``; with neither only warnings are shown.
    Calling again only adjusts the level.
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    pkg_logger = logging.getLogger("vseprlayout")
    pkg_logger.setLevel(level)
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        pkg_logger.addHandler(handler)
