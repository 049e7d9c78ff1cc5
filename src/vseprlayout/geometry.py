"""Idealized VSEPR direction tables.

Two frames are used throughout the package:

* **scene** (3D): x right, y up, z toward the viewer, unit bond length.
* **screen** (2D): canvas pixels, y down; angles in degrees with 0° pointing
  right and increasing clockwise.

Each shape has both a 3D table and a 2D table (the textbook wedge/dash
drawing of the shape), with the same slot order so slot *i* in one frame is
the same bonded neighbour as slot *i* in the other.
"""

from __future__ import annotations

from enum import Enum

import numpy as np


class Geometry(Enum):
    """Closed vocabulary of molecular shapes."""

    LINEAR = "linear"
    BENT = "bent"
    TRIGONAL_PLANAR = "trigonal-planar"
    TRIGONAL_PYRAMIDAL = "trigonal-pyramidal"
    TETRAHEDRAL = "tetrahedral"
    TRIGONAL_BIPYRAMIDAL = "trigonal-bipyramidal"
    SEE_SAW = "see-saw"
    T_SHAPED = "t-shaped"
    SQUARE_PLANAR = "square-planar"
    SQUARE_PYRAMIDAL = "square-pyramidal"
    OCTAHEDRAL = "octahedral"

    @classmethod
    def parse(cls, name: str | Geometry | None) -> Geometry | None:
        """Resolve a shape name; anything unrecognised is ``None`` (no shape information).

        Examples
        --------
        >>> Geometry.parse("Trigonal Planar")
        <Geometry.TRIGONAL_PLANAR: 'trigonal-planar'>
        >>> Geometry.parse("seesaw")
        <Geometry.SEE_SAW: 'see-saw'>
        >>> Geometry.parse("hexagonal") is None
        True
        """
        if name is None or isinstance(name, Geometry):
            return name
        key = str(name).strip().lower().replace("_", "-").replace(" ", "-")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_ALIASES = {"seesaw": "see-saw", "tshaped": "t-shaped", "bent-2": "bent", "bent-4": "bent"}

_T1 = 1.0 / 3.0  # tetrahedral: cos(109.47°) = -1/3
_TX = np.sqrt(2.0 / 3.0)
_TZ = np.sqrt(2.0 / 9.0)
_TB = np.sqrt(8.0 / 9.0)
_C60 = 0.5
_S60 = np.sqrt(3.0) / 2.0
_BX = np.sin(np.radians(104.5 / 2))  # water H-O-H
_BY = np.cos(np.radians(104.5 / 2))

_UP = (0.0, 1.0, 0.0)
_DOWN = (0.0, -1.0, 0.0)
_RIGHT = (1.0, 0.0, 0.0)
_LEFT = (-1.0, 0.0, 0.0)
_FRONT = (0.0, 0.0, 1.0)
_BACK = (0.0, 0.0, -1.0)

# Tetrahedral base: front-left, front-right, back (apex is _UP)
_TET_FL = (-_TX, -_T1, _TZ)
_TET_FR = (_TX, -_T1, _TZ)
_TET_BK = (0.0, -_T1, -_TB)

# Trigonal-bipyramidal equator: right, front-left, back-left
_EQ_R = _RIGHT
_EQ_F = (-_C60, 0.0, _S60)
_EQ_B = (-_C60, 0.0, -_S60)

_SCENE: dict[Geometry, list[tuple[float, float, float]]] = {
    Geometry.LINEAR: [_LEFT, _RIGHT],
    Geometry.BENT: [(-_BX, -_BY, 0.0), (_BX, -_BY, 0.0)],
    Geometry.TRIGONAL_PLANAR: [_UP, (_S60, -_C60, 0.0), (-_S60, -_C60, 0.0)],
    Geometry.TRIGONAL_PYRAMIDAL: [_TET_FL, _TET_FR, _TET_BK],
    Geometry.TETRAHEDRAL: [_UP, _TET_FL, _TET_FR, _TET_BK],
    Geometry.TRIGONAL_BIPYRAMIDAL: [_UP, _DOWN, _EQ_R, _EQ_F, _EQ_B],
    Geometry.SEE_SAW: [_UP, _DOWN, _EQ_F, _EQ_B],
    Geometry.T_SHAPED: [_UP, _DOWN, _EQ_R],
    Geometry.SQUARE_PLANAR: [_RIGHT, _FRONT, _LEFT, _BACK],
    Geometry.SQUARE_PYRAMIDAL: [_UP, _RIGHT, _FRONT, _LEFT, _BACK],
    Geometry.OCTAHEDRAL: [_UP, _DOWN, _RIGHT, _FRONT, _LEFT, _BACK],
}

# Screen angles of the same slots. Front atoms are drawn lower-left, back atoms upper-right.
_SCREEN_ANGLES: dict[Geometry, list[float]] = {
    Geometry.LINEAR: [180.0, 0.0],
    Geometry.BENT: [90.0 + 104.5 / 2, 90.0 - 104.5 / 2],
    Geometry.TRIGONAL_PLANAR: [270.0, 30.0, 150.0],
    Geometry.TRIGONAL_PYRAMIDAL: [150.0, 30.0, 90.0],
    Geometry.TETRAHEDRAL: [270.0, 150.0, 30.0, 90.0],
    Geometry.TRIGONAL_BIPYRAMIDAL: [270.0, 90.0, 0.0, 150.0, 210.0],
    Geometry.SEE_SAW: [270.0, 90.0, 150.0, 210.0],
    Geometry.T_SHAPED: [270.0, 90.0, 0.0],
    Geometry.SQUARE_PLANAR: [0.0, 135.0, 180.0, 315.0],
    Geometry.SQUARE_PYRAMIDAL: [270.0, 0.0, 135.0, 180.0, 315.0],
    Geometry.OCTAHEDRAL: [270.0, 90.0, 0.0, 135.0, 180.0, 315.0],
}

_SCENE_TABLE = {g: np.array(v, dtype=float) for g, v in _SCENE.items()}
_SCREEN_TABLE = {
    g: np.column_stack([np.cos(np.radians(a)), np.sin(np.radians(a))]) for g, a in _SCREEN_ANGLES.items()
}


def directions_3d(geometry: str | Geometry | None) -> np.ndarray | None:
    """Unit scene vectors ``(N, 3)`` for a shape, or None when the shape is unknown."""
    g = Geometry.parse(geometry)
    if g is None:
        return None
    return _SCENE_TABLE[g].copy()


def directions_2d(geometry: str | Geometry | None) -> np.ndarray | None:
    """Unit screen vectors ``(N, 2)`` for a shape, or None when the shape is unknown."""
    g = Geometry.parse(geometry)
    if g is None:
        return None
    return _SCREEN_TABLE[g].copy()


def screen_angles(geometry: str | Geometry | None) -> list[float] | None:
    """Screen angles (degrees) of a shape's 2D table, or None."""
    g = Geometry.parse(geometry)
    if g is None:
        return None
    return list(_SCREEN_ANGLES[g])
