"""Dipole-moment arrow geometry (screen frame).

The arrow runs from the partial-positive end (tail, with the conventional
crossbar) to the partial-negative end (head), centred on the molecule.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from vseprlayout.flat import position_at_angle

if TYPE_CHECKING:
    from vseprlayout.types import Molecule, Point2D, PositionMap

_POSITIVE = frozenset({"delta+", "positive", "+"})
_NEGATIVE = frozenset({"delta-", "negative", "-"})
_MIN_LENGTH = 40.0
_MAX_LENGTH = 100.0


class DipoleDirection(Enum):
    """Direction of the net dipole, toward the partial-negative end."""

    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"
    UP = "up"

    @property
    def angle(self) -> float:
        return _ANGLES[self]

    @classmethod
    def parse(cls, value: str | DipoleDirection | None) -> DipoleDirection:
        """Unknown directions point right."""
        if isinstance(value, DipoleDirection):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.RIGHT

    @classmethod
    def from_angle(cls, angle: float) -> DipoleDirection:
        """Nearest cardinal direction to a screen angle (degrees).

        Examples
        --------
        >>> DipoleDirection.from_angle(100.0)
        <DipoleDirection.DOWN: 'down'>
        """
        a = float(angle) % 360.0
        if a < 45.0 or a >= 315.0:
            return cls.RIGHT
        if a < 135.0:
            return cls.DOWN
        if a < 225.0:
            return cls.LEFT
        return cls.UP


_ANGLES = {
    DipoleDirection.RIGHT: 0.0,
    DipoleDirection.DOWN: 90.0,
    DipoleDirection.LEFT: 180.0,
    DipoleDirection.UP: 270.0,
}


@dataclass(frozen=True)
class DipoleMoment:
    """Net dipole of a molecule. ``magnitude`` (debye) only scales the drawn arrow."""

    direction: DipoleDirection
    magnitude: float | None = None


@dataclass(frozen=True)
class DipoleArrow:
    tail: Point2D  # delta+ end
    head: Point2D  # delta- end (arrow tip)
    head_base: Point2D  # where the shaft meets the arrowhead
    head_left: Point2D
    head_right: Point2D
    crossbar: tuple[Point2D, Point2D]
    positive_label: Point2D
    negative_label: Point2D


def dipole_arrow(
    center: Point2D,
    direction: str | DipoleDirection,
    length: float = 60.0,
    *,
    head_length: float = 12.0,
    head_width: float = 8.0,
    crossbar: float = 6.0,
    label_offset: float = 14.0,
) -> DipoleArrow:
    """Points of a dipole arrow of ``length`` pixels centred on ``center``."""
    angle = DipoleDirection.parse(direction).angle
    half = length / 2
    tail = position_at_angle(center, angle + 180.0, half)
    head = position_at_angle(center, angle, half)
    base = position_at_angle(head, angle + 180.0, head_length)
    return DipoleArrow(
        tail=tail,
        head=head,
        head_base=base,
        head_left=position_at_angle(base, angle + 90.0, head_width / 2),
        head_right=position_at_angle(base, angle - 90.0, head_width / 2),
        crossbar=(position_at_angle(tail, angle + 90.0, crossbar), position_at_angle(tail, angle - 90.0, crossbar)),
        positive_label=position_at_angle(tail, angle + 180.0, label_offset),
        negative_label=position_at_angle(head, angle, label_offset),
    )


def dipole_length(width: float, height: float, magnitude: float | None = None) -> float:
    """Arrow length for a molecule drawn ``width`` x ``height`` pixels.

    Examples
    --------
    >>> dipole_length(100.0, 80.0)
    48.0
    >>> dipole_length(100.0, 80.0, magnitude=5.0)
    96.0
    """
    length = min(width, height) * 0.6
    if magnitude:
        length *= min(magnitude, 2.0)
    return max(_MIN_LENGTH, min(length, _MAX_LENGTH))


def net_dipole_direction(molecule: Molecule, positions: PositionMap) -> DipoleDirection | None:
    """Cardinal direction from the mean partial-positive atom to the mean partial-negative atom.

    None unless both kinds of partial charge are present on positioned atoms.
    """
    pos, neg = [], []
    for a in molecule.atoms:
        p = positions.get(a.id)
        charge = (a.partial_charge or "").strip().lower()
        if p is None:
            continue
        if charge in _POSITIVE:
            pos.append(p[:2])
        elif charge in _NEGATIVE:
            neg.append(p[:2])
    if not pos or not neg:
        return None
    d = np.mean(neg, axis=0) - np.mean(pos, axis=0)
    return DipoleDirection.from_angle(np.degrees(np.arctan2(d[1], d[0])))
