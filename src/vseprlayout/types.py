"""Core types for vseprlayout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from vseprlayout.dipole import DipoleMoment
    from vseprlayout.geometry import Geometry

Point2D: TypeAlias = tuple[float, float]
PositionMap: TypeAlias = dict[str, tuple[float, ...]]


class BondType(Enum):
    """Bond order as authored. Layout treats every order as one domain."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"

    @classmethod
    def parse(cls, value: str | BondType | None) -> BondType:
        """Lenient parse: unknown or missing values are single bonds.

        Examples
        --------
        >>> BondType.parse("Double")
        <BondType.DOUBLE: 'double'>
        >>> BondType.parse("aromatic")
        <BondType.SINGLE: 'single'>
        """
        if isinstance(value, BondType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.SINGLE


@dataclass(frozen=True)
class Atom:
    """One atom of a molecule description. Charges are carried, never used for layout."""

    id: str
    symbol: str
    lone_pairs: int = 0
    formal_charge: int | None = None
    partial_charge: str | None = None  # "delta+" / "delta-"
    is_radical: bool = False


@dataclass(frozen=True)
class Bond:
    """Connection between two atom ids."""

    from_id: str
    to_id: str
    type: BondType = BondType.SINGLE

    def other(self, atom_id: str) -> str | None:
        """Endpoint opposite ``atom_id``, or None if ``atom_id`` is not on this bond."""
        if self.from_id == atom_id:
            return self.to_id
        if self.to_id == atom_id:
            return self.from_id
        return None


@dataclass(frozen=True)
class Molecule:
    """Immutable molecule description.

    Atom order is meaningful: the first atom is the conventional centre for
    the flat solver. Instances are hashable, so callers that re-run layouts on
    every redraw can memoize on ``(molecule, config values)``.
    """

    id: str
    formula: str
    atoms: tuple[Atom, ...] = ()
    bonds: tuple[Bond, ...] = ()
    geometry: Geometry | None = None
    name: str | None = None
    is_polar: bool | None = None
    dipole: DipoleMoment | None = None  # net dipole, when the author gives one

    def atom(self, atom_id: str) -> Atom | None:
        """Look up an atom by id."""
        for a in self.atoms:
            if a.id == atom_id:
                return a
        return None

    @property
    def atom_ids(self) -> list[str]:
        return [a.id for a in self.atoms]


@dataclass(frozen=True)
class Color:
    """RGB color (0-255).

    Examples
    --------
    >>> Color(255, 0, 0).hex
    '#ff0000'
    """

    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        """CSS hex string."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @classmethod
    def from_int(cls, value: int) -> Color:
        """From ``0xff0000``.

        Examples
        --------
        >>> Color.from_int(0xFF0000)
        Color(r=255, g=0, b=0)
        """
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


@dataclass(frozen=True)
class BondSegment:
    """Bond line trimmed to the atom circles (canvas pixels)."""

    from_id: str
    to_id: str
    start: Point2D
    end: Point2D
    type: BondType = BondType.SINGLE


@dataclass(frozen=True)
class DepthStyle:
    """Opacity and scale multipliers for a pseudo-3D depth cue."""

    opacity: float = 1.0
    scale: float = 1.0


@dataclass(frozen=True)
class LonePairDots:
    """Drawable points of one lone pair: the pair centre and its two dots."""

    angle: float
    center: Point2D
    dots: tuple[Point2D, Point2D]


@dataclass
class FlatLayout:
    """2D solver output: atom centres plus trimmed bond segments."""

    positions: PositionMap = field(default_factory=dict)
    segments: list[BondSegment] = field(default_factory=list)
    radii: dict[str, float] = field(default_factory=dict)


@dataclass
class LayoutConfig:
    """Layout settings."""

    width: int = 250
    height: int = 250
    atom_radius: float = 18.0
    margin: float | None = None  # defaults to atom_radius
    max_bond_px: float | None = 90.0  # cap on bond length in pixels (None = fit only)
    bond_length: float = 1.5  # spatial solver, in arbitrary scene units
    lone_pair_gap: float = 8.0  # pixels between atom edge and lone-pair centre
    dot_size: float = 4.0
    opacity_floor: float = 0.4
    scale_floor: float = 0.7
