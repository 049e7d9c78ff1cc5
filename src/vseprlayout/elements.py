"""Per-element display hints: CPK color and relative atom radius."""

from __future__ import annotations

from dataclasses import dataclass

from xyzgraph import DATA

from vseprlayout.types import Color

# CPK colors by atomic number. Index 0 unused.
_CPK: list[int] = [
    0x999999,
    0xFFFFFF, 0xD9FFFF,                                                         # H, He
    0xCC80FF, 0xC2FF00, 0xFFB5B5, 0x909090, 0x3050F8, 0xFF0D0D, 0x90E050, 0xB3E3F5,  # Li-Ne
    0xAB5CF2, 0x8AFF00, 0xBFA6A6, 0xF0C8A0, 0xFF8000, 0xFFFF30, 0x1FF01F, 0x80D1E3,  # Na-Ar
    0x8F40D4, 0x3DFF00, 0xE6E6E6, 0xBFC2C7, 0xA6A6AB, 0x8A99C7, 0x9C7AC7, 0xE06633, 0xF090A0, 0x50D050,  # K-Ni
    0xC88033, 0x7D80B0, 0xC28F8F, 0x668F8F, 0xBD80E3, 0xFFA100, 0xA62929, 0x5CB8D1,  # Cu-Kr
    0x702EB0, 0x00FF00, 0x94FFFF, 0x94E0E0, 0x73C2C9, 0x54B5B5, 0x3B9E9E, 0x248F8F, 0x0A7D8C, 0x006985,  # Rb-Pd
    0xC0C0C0, 0xFFD98F, 0xA67573, 0x668080, 0x9E63B5, 0xD47A00, 0x940094, 0x429EB0,  # Ag-Xe
]  # fmt: skip

_DEFAULT_COLOR = 0xA0A0A0
_DEFAULT_VDW = 1.5  # Å, for symbols xyzgraph does not know
_H_SHRINK = 0.6  # hydrogens drawn smaller than their VdW ratio suggests
_MIN_FACTOR = 0.5
_MAX_FACTOR = 1.6


@dataclass(frozen=True)
class ElementStyle:
    """Display hints for one element symbol."""

    symbol: str
    color: Color
    radius_factor: float  # multiplier on the configured atom radius (carbon = 1)


def get_color(symbol: str) -> Color:
    """CPK color for an element symbol; grey for unknown symbols."""
    z = DATA.s2n.get(symbol, 0)
    if 0 < z < len(_CPK):
        return Color.from_int(_CPK[z])
    return Color.from_int(_DEFAULT_COLOR)


def radius_factor(symbol: str) -> float:
    """Van der Waals radius relative to carbon, clamped to a drawable range."""
    ref = DATA.vdw.get("C", _DEFAULT_VDW)
    r = DATA.vdw.get(symbol, _DEFAULT_VDW) * (_H_SHRINK if symbol == "H" else 1.0)
    return min(_MAX_FACTOR, max(_MIN_FACTOR, r / ref))


def element_style(symbol: str) -> ElementStyle:
    return ElementStyle(symbol=symbol, color=get_color(symbol), radius_factor=radius_factor(symbol))
