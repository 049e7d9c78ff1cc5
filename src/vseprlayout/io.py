"""Molecule input parsing and layout output."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vseprlayout.builders import molecule_id
from vseprlayout.dipole import DipoleDirection, DipoleMoment
from vseprlayout.geometry import Geometry
from vseprlayout.types import Atom, Bond, BondType, Molecule

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def load_molecule(path: str | Path) -> Molecule:
    """Read a molecule description from a JSON file."""
    p = Path(path)
    logger.info("Loading %s", p)
    molecule = molecule_from_dict(json.loads(p.read_text()))
    logger.info("Loaded %s: %d atoms, %d bonds", molecule.id, len(molecule.atoms), len(molecule.bonds))
    return molecule


def load_stdin() -> Molecule:
    """Read a JSON molecule description from stdin."""
    return molecule_from_dict(json.loads(sys.stdin.read()))


def molecule_from_dict(data: Mapping[str, Any]) -> Molecule:
    """Build a :class:`Molecule` from its JSON form.

    Accepts camelCase (``lonePairs``, ``formalCharge``) or snake_case keys.
    Atoms without an ``id`` get ``"<symbol>-<index>"`` with the symbol
    lowercased (``"c-0"``). Unknown geometry names and bond types degrade to
    "no shape" and single bonds. ``dipole`` is either a direction name or an
    object with ``direction`` and an optional ``magnitude``.
    """
    if not isinstance(data, dict):
        msg = f"Molecule data must be a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    raw_atoms = data.get("atoms")
    if not isinstance(raw_atoms, list):
        msg = "Molecule data needs an 'atoms' list"
        raise ValueError(msg)

    atoms = [_atom_from_dict(i, a) for i, a in enumerate(raw_atoms)]
    bonds = [_bond_from_dict(i, b) for i, b in enumerate(data.get("bonds") or [])]

    geometry_name = data.get("geometry")
    geometry = Geometry.parse(geometry_name)
    if geometry_name and geometry is None:
        logger.debug("Unknown geometry %r; treating as absent", geometry_name)

    formula = data.get("formula") or "".join(a.symbol for a in atoms)
    return Molecule(
        id=str(data.get("id") or molecule_id(formula)),
        formula=formula,
        atoms=tuple(atoms),
        bonds=tuple(bonds),
        geometry=geometry,
        name=data.get("name"),
        is_polar=data.get("isPolar", data.get("is_polar")),
        dipole=_dipole_from_dict(data.get("dipole")),
    )


def write_json(data: dict, output: str | Path | None) -> None:
    """Write ``data`` as JSON to ``output``, or stdout when ``output`` is None or ``-``."""
    text = json.dumps(data, indent=2)
    if output is None or str(output) == "-":
        sys.stdout.write(text + "\n")
        return
    Path(output).write_text(text + "\n")
    logger.info("Wrote %s", output)


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _atom_from_dict(index: int, raw: Any) -> Atom:
    if not isinstance(raw, dict) or not raw.get("symbol"):
        msg = f"Atom {index} has no 'symbol'"
        raise ValueError(msg)
    symbol = str(raw["symbol"])
    lone_pairs = int(_pick(raw, "lonePairs", "lone_pairs", default=0))
    return Atom(
        id=str(raw.get("id") or f"{symbol.lower()}-{index}"),
        symbol=symbol,
        lone_pairs=max(0, lone_pairs),
        formal_charge=_pick(raw, "formalCharge", "formal_charge"),
        partial_charge=_pick(raw, "partialCharge", "partial_charge"),
        is_radical=bool(_pick(raw, "isRadical", "is_radical", default=False)),
    )


def _bond_from_dict(index: int, raw: Any) -> Bond:
    if not isinstance(raw, dict):
        msg = f"Bond {index} must be an object"
        raise ValueError(msg)
    a = _pick(raw, "from", "from_id")
    b = _pick(raw, "to", "to_id")
    if a is None or b is None:
        msg = f"Bond {index} needs 'from' and 'to'"
        raise ValueError(msg)
    return Bond(str(a), str(b), BondType.parse(raw.get("type")))


def _dipole_from_dict(raw: Any) -> DipoleMoment | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return DipoleMoment(DipoleDirection.parse(raw))
    if not isinstance(raw, dict) or not raw.get("direction"):
        msg = "Dipole must be a direction name or an object with a 'direction'"
        raise ValueError(msg)
    magnitude = raw.get("magnitude")
    return DipoleMoment(DipoleDirection.parse(raw["direction"]), None if magnitude is None else float(magnitude))
