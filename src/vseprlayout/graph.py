"""Connectivity analysis: bond graph, bond degree and central-atom conventions."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from vseprlayout.types import Molecule

logger = logging.getLogger(__name__)


class CenterConvention(Enum):
    """How a solver picks its reference atom.

    ``ORDER``: the first atom in the list (flat solver, authored order).
    ``DEGREE``: the atom with the most bonds, ties to the earliest atom
    (spatial solver, independent of atom order).
    """

    ORDER = "order"
    DEGREE = "degree"


def bond_graph(molecule: Molecule) -> nx.MultiGraph:
    """Build a multigraph of the molecule: one node per atom, one edge per bond.

    Bonds that name an unknown atom, or join an atom to itself, are skipped.
    Repeated bonds between the same pair stay as parallel edges so every
    bond counts toward degree.
    """
    g = nx.MultiGraph()
    for a in molecule.atoms:
        g.add_node(a.id, symbol=a.symbol, lone_pairs=a.lone_pairs)
    for idx, b in enumerate(molecule.bonds):
        if b.from_id not in g or b.to_id not in g:
            logger.debug("Skipping bond %d (%s-%s): unknown atom id", idx, b.from_id, b.to_id)
            continue
        if b.from_id == b.to_id:
            logger.debug("Skipping bond %d: self-loop on %s", idx, b.from_id)
            continue
        g.add_edge(b.from_id, b.to_id, index=idx, type=b.type)
    return g


def bond_degrees(molecule: Molecule) -> dict[str, int]:
    """Number of bonds touching each atom (dangling bonds excluded)."""
    g = bond_graph(molecule)
    return {a.id: g.degree(a.id) for a in molecule.atoms}


def find_central_atom(molecule: Molecule, convention: CenterConvention = CenterConvention.DEGREE) -> str | None:
    """Reference atom id under ``convention``; None for an empty molecule."""
    if not molecule.atoms:
        return None
    if convention is CenterConvention.ORDER:
        return molecule.atoms[0].id
    degrees = bond_degrees(molecule)
    best = molecule.atoms[0].id
    for a in molecule.atoms:
        # strict ">" keeps the earliest atom on ties
        if degrees[a.id] > degrees[best]:
            best = a.id
    return best


def bonded_neighbors(molecule: Molecule, atom_id: str) -> list[str]:
    """Atoms bonded to ``atom_id`` in bond-list order, each listed once."""
    known = set(molecule.atom_ids)
    out: list[str] = []
    for b in molecule.bonds:
        other = b.other(atom_id)
        if other is None or other == atom_id or other not in known or other in out:
            continue
        out.append(other)
    return out
