"""Command-line interface for vseprlayout."""

from __future__ import annotations

import argparse
import logging
import sys

from vseprlayout.config import build_layout_config, load_config
from vseprlayout.io import load_molecule, load_stdin, write_json
from vseprlayout.layout import DisplayMode, compute_layout

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    p = argparse.ArgumentParser(
        prog="vseprlayout", description="Lay out VSEPR molecule descriptions for flat or 3D rendering."
    )

    # --- Input / Output ---
    io_g = p.add_argument_group("input/output")
    io_g.add_argument("input", nargs="?", help="Molecule JSON file (reads stdin if omitted)")
    io_g.add_argument("-o", "--output", default=None, help="Output JSON file (default: stdout)")
    io_g.add_argument("--debug", action="store_true", help="Debug output")

    # --- Layout ---
    layout_g = p.add_argument_group("layout")
    layout_g.add_argument(
        "--mode", choices=[m.value for m in DisplayMode], default=DisplayMode.FLAT.value, help="Solver (default: flat)"
    )
    layout_g.add_argument("--config", default=None, help="Config preset or JSON path (default, sm, md, lg)")
    layout_g.add_argument("-W", "--width", type=int, default=None, help="Canvas width (px)")
    layout_g.add_argument("-H", "--height", type=int, default=None, help="Canvas height (px)")
    layout_g.add_argument("-r", "--atom-radius", type=float, default=None, help="Base atom radius (px)")
    layout_g.add_argument("-L", "--bond-length", type=float, default=None, help="3D bond length (scene units)")
    layout_g.add_argument(
        "--lone-pairs",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Lone-pair placement (flat mode, default: on)",
    )

    args = p.parse_args(argv)

    from vseprlayout import configure_logging

    configure_logging(verbose=args.output is not None, debug=args.debug)

    if args.lone_pairs is not None and args.mode == DisplayMode.SPATIAL.value:
        logger.warning("--lone-pairs ignored in spatial mode")

    # Build config: preset/JSON base + CLI overrides
    cli_overrides = {
        "width": args.width,
        "height": args.height,
        "atom_radius": args.atom_radius,
        "bond_length": args.bond_length,
    }
    try:
        cfg = build_layout_config(load_config(args.config or "default"), cli_overrides)
    except (OSError, ValueError, TypeError) as e:
        p.error(str(e))

    try:
        if args.input:
            molecule = load_molecule(args.input)
        elif not sys.stdin.isatty():
            molecule = load_stdin()
        else:
            p.error("No input file and stdin is a terminal")
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        p.error(f"Cannot read molecule: {e}")

    result = compute_layout(molecule, cfg, args.mode, lone_pairs=args.lone_pairs is not False)
    write_json(result, args.output)


if __name__ == "__main__":
    main()
