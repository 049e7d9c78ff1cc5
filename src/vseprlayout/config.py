"""Layout presets and their merge into :class:`LayoutConfig`."""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path

from vseprlayout.types import LayoutConfig

logger = logging.getLogger(__name__)

_PRESET_DIR = Path(__file__).parent / "presets"
_FIELDS = frozenset(f.name for f in fields(LayoutConfig))


def preset_names() -> list[str]:
    """Names of the shipped presets."""
    return sorted(p.stem for p in _PRESET_DIR.glob("*.json"))


def load_config(name_or_path: str) -> dict:
    """Layout settings from a preset name (``default``, ``sm``, ``md``, ``lg``) or a JSON file.

    A preset name wins over a file of the same name in the working directory.
    """
    preset = _PRESET_DIR / f"{name_or_path}.json"
    source = preset if preset.exists() else Path(name_or_path)
    if not source.exists():
        msg = f"Config not found: {name_or_path!r} (built-in presets: {', '.join(preset_names())})"
        raise FileNotFoundError(msg)

    logger.debug("Loading config: %s", source)
    data = json.loads(source.read_text())
    if not isinstance(data, dict):
        msg = f"Config {source} must hold a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return data


def build_layout_config(config_data: dict, cli_overrides: dict) -> LayoutConfig:
    """Overlay explicitly set CLI values (non-None) on ``config_data``.

    Keys that are not :class:`LayoutConfig` fields raise ``TypeError``.
    """
    unknown = sorted(set(config_data) - _FIELDS)
    if unknown:
        msg = f"Unknown layout setting(s): {', '.join(unknown)}"
        raise TypeError(msg)
    merged = {**config_data, **{k: v for k, v in cli_overrides.items() if v is not None}}
    return LayoutConfig(**merged)
