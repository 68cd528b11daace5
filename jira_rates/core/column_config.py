"""Load and expose report column sets from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import EXPORT_COLUMNS, REPORT_COLUMNS

logger = logging.getLogger(__name__)

_CACHE: dict[str, list[str]] | None = None


def _defaults() -> dict[str, list[str]]:
    return {"report": list(REPORT_COLUMNS), "export": list(EXPORT_COLUMNS)}


def load_column_sets(base_path: str | Path | None = None, *, reload: bool = False) -> dict[str, list[str]]:
    """Column sets keyed by name; ``columns.yaml`` next to the package overrides defaults.

    Unknown column names in the YAML are dropped so a typo cannot break the table.
    """
    global _CACHE
    if _CACHE is not None and not reload:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "columns.yaml"
    sets = _defaults()
    if yaml_path.exists():
        try:
            data = yaml.safe_load(yaml_path.read_text()) or {}
            if not isinstance(data, dict):
                data = {}
        except yaml.YAMLError as exc:
            logger.warning("Ignoring unreadable %s: %s", yaml_path, exc)
            data = {}
        known = set(EXPORT_COLUMNS)
        for name, columns in (data.get("sets") or {}).items():
            if not isinstance(columns, list):
                continue
            cleaned = [c for c in columns if c in known]
            if cleaned:
                sets[name] = cleaned
    _CACHE = sets
    return _CACHE


def get_columns(set_name: str) -> list[str]:
    sets = load_column_sets()
    return sets.get(set_name, [])
