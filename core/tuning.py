"""core/tuning.py — Data-driven tuning constants.

Gameplay numbers live in ``data/tuning.toml`` and are loaded once at
startup.  Any system can read a value with::

    from core.tuning import get
    speed = get("enemy", "max_speed", 2.5)

Every call site passes its own default, so a missing file or key never
breaks the game — it just plays with the built-in numbers.

Hot-reload: call ``reload()`` to re-read the file.  In-game, press F4.
"""

from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        path = Path(__file__).resolve().parent.parent / "data" / "tuning.toml"
    path = Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)
    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def override(section_path: str, key: str, value: Any) -> None:
    """Set a value in memory only (tests, debug console)."""
    node = _data
    for part in section_path.split("."):
        node = node.setdefault(part, {})
    node[key] = value


def clear() -> None:
    """Forget every loaded value; all reads fall back to defaults."""
    _data.clear()


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"ai.routing"`` looks up ``[ai.routing]``.

    >>> get("enemy", "max_speed", 2.5)
    2.5
    """
    table = _lookup(section)
    if table is None:
        return default
    return table.get(key, default)


def _lookup(section_path: str) -> dict | None:
    node: Any = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def _count_leaves(d: dict) -> int:
    return sum(_count_leaves(v) if isinstance(v, dict) else 1 for v in d.values())
