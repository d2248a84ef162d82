"""
Settings Store.

The single JSON document shared by the agent and team registries
(``~/.tinyclaw/settings.json`` by default). Every write replaces the whole
file atomically, so readers never observe a truncated document.
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple, Union

from loguru import logger

from tinyclaw.errors import StoreCorrupt, StoreMissing

KeyPath = Union[str, Sequence[str]]


def atomic_write_text(path: Path, content: str) -> None:
    """
    Write ``content`` to a sibling temp file, then rename it over ``path``.

    Line endings are written as given and an existing file keeps its mode.
    """
    path = Path(path)
    with tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        encoding="utf-8",
        newline="",
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            if path.exists():
                os.chmod(tmp_path, stat.S_IMODE(path.stat().st_mode))
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(str(tmp_path), str(path))
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _split(key: KeyPath) -> Tuple[str, ...]:
    if isinstance(key, str):
        return tuple(p for p in key.split(".") if p)
    return tuple(str(p) for p in key)


class SettingsStore:
    """
    File-backed settings document.

    Reads go to disk every time; there is no cache to invalidate between
    registry operations. Sub-paths are dot-notation strings (``"teams.dev"``)
    or explicit sequences (``("agents", agent_id)``) when a key may contain
    dots.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Dict[str, Any]:
        if not self.exists():
            raise StoreMissing(self.path)
        text = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            raise StoreCorrupt(self.path, f"invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise StoreCorrupt(self.path, "top-level value must be an object")
        for section in ("agents", "teams"):
            if section in data and data[section] is not None and not isinstance(data[section], dict):
                raise StoreCorrupt(self.path, f"'{section}' must be an object")
        return data

    def save(self, data: Dict[str, Any]) -> None:
        atomic_write_text(self.path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
        logger.debug(f"Settings written to {self.path}")

    def get(self, key: KeyPath, default: Any = None) -> Any:
        value: Any = self.load()
        for part in _split(key):
            if isinstance(value, dict) and value.get(part) is not None:
                value = value[part]
            else:
                return default
        return value

    def section(self, name: str) -> Dict[str, Any]:
        """Return a top-level mapping such as ``agents``; missing or null is empty."""
        value = self.get((name,), {})
        return dict(value) if isinstance(value, dict) else {}

    def set(self, key: KeyPath, value: Any) -> None:
        parts = _split(key)
        if not parts:
            raise ValueError("set() needs a non-empty key path")
        data = self.load()
        node = data
        for part in parts[:-1]:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self.save(data)

    def delete(self, key: KeyPath) -> bool:
        """Remove a sub-path. Returns False (and writes nothing) if it was absent."""
        parts = _split(key)
        if not parts:
            raise ValueError("delete() needs a non-empty key path")
        data = self.load()
        node: Any = data
        for part in parts[:-1]:
            node = node.get(part) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                return False
        if parts[-1] not in node:
            return False
        del node[parts[-1]]
        self.save(data)
        return True
