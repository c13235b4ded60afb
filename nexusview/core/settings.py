'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional

from nexusview.core.jsonio import read_json, atomic_write_json
from nexusview.core.log import Log

__all__ = ["Settings", "NamespaceBackend", "DEFAULTS", "EXPANSION_NAMESPACES"]

EXPANSION_NAMESPACES = (
    "currencyExpanded",
    "itemsExpanded",
    "storageExpanded",
    "reputationExpanded",
)

DEFAULTS: Dict[str, Any] = {
    "currencyFilterMode": "filtered",    # "filtered" | "nonfiltered"
    "currencyShowZero": True,
    "itemsSubTab": "warband",            # "warband" | "personal" | "guild"
    "lastTab": "currency",
    **{ns: {} for ns in EXPANSION_NAMESPACES},
}

CHOICES: Dict[str, tuple] = {
    "currencyFilterMode": ("filtered", "nonfiltered"),
    "itemsSubTab": ("warband", "personal", "guild"),
    "lastTab": ("currency", "items", "storage", "reputation"),
}


class Settings:
    """
    The user's profile: view toggles plus one expansion-flag map per tab.

    Stored as a single JSON object. Unknown keys found on disk are kept and
    written back untouched; known keys with values outside their allowed set
    fall back to the default.
    """

    def __init__(self, path: Optional[str] = None):
        self.path: Optional[Path] = Path(path).expanduser() if path else None
        self._data: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._dirty = False

    # ------------------------------------------------------------------ #
    # load / save
    # ------------------------------------------------------------------ #

    def load(self) -> "Settings":
        if self.path is None:
            return self
        raw = read_json(self.path, {})
        if not isinstance(raw, dict):
            raise ValueError(f"Settings file {self.path} must contain a JSON object")
        data = copy.deepcopy(DEFAULTS)
        data.update(raw)
        for name, allowed in CHOICES.items():
            if data.get(name) not in allowed:
                Log.debug(f"Ignoring invalid {name}={data.get(name)!r}", 0)
                data[name] = DEFAULTS[name]
        for ns in EXPANSION_NAMESPACES:
            if not isinstance(data.get(ns), dict):
                data[ns] = {}
        self._data = data
        self._dirty = False
        Log.debug(f"Loaded settings from {self.path}", 1)
        return self

    def save(self, force: bool = False) -> bool:
        """Write the profile if it changed. Returns True when a write happened."""
        if self.path is None or not (self._dirty or force):
            return False
        atomic_write_json(self.path, self._data)
        self._dirty = False
        Log.debug(f"Saved settings to {self.path}", 1)
        return True

    @property
    def dirty(self) -> bool:
        return self._dirty

    # ------------------------------------------------------------------ #
    # scalar options
    # ------------------------------------------------------------------ #

    def get(self, name: str, default: Any = None) -> Any:
        if name in self._data:
            return self._data[name]
        return DEFAULTS.get(name, default)

    def set(self, name: str, value: Any) -> None:
        allowed = CHOICES.get(name)
        if allowed is not None and value not in allowed:
            raise ValueError(f"{name} must be one of {allowed}, not {value!r}")
        if self._data.get(name) != value:
            self._data[name] = value
            self._dirty = True

    # ------------------------------------------------------------------ #
    # expansion flags
    # ------------------------------------------------------------------ #

    def _namespace(self, namespace: str) -> Dict[str, bool]:
        if namespace not in EXPANSION_NAMESPACES:
            raise KeyError(f"Unknown expansion namespace: {namespace!r}")
        return self._data.setdefault(namespace, {})

    def get_expansion_flag(self, namespace: str, key: str) -> Optional[bool]:
        value = self._namespace(namespace).get(key)
        return None if value is None else bool(value)

    def set_expansion_flag(self, namespace: str, key: str, value: bool) -> None:
        flags = self._namespace(namespace)
        if flags.get(key) is not bool(value):
            flags[key] = bool(value)
            self._dirty = True

    def backend(self, namespace: str) -> "NamespaceBackend":
        self._namespace(namespace)
        return NamespaceBackend(self, namespace)


class NamespaceBackend:
    """Expansion-store backend bound to one namespace of a Settings profile."""

    __slots__ = ("settings", "namespace")

    def __init__(self, settings: Settings, namespace: str):
        self.settings = settings
        self.namespace = namespace

    def get_expansion_flag(self, key: str) -> Optional[bool]:
        return self.settings.get_expansion_flag(self.namespace, key)

    def set_expansion_flag(self, key: str, value: bool) -> None:
        self.settings.set_expansion_flag(self.namespace, key, value)
