'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Callable, Collection, Dict, Optional

from nexusview.core.log import Log

__all__ = ["ExpansionStore", "MemoryBackend"]


class MemoryBackend:
    """Expansion flags kept in a plain dict (tests, headless runs)."""

    def __init__(self, flags: Optional[Dict[str, bool]] = None):
        self.flags: Dict[str, bool] = dict(flags or {})

    def get_expansion_flag(self, key: str) -> Optional[bool]:
        return self.flags.get(key)

    def set_expansion_flag(self, key: str, value: bool) -> None:
        self.flags[key] = bool(value)


class ExpansionStore:
    """
    Remembers which headers the user expanded or collapsed.

    A key with no stored flag uses the default supplied by the caller, so
    new groups appear in their natural state. While a search is active the
    renderer asks `force_expand_if_searching`, which opens matching groups
    without touching what is stored.
    """

    def __init__(self, backend=None, on_change: Optional[Callable[[str], None]] = None):
        self.backend = backend if backend is not None else MemoryBackend()
        self.on_change = on_change

    def is_expanded(self, key: str, default: bool = True) -> bool:
        value = self.backend.get_expansion_flag(key)
        return default if value is None else bool(value)

    def has_flag(self, key: str) -> bool:
        return self.backend.get_expansion_flag(key) is not None

    def set_expanded(self, key: str, value: bool, default: bool = True) -> bool:
        """Store the flag for `key`. Returns True if the effective state changed."""
        changed = self.is_expanded(key, default) != bool(value)
        self.backend.set_expansion_flag(key, bool(value))
        Log.debug(f"Expansion {key} -> {bool(value)}", 2)
        if changed and self.on_change is not None:
            self.on_change(key)
        return changed

    def toggle(self, key: str, default: bool = True) -> bool:
        """Flip the stored state of `key` and return the new value."""
        new_value = not self.is_expanded(key, default)
        self.set_expanded(key, new_value, default)
        return new_value

    def expand(self, key: str, default: bool = True) -> bool:
        return self.set_expanded(key, True, default)

    def collapse(self, key: str, default: bool = True) -> bool:
        return self.set_expanded(key, False, default)

    def force_expand_if_searching(
        self,
        key: str,
        is_search_active: bool,
        default: bool = True,
        matched_keys: Optional[Collection[str]] = None,
    ) -> bool:
        """
        Effective expanded state for this render pass.

        With an active search any group known to hold a match is open,
        regardless of the stored flag. Nothing is written back.
        """
        if is_search_active and (matched_keys is None or key in matched_keys):
            return True
        return self.is_expanded(key, default)
