'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, Dict, List

from nexusview.core.log import Log
from nexusview.ui.host import WidgetHost

__all__ = ["WidgetPool", "IDLE", "ACTIVE"]

IDLE = "idle"
ACTIVE = "active"


class WidgetPool:
    """
    Recycles row widgets between render passes.

    Rows are expensive to build on every toolkit we care about, and a full
    redraw happens on every toggle and search keystroke. Each row kind has
    its own idle list; a row is either idle (hidden, detached, no handlers)
    or active (attached to exactly one container). Headers and empty-state
    labels are not pooled; `release_all` only hides and detaches them.

    One pool lives for the whole application and is shared by every tab.
    """

    def __init__(self, host: WidgetHost):
        self.host = host
        self._idle: Dict[str, List[Any]] = {}
        self._constructed: Dict[str, int] = {}
        self._active: Dict[str, int] = {}
        self._peak: Dict[str, int] = {}

    # ------------------------------------------------------------------ #
    # acquire / release
    # ------------------------------------------------------------------ #

    def acquire(self, kind: str, construct: Callable[[Any], Any], parent: Any) -> Any:
        idle = self._idle.setdefault(kind, [])
        if idle:
            widget = idle.pop()
        else:
            widget = construct(parent)
            widget.pooled = True
            widget.pool_kind = kind
            self._constructed[kind] = self._constructed.get(kind, 0) + 1
            Log.debug(f"Pool: constructed {kind} row #{self._constructed[kind]}", 3)

        widget.pool_state = ACTIVE
        active = self._active.get(kind, 0) + 1
        self._active[kind] = active
        if active > self._peak.get(kind, 0):
            self._peak[kind] = active

        self.host.attach(widget, parent)
        self.host.show(widget)
        return widget

    def is_pooled(self, widget: Any) -> bool:
        return getattr(widget, "pooled", False) is True

    def release(self, widget: Any) -> bool:
        """
        Return an active row to its idle list. Returns False (and does
        nothing) for widgets the pool does not own or rows already idle.
        """
        if not self.is_pooled(widget):
            Log.debug(f"Pool: ignoring release of unpooled {widget!r}", 4)
            return False
        if getattr(widget, "pool_state", None) != ACTIVE:
            Log.debug(f"Pool: ignoring double release of {widget.pool_kind} row", 4)
            return False

        kind = widget.pool_kind
        self.host.unbind_all(widget)
        self.host.clear_fields(widget)
        self.host.hide(widget)
        self.host.detach(widget)
        widget.pool_state = IDLE
        self._active[kind] = self._active.get(kind, 1) - 1
        self._idle.setdefault(kind, []).append(widget)
        return True

    def release_all(self, container: Any) -> int:
        """
        Clear `container` for a new pass: pooled rows go back to the pool,
        anything else (headers, labels) is hidden and detached.
        """
        released = 0
        for child in self.host.children(container):
            if self.is_pooled(child):
                if self.release(child):
                    released += 1
            else:
                self.host.unbind_all(child)
                self.host.hide(child)
                self.host.detach(child)
        return released

    # ------------------------------------------------------------------ #
    # statistics
    # ------------------------------------------------------------------ #

    def constructed(self, kind: str) -> int:
        return self._constructed.get(kind, 0)

    def idle_count(self, kind: str) -> int:
        return len(self._idle.get(kind, ()))

    def active_count(self, kind: str) -> int:
        return self._active.get(kind, 0)

    def stats(self) -> Dict[str, Dict[str, int]]:
        kinds = set(self._constructed) | set(self._idle)
        return {
            kind: {
                "constructed": self.constructed(kind),
                "idle": self.idle_count(kind),
                "active": self.active_count(kind),
                "peak": self._peak.get(kind, 0),
            }
            for kind in sorted(kinds)
        }
