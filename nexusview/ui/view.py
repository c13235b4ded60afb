'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from nexusview.core.log import Log
from nexusview.core.models import Entity
from nexusview.core.settings import Settings
from nexusview.ui.constants import EMPTY_HINT, EMPTY_TITLE
from nexusview.ui.expansion import ExpansionStore
from nexusview.ui.host import WidgetHost
from nexusview.ui.pool import WidgetPool
from nexusview.ui.renderer import RenderPlan, TreeRenderer
from nexusview.ui.tabs import Tab, make_tabs
from nexusview.ui.types import GroupNode, Leaves

__all__ = ["TabView"]


class TabView:
    """
    Owns the long-lived services (pool, per-tab expansion stores, renderer)
    and redraws the current tab on request.

    `render_tab(container)` is the single entry point hosts call: when the
    tab becomes visible, when data changes, when the debounced search text
    is committed and after a header toggle. It always returns a height.
    """

    def __init__(
        self,
        host: WidgetHost,
        source,
        settings: Optional[Settings] = None,
        tabs: Optional[Dict[str, Tab]] = None,
        on_activate: Optional[Callable[[Entity], None]] = None,
        on_rendered: Optional[Callable[[str, int], None]] = None,
    ):
        self.host = host
        self.source = source
        self.settings = settings if settings is not None else Settings()
        self.tabs = tabs if tabs is not None else make_tabs()
        self.pool = WidgetPool(host)
        self.renderer = TreeRenderer(host, self.pool, on_activate=on_activate)
        self.on_rendered = on_rendered

        self.stores: Dict[str, ExpansionStore] = {
            name: ExpansionStore(self.settings.backend(tab.namespace), on_change=self._on_expansion_changed)
            for name, tab in self.tabs.items()
        }
        self.search_text: Dict[str, str] = {name: "" for name in self.tabs}

        last = self.settings.get("lastTab", "currency")
        self.current = last if last in self.tabs else next(iter(self.tabs))
        self.container: Any = None
        self.last_height = 0
        self._rendering = False
        self._pending = False

    # ------------------------------------------------------------------ #
    # state changes
    # ------------------------------------------------------------------ #

    @property
    def tab(self) -> Tab:
        return self.tabs[self.current]

    @property
    def store(self) -> ExpansionStore:
        return self.stores[self.current]

    def set_tab(self, name: str) -> int:
        if name not in self.tabs:
            raise KeyError(f"Unknown tab: {name!r}")
        if name != self.current:
            self.current = name
            self.settings.set("lastTab", name)
        return self.refresh()

    def set_search(self, text: str, tab: Optional[str] = None) -> int:
        """Commit search text for `tab` (default: the current tab) and redraw."""
        name = tab or self.current
        self.search_text[name] = text or ""
        return self.refresh() if name == self.current else self.last_height

    def set_source(self, source) -> int:
        self.source = source
        return self.refresh()

    def set_option(self, name: str, value) -> int:
        self.settings.set(name, value)
        return self.refresh()

    def toggle(self, key: str, default: bool = True) -> bool:
        return self.store.toggle(key, default)

    def _on_expansion_changed(self, key: str) -> None:
        self.refresh()

    # ------------------------------------------------------------------ #
    # rendering
    # ------------------------------------------------------------------ #

    def render_tab(self, container: Any) -> int:
        """Draw the current tab into `container`; returns the content height."""
        self.container = container
        if self._rendering:
            # A toggle fired while a pass is running; redraw once it ends.
            self._pending = True
            return self.last_height

        self._rendering = True
        try:
            while True:
                self._pending = False
                self.last_height = self._render_once(container)
                if not self._pending:
                    break
        finally:
            self._rendering = False

        if self.on_rendered is not None:
            self.on_rendered(self.current, self.last_height)
        return self.last_height

    def refresh(self) -> int:
        if self.container is None:
            return self.last_height
        return self.render_tab(self.container)

    def _render_once(self, container: Any) -> int:
        tab = self.tab
        try:
            plan = tab.plan(self.source, self.settings, self.search_text[tab.name], self.stores[tab.name])
        except Exception as e:
            Log.debug(f"Could not build {tab.name} tree: {e!r}", 0)
            return self.renderer.render(container, _empty_plan(tab))
        return self.renderer.render(container, plan)


def _empty_plan(tab: Tab) -> RenderPlan:
    # Built by hand: the tab's own build() is what just failed.
    return RenderPlan(
        root=GroupNode(key=tab.name, label="", children=Leaves(), level=-1),
        row_kind=tab.row_kind,
        empty_title=EMPTY_TITLE.get(tab.name, ""),
        empty_text=EMPTY_HINT.get(tab.name, ""),
    )
