'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from nexusview.ui.host import EVENTS, WidgetHost

__all__ = ["HeadlessHost", "Widget"]


class Widget:
    """In-memory stand-in for a toolkit widget."""

    def __init__(self, role: str, kind: Optional[str] = None):
        self.role = role                 # "container" | "row" | "header" | "label"
        self.kind = kind
        self.parent: Optional["Widget"] = None
        self.children: List["Widget"] = []
        self.visible = False
        self.rect: Tuple[int, int, int, int] = (0, 0, 0, 0)
        self.fields: Dict[str, Any] = {}
        self.handlers: Dict[str, Tuple[Callable, tuple]] = {}
        self.width = 0

    @property
    def y(self) -> int:
        return self.rect[1]

    def __repr__(self):
        return f"<Widget {self.role}:{self.kind} y={self.rect[1]} {self.fields.get('text', '')!r}>"


class HeadlessHost(WidgetHost):
    """
    Widget host without a toolkit.

    Used by the test-suite and by `--headless` runs. Keeps counters of how
    many widgets were created so pool behaviour can be checked, and can
    replay clicks / hovers against bound handlers.
    """

    def __init__(self, width: int = 600):
        self.default_width = width
        self.created: Dict[str, int] = {}
        self.tooltip: Optional[List[str]] = None
        self.tooltip_owner: Optional[Widget] = None

    def _new(self, role: str, kind: Optional[str] = None) -> Widget:
        self.created[role] = self.created.get(role, 0) + 1
        return Widget(role, kind)

    # -- construction --------------------------------------------------
    def create_container(self, width: int = 0) -> Widget:
        w = self._new("container")
        w.width = width or self.default_width
        w.visible = True
        return w

    def create_row(self, parent: Widget, kind: str) -> Widget:
        return self._new("row", kind)

    def create_header(self, parent: Widget) -> Widget:
        w = self._new("header")
        self.attach(w, parent)
        return w

    def create_label(self, parent: Widget) -> Widget:
        w = self._new("label")
        self.attach(w, parent)
        return w

    # -- tree ----------------------------------------------------------
    def children(self, container: Widget) -> List[Widget]:
        return list(container.children)

    def attach(self, widget: Widget, parent: Widget) -> None:
        if widget.parent is parent:
            return
        if widget.parent is not None:
            self.detach(widget)
        widget.parent = parent
        parent.children.append(widget)

    def detach(self, widget: Widget) -> None:
        if widget.parent is not None:
            widget.parent.children.remove(widget)
            widget.parent = None

    def width(self, container: Widget) -> int:
        return container.width

    # -- geometry / visibility -----------------------------------------
    def place(self, widget: Widget, x: int, y: int, width: int, height: int) -> None:
        widget.rect = (x, y, width, height)

    def show(self, widget: Widget) -> None:
        widget.visible = True

    def hide(self, widget: Widget) -> None:
        widget.visible = False

    def set_content_height(self, container: Widget, height: int) -> None:
        container.fields["content_height"] = height

    # -- content -------------------------------------------------------
    def set_fields(self, widget: Widget, **fields: Any) -> None:
        widget.fields.update(fields)

    def clear_fields(self, widget: Widget) -> None:
        widget.fields.clear()

    # -- events --------------------------------------------------------
    def bind(self, widget: Widget, event: str, handler: Callable, *args: Any) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event {event!r}")
        widget.handlers[event] = (handler, args)

    def unbind_all(self, widget: Widget) -> None:
        widget.handlers.clear()

    def show_tooltip(self, widget: Widget, lines: Sequence[str]) -> None:
        self.tooltip = list(lines)
        self.tooltip_owner = widget

    def hide_tooltip(self) -> None:
        self.tooltip = None
        self.tooltip_owner = None

    # ------------------------------------------------------------------ #
    # replay helpers
    # ------------------------------------------------------------------ #

    def fire(self, widget: Widget, event: str) -> bool:
        bound = widget.handlers.get(event)
        if bound is None:
            return False
        handler, args = bound
        handler(*args)
        return True

    def click(self, widget: Widget) -> bool:
        return self.fire(widget, "click")

    def hover(self, widget: Widget) -> bool:
        return self.fire(widget, "enter")

    def leave(self, widget: Widget) -> bool:
        return self.fire(widget, "leave")

    # ------------------------------------------------------------------ #
    # inspection
    # ------------------------------------------------------------------ #

    def visible_children(self, container: Widget) -> List[Widget]:
        return sorted((w for w in container.children if w.visible), key=lambda w: (w.rect[1], w.rect[0]))

    def find(self, container: Widget, text: str) -> Optional[Widget]:
        """First visible child whose text starts with `text`."""
        for w in self.visible_children(container):
            if str(w.fields.get("text", "")).startswith(text):
                return w
        return None

    def dump(self, container: Widget) -> str:
        """Text picture of the visible widgets, one per line."""
        lines = []
        for w in self.visible_children(container):
            indent = "  " * int(w.fields.get("level", 0))
            if w.role == "header":
                mark = "-" if w.fields.get("expanded") else "+"
                lines.append(f"{w.rect[1]:5d} {indent}[{mark}] {w.fields.get('text', '')}")
            elif w.role == "row":
                right = w.fields.get("right", "")
                right = f"  {right}" if right else ""
                lines.append(f"{w.rect[1]:5d} {indent}    {w.fields.get('text', '')}{right}")
            else:
                lines.append(f"{w.rect[1]:5d} {indent}{w.fields.get('title', '')} {w.fields.get('text', '')}".rstrip())
        return "\n".join(lines)
