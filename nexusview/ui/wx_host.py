'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import wx
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from nexusview.core.log import Log
from nexusview.ui.constants import HEADER_BG, ROW_BG_HOVER, TEXT_DIM, TEXT_NORMAL
from nexusview.ui.host import EVENTS, WidgetHost

__all__ = ["WxHost", "WxNode"]

# Label slots per widget role, left to right.
SLOTS = {
    "row": ("quantity", "text", "status", "right"),
    "header": ("arrow", "text"),
    "label": ("title", "text"),
}

# field name -> slot whose foreground it colours
COLOR_FIELDS = {
    "text_color": "text",
    "status_color": "status",
    "right_color": "right",
}


def _colour(value) -> wx.Colour:
    if isinstance(value, wx.Colour):
        return value
    return wx.Colour(str(value))


class WxNode(wx.Panel):
    """A row, header or label: a panel holding a few static text slots."""

    def __init__(self, parent: wx.Window, role: str, kind: Optional[str] = None):
        super().__init__(parent)
        self.role = role
        self.kind = kind
        self.nv_attached = True
        self.nv_handlers: Dict[str, Tuple[Callable, tuple]] = {}
        self.slots: Dict[str, wx.StaticText] = {}
        self.gauge: Optional[wx.Gauge] = None
        self.bg: Optional[str] = None

        sizer = wx.BoxSizer(wx.HORIZONTAL if role != "label" else wx.VERTICAL)
        for name in SLOTS[role]:
            style = wx.ALIGN_RIGHT if name == "right" else 0
            label = wx.StaticText(self, label="", style=style | wx.ST_NO_AUTORESIZE)
            self.slots[name] = label
            proportion = 1 if name == "text" else 0
            sizer.Add(label, proportion, wx.ALIGN_CENTER_VERTICAL | wx.LEFT | wx.RIGHT, 4)
        if kind == "reputation":
            self.gauge = wx.Gauge(self, range=1000, size=(120, 10))
            sizer.Insert(2, self.gauge, 0, wx.ALIGN_CENTER_VERTICAL | wx.LEFT | wx.RIGHT, 4)
        if role == "header":
            bold = self.GetFont().Bold()
            self.slots["text"].SetFont(bold)
            self.SetBackgroundColour(_colour(HEADER_BG))
        self.SetSizer(sizer)

        for window in [self] + list(self.GetChildren()):
            window.Bind(wx.EVT_LEFT_UP, self._on_click)
            window.Bind(wx.EVT_ENTER_WINDOW, self._on_enter)
            window.Bind(wx.EVT_LEAVE_WINDOW, self._on_leave)

    # -- generic dispatch ----------------------------------------------
    def fire(self, event_name: str) -> None:
        bound = self.nv_handlers.get(event_name)
        if bound is not None:
            handler, args = bound
            handler(*args)

    def _on_click(self, event):
        event.Skip()
        self.fire("click")

    def _on_enter(self, event):
        event.Skip()
        if self.role == "row":
            self.SetBackgroundColour(_colour(ROW_BG_HOVER))
            self.Refresh()
        self.fire("enter")

    def _on_leave(self, event):
        event.Skip()
        # Moving between the panel and its own labels is not a leave.
        pos = self.ScreenToClient(wx.GetMousePosition())
        if not self.GetClientRect().Contains(pos):
            if self.role == "row" and self.bg:
                self.SetBackgroundColour(_colour(self.bg))
                self.Refresh()
            self.fire("leave")

    # -- content -------------------------------------------------------
    def apply(self, fields: Dict[str, Any]) -> None:
        for name, label in self.slots.items():
            if name in fields and name != "arrow":
                value = fields[name]
                label.SetLabel("" if value is None else str(value))
        if "expanded" in fields and "arrow" in self.slots:
            self.slots["arrow"].SetLabel("▼" if fields["expanded"] else "▶")
        for field, slot in COLOR_FIELDS.items():
            if field in fields and slot in self.slots and fields[field]:
                self.slots[slot].SetForegroundColour(_colour(fields[field]))
        if fields.get("dimmed") and "text" in self.slots and "text_color" not in fields:
            self.slots["text"].SetForegroundColour(_colour(TEXT_DIM))
        if fields.get("bg"):
            self.bg = fields["bg"]
            self.SetBackgroundColour(_colour(self.bg))
        if self.gauge is not None and "progress" in fields:
            self.gauge.SetValue(int(round(float(fields["progress"] or 0) * 1000)))
        self.Layout()
        self.Refresh()

    def reset(self) -> None:
        for label in self.slots.values():
            label.SetLabel("")
            label.SetForegroundColour(_colour(TEXT_NORMAL))
        if self.gauge is not None:
            self.gauge.SetValue(0)
        self.UnsetToolTip()


class WxHost(WidgetHost):
    """
    Widget host for a wx.ScrolledWindow.

    Headers and empty-state labels are throwaway: detaching one hides it and
    destroys it after the current event finishes, since the click that
    triggered the redraw may still be running on it.
    """

    def __init__(self, root: wx.ScrolledWindow):
        self.root = root
        self._tooltip_owner: Optional[WxNode] = None
        self.root.SetScrollRate(0, 20)

    # -- construction --------------------------------------------------
    def create_container(self, width: int = 0) -> wx.ScrolledWindow:
        return self.root

    def create_row(self, parent, kind: str) -> WxNode:
        node = WxNode(parent, "row", kind)
        node.Hide()
        return node

    def create_header(self, parent) -> WxNode:
        node = WxNode(parent, "header")
        node.Hide()
        return node

    def create_label(self, parent) -> WxNode:
        node = WxNode(parent, "label")
        node.Hide()
        return node

    # -- tree ----------------------------------------------------------
    def children(self, container) -> List[WxNode]:
        return [c for c in container.GetChildren() if isinstance(c, WxNode) and c.nv_attached]

    def attach(self, widget: WxNode, parent) -> None:
        if widget.GetParent() is not parent:
            widget.Reparent(parent)
        widget.nv_attached = True

    def detach(self, widget: WxNode) -> None:
        widget.nv_attached = False
        widget.Hide()
        if not getattr(widget, "pooled", False):
            wx.CallAfter(widget.Destroy)

    def width(self, container) -> int:
        return container.GetClientSize().width

    # -- geometry / visibility -----------------------------------------
    def place(self, widget: WxNode, x: int, y: int, width: int, height: int) -> None:
        parent = widget.GetParent()
        sx, sy = parent.CalcScrolledPosition(x, y) if isinstance(parent, wx.ScrolledWindow) else (x, y)
        widget.SetSize(sx, sy, width, height)

    def show(self, widget: WxNode) -> None:
        widget.Show()

    def hide(self, widget: WxNode) -> None:
        widget.Hide()

    def set_content_height(self, container, height: int) -> None:
        container.SetVirtualSize((self.width(container), height))
        container.Refresh()

    # -- content -------------------------------------------------------
    def set_fields(self, widget: WxNode, **fields: Any) -> None:
        widget.apply(fields)

    def clear_fields(self, widget: WxNode) -> None:
        widget.reset()

    # -- events --------------------------------------------------------
    def bind(self, widget: WxNode, event: str, handler: Callable, *args: Any) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event {event!r}")
        widget.nv_handlers[event] = (handler, args)

    def unbind_all(self, widget: WxNode) -> None:
        widget.nv_handlers.clear()

    def show_tooltip(self, widget: WxNode, lines: Sequence[str]) -> None:
        self._tooltip_owner = widget
        widget.SetToolTip("\n".join(lines))

    def hide_tooltip(self) -> None:
        owner, self._tooltip_owner = self._tooltip_owner, None
        if owner is not None and owner.nv_attached:
            try:
                owner.UnsetToolTip()
            except RuntimeError as e:
                # wrapped C++ object already deleted
                Log.debug(f"Tooltip owner gone: {e}", 3)
