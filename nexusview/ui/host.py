'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, List, Sequence

__all__ = ["WidgetHost", "EVENTS"]

EVENTS = ("click", "enter", "leave")


class WidgetHost:
    """
    The toolkit side of the renderer.

    The renderer and the pool only ever talk to widgets through this
    interface, so the same tree code drives the wx front end and the
    in-memory host used by the tests. Widgets returned by the create_*
    methods must accept arbitrary attributes; the pool tags rows with
    `pooled`, `pool_kind` and `pool_state`.

    Handlers are bound as (handler, args): the host calls handler(*args)
    when the event fires.
    """

    # -- construction --------------------------------------------------
    def create_container(self, width: int = 600) -> Any:
        raise NotImplementedError

    def create_row(self, parent: Any, kind: str) -> Any:
        raise NotImplementedError

    def create_header(self, parent: Any) -> Any:
        raise NotImplementedError

    def create_label(self, parent: Any) -> Any:
        raise NotImplementedError

    # -- tree ----------------------------------------------------------
    def children(self, container: Any) -> List[Any]:
        raise NotImplementedError

    def attach(self, widget: Any, parent: Any) -> None:
        raise NotImplementedError

    def detach(self, widget: Any) -> None:
        raise NotImplementedError

    def width(self, container: Any) -> int:
        raise NotImplementedError

    # -- geometry / visibility -----------------------------------------
    def place(self, widget: Any, x: int, y: int, width: int, height: int) -> None:
        raise NotImplementedError

    def show(self, widget: Any) -> None:
        raise NotImplementedError

    def hide(self, widget: Any) -> None:
        raise NotImplementedError

    def set_content_height(self, container: Any, height: int) -> None:
        """Size the scrollable area; optional for hosts without scrolling."""

    # -- content -------------------------------------------------------
    def set_fields(self, widget: Any, **fields: Any) -> None:
        raise NotImplementedError

    def clear_fields(self, widget: Any) -> None:
        raise NotImplementedError

    # -- events --------------------------------------------------------
    def bind(self, widget: Any, event: str, handler: Callable, *args: Any) -> None:
        raise NotImplementedError

    def unbind_all(self, widget: Any) -> None:
        raise NotImplementedError

    def show_tooltip(self, widget: Any, lines: Sequence[str]) -> None:
        raise NotImplementedError

    def hide_tooltip(self) -> None:
        raise NotImplementedError
