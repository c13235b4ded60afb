'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, List, Optional, Sequence, Set

from nexusview.core.log import Log
from nexusview.core.models import Entity
from nexusview.ui.constants import (
    EMPTY_TITLE,
    HEADER_HEIGHT,
    INDENT_W,
    LEFT_MARGIN,
    NO_RESULTS_TITLE,
    RIGHT_MARGIN,
    ROW_HEIGHT,
    TOP_PADDING,
)
from nexusview.ui.expansion import ExpansionStore
from nexusview.ui.host import WidgetHost
from nexusview.ui.layout import LayoutCursor
from nexusview.ui.pool import WidgetPool
from nexusview.ui.rows import RowPopulator, populator_for
from nexusview.ui.search import SearchFilter, normalize_query
from nexusview.ui.types import Emitted, GroupNode, Leaf

__all__ = ["RenderPlan", "TreeRenderer"]


@dataclass
class RenderPlan:
    """Everything one pass needs besides the long-lived services."""
    root: GroupNode
    row_kind: str
    query: str = ""
    search: SearchFilter = field(default_factory=SearchFilter)
    empty_title: str = ""
    empty_text: str = ""
    top: int = TOP_PADDING
    gap_after_top_level: str = "gap"       # layout step kind, "" for none
    store: Optional[ExpansionStore] = None


@dataclass
class _Pass:
    container: Any
    plan: RenderPlan
    store: ExpansionStore
    cursor: LayoutCursor
    query: str
    searching: bool
    visible: Set[str]
    populator: RowPopulator
    width: int


class TreeRenderer:
    """
    Draws a group tree into a container, top to bottom.

    Every pass starts from scratch: pooled rows from the previous pass are
    released, headers are hidden and detached, and the tree is walked depth
    first. Headers toggle through one shared handler, `toggle(store, key,
    default)`; nothing captures per-node state in a closure.

    A pass never raises. A node whose emission fails is logged and skipped,
    and the walk continues with its siblings.
    """

    def __init__(
        self,
        host: WidgetHost,
        pool: WidgetPool,
        store: Optional[ExpansionStore] = None,
        on_activate: Optional[Callable[[Entity], None]] = None,
    ):
        self.host = host
        self.pool = pool
        self.store = store if store is not None else ExpansionStore()
        self.on_activate = on_activate
        self.emitted: List[Emitted] = []
        self.cursor: Optional[LayoutCursor] = None
        self.errors = 0

    # ------------------------------------------------------------------ #
    # public entry
    # ------------------------------------------------------------------ #

    def render(self, container: Any, plan: RenderPlan) -> int:
        """Clear `container`, draw `plan` into it and return the content height."""
        Log.reset_once()
        self.emitted = []
        self.errors = 0
        cursor = LayoutCursor(plan.top)
        self.cursor = cursor

        try:
            self.pool.release_all(container)
            self.host.hide_tooltip()

            query = normalize_query(plan.query)
            ctx = _Pass(
                container=container,
                plan=plan,
                store=plan.store if plan.store is not None else self.store,
                cursor=cursor,
                query=query,
                searching=bool(query),
                visible=set(),
                populator=populator_for(plan.row_kind),
                width=self.host.width(container),
            )

            if plan.root.leaf_count() == 0:
                self._emit_empty(ctx, plan.empty_title or EMPTY_TITLE.get(plan.row_kind, "Nothing to show"),
                                 plan.empty_text)
            else:
                ctx.visible = plan.search.annotate_tree(plan.root, query)
                if ctx.searching and plan.root.key not in ctx.visible:
                    self._emit_empty(ctx, NO_RESULTS_TITLE, f"No results for '{plan.query.strip()}'")
                else:
                    for child in plan.root.child_groups():
                        if self._walk(child, 0, ctx) and plan.gap_after_top_level:
                            cursor.advance_for(plan.gap_after_top_level)
                    self._emit_root_leaves(plan.root, ctx)
        except Exception as e:
            self.errors += 1
            Log.debug(f"Render pass aborted: {e!r}", 0)

        height = cursor.content_height()
        self.host.set_content_height(container, height)
        Log.debug(f"Rendered {len(self.emitted)} nodes, height {height}px", 3)
        return height

    def toggle(self, store: ExpansionStore, key: str, default: bool) -> None:
        """Header / parent-row click handler. The store's on_change triggers the redraw."""
        store.toggle(key, default)

    def show_tooltip(self, widget: Any, populator: RowPopulator, entity: Entity) -> None:
        self.host.show_tooltip(widget, populator.tooltip(entity))

    def hide_tooltip(self) -> None:
        self.host.hide_tooltip()

    def activate(self, entity: Entity) -> None:
        if self.on_activate is not None:
            self.on_activate(entity)
        else:
            Log.debug(f"Activated {entity.kind} {entity.entity_id}", 2)

    # ------------------------------------------------------------------ #
    # walk
    # ------------------------------------------------------------------ #

    def _walk(self, node: GroupNode, depth: int, ctx: _Pass) -> bool:
        """Emit `node` and, when expanded, its contents. Returns False if nothing was drawn."""
        if ctx.searching and node.key not in ctx.visible:
            return False
        try:
            count = ctx.plan.search.count(node, ctx.query)
            if count == 0:
                return False
            expanded = ctx.store.force_expand_if_searching(
                node.key, ctx.searching, node.default_expanded, ctx.visible)
            self._emit_header(node, depth, count, expanded, ctx)
        except Exception as e:
            self._node_failed(node.key, e)
            return False

        if not expanded:
            return True

        self._emit_leaves(node.leaves(), depth + 1, ctx)
        for child in node.child_groups():
            self._walk(child, depth + 1, ctx)
        return True

    def _emit_root_leaves(self, root: GroupNode, ctx: _Pass) -> None:
        # A tree built with no levels has its rows directly under the root.
        self._emit_leaves(root.leaves(), 0, ctx)

    def _emit_leaves(self, leaves: Sequence[Leaf], depth: int, ctx: _Pass) -> None:
        search = ctx.plan.search
        index = 0
        for leaf in leaves:
            if ctx.searching and not search.matches(leaf.entity, ctx.query):
                # matching sub-rows stand in for a parent row that does not match
                for child in search.visible_children(leaf, ctx.query):
                    self._emit_row(child, depth, index, ctx)
                    index += 1
                continue
            self._emit_leaf(leaf, depth, index, ctx)
            index += 1

    # ------------------------------------------------------------------ #
    # emitters
    # ------------------------------------------------------------------ #

    def _indent(self, depth: int) -> int:
        return LEFT_MARGIN + depth * INDENT_W

    def _node_width(self, ctx: _Pass, x: int) -> int:
        return max(0, ctx.width - x - RIGHT_MARGIN)

    def _record(self, ctx: _Pass, kind: str, key: str, depth: int, text: str) -> None:
        ctx.cursor.mark()
        self.emitted.append(Emitted(kind, key, depth, ctx.cursor.offset, text))

    def _emit_header(self, node: GroupNode, depth: int, count: int, expanded: bool, ctx: _Pass) -> None:
        text = node.title(node.label, count)
        header = self.host.create_header(ctx.container)
        x = self._indent(depth)
        self.host.place(header, x, ctx.cursor.offset, self._node_width(ctx, x), HEADER_HEIGHT)
        self.host.set_fields(header, text=text, icon=node.icon, text_color=node.color,
                             expanded=expanded, level=depth, key=node.key)
        self.host.bind(header, "click", self.toggle, ctx.store, node.key, node.default_expanded)
        self.host.show(header)
        self._record(ctx, "header", node.key, depth, text)
        ctx.cursor.advance_for("header")

    def _emit_row(self, entity: Entity, depth: int, index: int, ctx: _Pass, kind: str = "row",
                  toggle_key: Optional[str] = None, expanded: Optional[bool] = None) -> bool:
        populator = ctx.populator
        row = None
        try:
            fields, missing = populator.fields(entity, index)
            for name in missing:
                Log.once((populator.kind, name), f"{populator.kind} rows missing '{name}' "
                         f"(first: {entity.kind} {entity.entity_id})", 1)

            row = self.pool.acquire(populator.kind, partial(self.host.create_row, kind=populator.kind),
                                   ctx.container)
            x = self._indent(depth)
            self.host.place(row, x, ctx.cursor.offset, self._node_width(ctx, x), ROW_HEIGHT)
            self.host.set_fields(row, level=depth, expanded=expanded, **fields)
            self.host.bind(row, "enter", self.show_tooltip, row, populator, entity)
            self.host.bind(row, "leave", self.hide_tooltip)
            if toggle_key is not None:
                self.host.bind(row, "click", self.toggle, ctx.store, toggle_key, True)
            else:
                self.host.bind(row, "click", self.activate, entity)
        except Exception as e:
            if row is not None:
                self.pool.release(row)
            self._node_failed(f"{entity.kind}:{entity.entity_id}", e)
            return False

        self._record(ctx, kind, f"{entity.kind}:{entity.entity_id}", depth, fields["text"])
        ctx.cursor.advance_for(kind)
        return True

    def _emit_leaf(self, leaf: Leaf, depth: int, index: int, ctx: _Pass) -> None:
        if not leaf.children:
            self._emit_row(leaf.entity, depth, index, ctx)
            return

        expanded = ctx.store.force_expand_if_searching(leaf.key, ctx.searching, True, ctx.visible)
        if not self._emit_row(leaf.entity, depth, index, ctx, toggle_key=leaf.key, expanded=expanded):
            return
        if not expanded:
            return
        children = ctx.plan.search.visible_children(leaf, ctx.query)
        for i, child in enumerate(children):
            self._emit_row(child, depth + 1, i, ctx, kind="subrow")

    def _emit_empty(self, ctx: _Pass, title: str, text: str) -> None:
        label = self.host.create_label(ctx.container)
        x = self._indent(0)
        self.host.place(label, x, ctx.cursor.offset, self._node_width(ctx, x), HEADER_HEIGHT * 2)
        self.host.set_fields(label, title=title, text=text, level=0)
        self.host.show(label)
        self._record(ctx, "empty", "empty", 0, f"{title}: {text}" if text else title)
        ctx.cursor.advance_for("empty")

    def _node_failed(self, key: str, error: Exception) -> None:
        self.errors += 1
        Log.debug(f"Skipped {key}: {error!r}", 0)

    # ------------------------------------------------------------------ #
    # inspection
    # ------------------------------------------------------------------ #

    def node_at(self, y: int) -> Optional[Emitted]:
        """Emitted node covering content offset `y` in the last pass."""
        if self.cursor is None:
            return None
        i = self.cursor.find_node_at_y(y)
        if 0 <= i < len(self.emitted):
            return self.emitted[i]
        return None

    def keys(self, kind: Optional[str] = None) -> List[str]:
        return [e.key for e in self.emitted if kind is None or e.kind == kind]

    def outline(self) -> Sequence[tuple]:
        """(kind, key, level, y) of every emitted node; equal for equal inputs."""
        return [(e.kind, e.key, e.level, e.y) for e in self.emitted]
