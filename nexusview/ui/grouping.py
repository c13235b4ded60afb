'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from nexusview.core.models import Entity
from nexusview.ui.types import Groups, GroupNode, Leaf, Leaves, TitleFn, default_title

__all__ = ["GroupLevel", "WrapRule", "NestRule", "GroupBuilder", "build_tree", "sibling_order"]


@dataclass(frozen=True)
class WrapRule:
    """
    Push part of one group one level deeper.

    Inside the group whose value equals `parent_value` (every group when it
    is None), entities for which `matches` is true are taken out and placed
    in a synthetic sub-group labelled `label`, rendered after the group's
    regular children. The remaining levels apply inside it, using `order`
    for the next level when given.
    """
    matches: Callable[[Entity], bool]
    label: str
    segment: str
    parent_value: Optional[str] = None
    order: Sequence[str] = ()
    default_expanded: bool = True
    icon: Optional[str] = None

    def applies_to(self, value: str) -> bool:
        return self.parent_value is None or self.parent_value == value


@dataclass(frozen=True)
class NestRule:
    """Hang leaves under another leaf of the same group (faction -> sub-factions)."""
    is_parent: Callable[[Entity], bool]
    parent_name: Callable[[Entity], Optional[str]]
    segment: str = "sub"


@dataclass(frozen=True)
class GroupLevel:
    """
    One classification level of the tree.

    `classify` maps an entity to its group value (None or "" means
    `other_label`). Sibling order, in priority: the canonical `order` (any
    value not listed is folded into `other_label`, which goes last);
    first-appearance order when `appearance_order`; `sort_key`; otherwise
    case-insensitive alphabetical. Values in `pinned` always lead, in the
    order listed.
    """
    segment: str
    classify: Callable[[Entity], Optional[str]]
    order: Sequence[str] = ()
    appearance_order: bool = False
    pinned: Sequence[str] = ()
    sort_key: Optional[Callable[[str], Any]] = None
    other_label: str = "Other"
    label: Optional[Callable[[str], str]] = None
    default_expanded: Union[bool, Callable[[str], bool]] = True
    icon: Optional[Callable[[str], Optional[str]]] = None
    color: Optional[Callable[[str], Optional[str]]] = None
    title: TitleFn = default_title
    wrap: Optional[WrapRule] = None

    def value_of(self, entity: Entity, order: Sequence[str]) -> str:
        value = self.classify(entity)
        if value is None or value == "":
            return self.other_label
        value = str(value)
        if order and value not in order:
            return self.other_label
        return value

    def expanded_default(self, value: str) -> bool:
        if callable(self.default_expanded):
            return bool(self.default_expanded(value))
        return bool(self.default_expanded)


def sibling_order(values: Sequence[str], level: GroupLevel, order: Sequence[str]) -> List[str]:
    """Order the distinct group values of one level (given in first-appearance order)."""
    if level.pinned:
        head = [v for v in level.pinned if v in values]
        rest = _unpinned_order([v for v in values if v not in head], level, order)
        return head + rest
    return _unpinned_order(values, level, order)


def _unpinned_order(values: Sequence[str], level: GroupLevel, order: Sequence[str]) -> List[str]:
    if order:
        rank = {v: i for i, v in enumerate(order)}
        last = len(order)
        return sorted(values, key=lambda v: (1, last) if v == level.other_label and v not in rank
                      else (0, rank.get(v, last)))
    if level.appearance_order:
        return list(values)
    if level.sort_key is not None:
        return sorted(values, key=level.sort_key)
    return sorted(values, key=lambda v: (v.casefold(), v))


class GroupBuilder:
    """
    Partitions a flat entity list into a strictly nested group tree.

    Group keys are built from the parent key, the level segment and the
    group value, e.g. "currency-char-Alice-Realm-exp-The War Within", so
    they stay stable between passes and between sessions.
    """

    def __init__(
        self,
        levels: Sequence[GroupLevel],
        root_key: str,
        leaf_sort: Optional[Callable[[Entity], Any]] = None,
        nest: Optional[NestRule] = None,
    ):
        self.levels = tuple(levels)
        self.root_key = root_key
        self.leaf_sort = leaf_sort
        self.nest = nest

    def build(self, entities: Sequence[Entity], label: str = "") -> GroupNode:
        root = GroupNode(key=self.root_key, label=label, children=Leaves(), level=-1)
        root.children = self._children(list(entities), self.levels, 0, self.root_key, ())
        return root

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _children(self, entities: List[Entity], levels: Tuple[GroupLevel, ...],
                  depth: int, parent_key: str, order_override: Sequence[str]) -> Union[Groups, Leaves]:
        if not levels:
            return Leaves(self._leaves(entities, parent_key))

        level, rest = levels[0], levels[1:]
        order = tuple(order_override) or tuple(level.order)

        buckets: Dict[str, List[Entity]] = {}
        for entity in entities:
            buckets.setdefault(level.value_of(entity, order), []).append(entity)

        nodes = []
        for value in sibling_order(list(buckets), level, order):
            nodes.append(self._group(level, rest, value, buckets[value], depth, parent_key))
        return Groups(tuple(nodes))

    def _group(self, level: GroupLevel, rest: Tuple[GroupLevel, ...], value: str,
               members: List[Entity], depth: int, parent_key: str) -> GroupNode:
        key = f"{parent_key}-{level.segment}-{value}"

        wrapped_members: List[Entity] = []
        wrap = level.wrap
        if wrap is not None and wrap.applies_to(value):
            wrapped_members = [e for e in members if wrap.matches(e)]
            if wrapped_members:
                members = [e for e in members if not wrap.matches(e)]

        node = GroupNode(
            key=key,
            label=level.label(value) if level.label else value,
            children=self._children(members, rest, depth + 1, key, ()),
            default_expanded=level.expanded_default(value),
            icon=level.icon(value) if level.icon else None,
            color=level.color(value) if level.color else None,
            level=depth,
            value=value,
            title=level.title,
        )

        if wrapped_members:
            wkey = f"{key}-{wrap.segment}"
            node.wrapped = GroupNode(
                key=wkey,
                label=wrap.label,
                children=self._children(wrapped_members, rest, depth + 2, wkey, wrap.order),
                default_expanded=wrap.default_expanded,
                icon=wrap.icon,
                level=depth + 1,
                value=wrap.label,
            )
        return node

    def _leaves(self, entities: List[Entity], parent_key: str) -> Tuple[Leaf, ...]:
        if self.leaf_sort is not None:
            entities = sorted(entities, key=self.leaf_sort)
        if self.nest is None:
            return tuple(Leaf(e) for e in entities)

        nest = self.nest
        parents: Dict[str, Entity] = {}
        for e in entities:
            if nest.is_parent(e) and e.name:
                parents.setdefault(e.name, e)

        position = {id(e): i for i, e in enumerate(entities)}
        nested: Dict[int, List[Entity]] = {}
        top: List[Entity] = []
        for e in entities:
            anchor = self._anchor(e, parents, position)
            if anchor is e:
                top.append(e)
            else:
                nested.setdefault(id(anchor), []).append(e)

        leaves = []
        for e in top:
            kids = tuple(nested.get(id(e), ()))
            key = f"{parent_key}-{nest.segment}-{e.entity_id}" if kids else None
            leaves.append(Leaf(e, key, kids))
        return tuple(leaves)

    def _anchor(self, entity: Entity, parents: Dict[str, Entity], position: Dict[int, int]) -> Entity:
        """
        Top-level ancestor `entity` is listed under. Sub-factions of a
        sub-faction hang under the outermost parent. A parent chain that
        loops back on itself is anchored at its earliest listed member.
        """
        chain = [entity]
        seen = {id(entity): 0}
        while True:
            parent = parents.get(self.nest.parent_name(chain[-1]) or "")
            if parent is None:
                return chain[-1]
            if id(parent) in seen:
                loop = chain[seen[id(parent)]:]
                return min(loop, key=lambda e: position[id(e)])
            seen[id(parent)] = len(chain)
            chain.append(parent)


def build_tree(
    entities: Sequence[Entity],
    levels: Sequence[GroupLevel],
    root_key: str = "root",
    leaf_sort: Optional[Callable[[Entity], Any]] = None,
    nest: Optional[NestRule] = None,
) -> GroupNode:
    return GroupBuilder(levels, root_key, leaf_sort, nest).build(entities)
